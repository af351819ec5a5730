"""
Calendar API router.
Builds the year grid for a location/calendar selection.
"""

from fastapi import APIRouter, Depends

from app.config import Settings
from app.dependencies import get_app_settings, get_calendar_repository, get_holiday_provider
from app.schemas.grid import CalendarSelection, CellModelsResponse, YearGridResponse
from app.services.calendar_grid import build_year_grid, cell_render_model
from app.services.custom_calendars import CustomCalendarRepository
from app.services.holiday_provider import HolidayProvider
from app.services.selection import resolve_selection

router = APIRouter()


@router.post("/calendar/grid", response_model=YearGridResponse)
async def get_year_grid(
    selection: CalendarSelection,
    provider: HolidayProvider = Depends(get_holiday_provider),
    repository: CustomCalendarRepository = Depends(get_calendar_repository),
    settings: Settings = Depends(get_app_settings),
):
    """
    Full 12 x 31 grid for the selection.

    Keys are "month-day" with month 0-11. The resolved (colored) locations
    and calendars are echoed back so the client can draw a legend.
    """
    locations, calendars = resolve_selection(selection, repository, settings.default_theme)
    days = await build_year_grid(selection.year, locations, calendars, provider)

    return YearGridResponse(
        year=selection.year,
        locations=locations,
        calendars=calendars,
        days=days,
    )


@router.post("/calendar/cell-models", response_model=CellModelsResponse)
async def get_cell_models(
    selection: CalendarSelection,
    provider: HolidayProvider = Depends(get_holiday_provider),
    repository: CustomCalendarRepository = Depends(get_calendar_repository),
    settings: Settings = Depends(get_app_settings),
):
    """Render hints (shading, holiday marker) for every grid cell."""
    locations, calendars = resolve_selection(selection, repository, settings.default_theme)
    days = await build_year_grid(selection.year, locations, calendars, provider)

    return CellModelsResponse(
        year=selection.year,
        cells={key: cell_render_model(day) for key, day in days.items()},
    )
