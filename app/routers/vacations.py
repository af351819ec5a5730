"""
Vacations API router.
Vacation analysis, CSV export and the stored per-year date sets.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path
from fastapi.responses import Response

from app.config import Settings
from app.dependencies import (
    get_app_settings,
    get_calendar_repository,
    get_holiday_provider,
    get_vacation_store,
)
from app.exceptions import ValidationError
from app.schemas.grid import YearGrid
from app.schemas.vacation import (
    VacationDatesRequest,
    VacationDatesResponse,
    VacationRangeRequest,
    VacationRangeResponse,
    VacationSummary,
    VacationSummaryRequest,
    VacationToggleRequest,
)
from app.services.calendar_grid import build_year_grid
from app.services.custom_calendars import CustomCalendarRepository
from app.services.dates import parse_iso_date
from app.services.holiday_provider import HolidayProvider
from app.services.selection import resolve_selection
from app.services.vacation import (
    VacationDateStore,
    compute_vacation_summary,
    export_vacation_dates_csv,
    export_vacation_results_csv,
)

router = APIRouter()

YearPath = Annotated[int, Path(ge=1900, le=2200)]


def _csv_response(content: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def _require_iso(*values: str) -> None:
    for value in values:
        if parse_iso_date(value) is None:
            raise ValidationError(f"Invalid date: {value}")


async def _summarize(
    body: VacationSummaryRequest,
    provider: HolidayProvider,
    repository: CustomCalendarRepository,
    settings: Settings,
) -> VacationSummary:
    locations, calendars = resolve_selection(body, repository, settings.default_theme)
    grid = await build_year_grid(body.year, locations, calendars, provider)
    return compute_vacation_summary(body.dates, grid, locations, calendars)


async def _validity_grid(year: int, provider: HolidayProvider) -> YearGrid:
    # No locations: only day validity is needed, so nothing is fetched
    return await build_year_grid(year, [], [], provider)


@router.post("/vacations/summary", response_model=VacationSummary)
async def get_vacation_summary(
    body: VacationSummaryRequest,
    provider: HolidayProvider = Depends(get_holiday_provider),
    repository: CustomCalendarRepository = Depends(get_calendar_repository),
    settings: Settings = Depends(get_app_settings),
):
    """
    Vacation days required per location for the planned dates.

    Dates that do not belong to the requested year are ignored in the
    per-location counts but still count towards ``totalPlannedDates``.
    """
    return await _summarize(body, provider, repository, settings)


@router.post("/vacations/summary.csv")
async def export_vacation_summary(
    body: VacationSummaryRequest,
    provider: HolidayProvider = Depends(get_holiday_provider),
    repository: CustomCalendarRepository = Depends(get_calendar_repository),
    settings: Settings = Depends(get_app_settings),
):
    summary = await _summarize(body, provider, repository, settings)
    return _csv_response(export_vacation_results_csv(summary), f"vacation-summary-{body.year}.csv")


@router.post("/vacations/dates.csv")
async def export_vacation_dates(body: VacationDatesRequest):
    return _csv_response(export_vacation_dates_csv(body.dates), "vacation-dates.csv")


@router.get("/vacations/{year}/dates", response_model=VacationDatesResponse)
async def get_vacation_dates(
    year: YearPath,
    store: VacationDateStore = Depends(get_vacation_store),
):
    return VacationDatesResponse(year=year, dates=sorted(store.load(year)))


@router.put("/vacations/{year}/dates", response_model=VacationDatesResponse)
async def replace_vacation_dates(
    body: VacationDatesRequest,
    year: YearPath,
    store: VacationDateStore = Depends(get_vacation_store),
):
    """Replace the stored set for a year."""
    _require_iso(*body.dates)
    return VacationDatesResponse(year=year, dates=store.save(year, body.dates))


@router.delete("/vacations/{year}/dates", response_model=VacationDatesResponse)
async def clear_vacation_dates(
    year: YearPath,
    store: VacationDateStore = Depends(get_vacation_store),
):
    return VacationDatesResponse(year=year, dates=store.clear(year))


@router.post("/vacations/{year}/toggle", response_model=VacationDatesResponse)
async def toggle_vacation_date(
    body: VacationToggleRequest,
    year: YearPath,
    store: VacationDateStore = Depends(get_vacation_store),
):
    _require_iso(body.date_iso)
    return VacationDatesResponse(year=year, dates=store.toggle(year, body.date_iso))


@router.post("/vacations/{year}/range", response_model=VacationRangeResponse)
async def edit_vacation_range(
    body: VacationRangeRequest,
    year: YearPath,
    store: VacationDateStore = Depends(get_vacation_store),
    provider: HolidayProvider = Depends(get_holiday_provider),
):
    """
    Add a date range, or toggle it.

    With ``mode="toggle"`` the range is removed when more than half of it
    is already selected. Only valid dates of ``year`` are touched; start
    and end may be given in either order.
    """
    _require_iso(body.start_iso, body.end_iso)
    grid = await _validity_grid(year, provider)

    if body.mode == "toggle":
        dates, mode, affected = store.toggle_range(year, body.start_iso, body.end_iso, grid)
        return VacationRangeResponse(year=year, dates=dates, mode=mode, affected_dates=affected)

    before = store.load(year)
    dates = store.add_range(year, body.start_iso, body.end_iso, grid)
    return VacationRangeResponse(
        year=year,
        dates=dates,
        mode="add",
        affected_dates=[d for d in dates if d not in before],
    )
