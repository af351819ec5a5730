"""
Custom calendars API router.
Validation, storage and templating of user-defined holiday calendars.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends

from app.dependencies import get_calendar_repository, get_holiday_provider
from app.exceptions import NotFoundError, ValidationError
from app.schemas.holiday import (
    CalendarFromLocationRequest,
    CalendarValidationResult,
    CustomCalendar,
)
from app.services.custom_calendars import (
    EXAMPLE_CUSTOM_CALENDAR,
    CustomCalendarRepository,
    create_calendar_from_location,
    validate_custom_calendar,
)
from app.services.holiday_provider import HolidayProvider

router = APIRouter()


def _validated(document: Any) -> CustomCalendar:
    """Parsed calendar, or a 400 listing every validation error."""
    result = validate_custom_calendar(document)
    if not result.valid:
        raise ValidationError(
            "Invalid calendar",
            detail=[e.model_dump() for e in result.errors],
        )
    return result.calendar


@router.post("/custom-calendars/validate", response_model=CalendarValidationResult)
async def validate_calendar(document: Any = Body(...)):
    """
    Check a calendar document without storing it.

    Always answers 200; ``valid`` and ``errors`` carry the outcome.
    """
    return validate_custom_calendar(document)


@router.get("/custom-calendars", response_model=list[CustomCalendar])
async def list_calendars(
    repository: CustomCalendarRepository = Depends(get_calendar_repository),
):
    return repository.list_all()


@router.get("/custom-calendars/example")
async def get_example_calendar():
    """A complete example document to start from."""
    return EXAMPLE_CUSTOM_CALENDAR


@router.post("/custom-calendars/from-location", response_model=CustomCalendar)
async def calendar_from_location(
    body: CalendarFromLocationRequest,
    provider: HolidayProvider = Depends(get_holiday_provider),
):
    """
    Template calendar holding a location's official holidays for one year.

    The template is returned, not stored.
    """
    return await create_calendar_from_location(body.location_id, body.year, provider)


@router.get("/custom-calendars/{calendar_id}", response_model=CustomCalendar)
async def get_calendar(
    calendar_id: str,
    repository: CustomCalendarRepository = Depends(get_calendar_repository),
):
    calendar = repository.get(calendar_id)
    if calendar is None:
        raise NotFoundError("Calendar", calendar_id)
    return calendar


@router.post("/custom-calendars", response_model=CustomCalendar, status_code=201)
async def create_calendar(
    document: Any = Body(...),
    repository: CustomCalendarRepository = Depends(get_calendar_repository),
):
    """
    Store a new calendar.

    Invalid documents get a 400 whose ``detail`` lists ``{field, message}``
    errors; an id that is already taken gets a 409.
    """
    return repository.add(_validated(document))


@router.put("/custom-calendars/{calendar_id}", response_model=CustomCalendar)
async def update_calendar(
    calendar_id: str,
    document: Any = Body(...),
    repository: CustomCalendarRepository = Depends(get_calendar_repository),
):
    calendar = _validated(document)
    if calendar.meta.id != calendar_id:
        raise ValidationError(
            f'Calendar id "{calendar.meta.id}" does not match the URL id "{calendar_id}"'
        )
    return repository.update(calendar)


@router.delete("/custom-calendars/{calendar_id}")
async def delete_calendar(
    calendar_id: str,
    repository: CustomCalendarRepository = Depends(get_calendar_repository),
):
    if repository.get(calendar_id) is None:
        raise NotFoundError("Calendar", calendar_id)
    repository.delete(calendar_id)
    return {"success": True}
