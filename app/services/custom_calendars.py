"""
Custom calendar service.

Handles validation of imported calendar documents, weekend-rule decoding,
persistence through the injected key-value store, and cloning an official
location's holidays into a new editable calendar.

Validation collects every problem it finds and returns them as a list of
``{field, message}`` entries instead of raising, so the caller can show
all errors of an upload at once.
"""

import json
import logging
import re
from datetime import date
from typing import TYPE_CHECKING, Any, Optional

from pydantic import ValidationError as PydanticValidationError

from app.exceptions import ConflictError, NotFoundError
from app.schemas.holiday import (
    HOLIDAY_TYPES,
    WEEKDAY_NAMES,
    CalendarValidationError,
    CalendarValidationResult,
    CustomCalendar,
    CustomCalendarRules,
)
from app.services.storage import (
    LEGACY_STORAGE_KEYS,
    STORAGE_KEYS,
    KeyValueStore,
    read_json_storage,
    write_json_storage,
)

if TYPE_CHECKING:
    from app.services.holiday_provider import HolidayProvider

logger = logging.getLogger(__name__)

DEFAULT_WEEKEND = [0, 6]
DEFAULT_CALENDAR_COLOR = "#7B61FF"

# Day name -> weekday number (0 = Sunday)
DAY_MAP: dict[str, int] = {name: index for index, name in enumerate(WEEKDAY_NAMES)}

_ISO_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def weekend_days_from_rules(rules: CustomCalendarRules | dict | None) -> list[int]:
    """Weekday numbers of a calendar's weekend; Saturday/Sunday by default."""
    if isinstance(rules, dict):
        weekend = rules.get("weekend")
    else:
        weekend = rules.weekend if rules is not None else None

    if not weekend:
        return list(DEFAULT_WEEKEND)
    return [DAY_MAP[day] for day in weekend if day in DAY_MAP]


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def _is_real_date(value: str) -> bool:
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def _validate_meta(meta: Any, errors: list[CalendarValidationError]) -> None:
    if not isinstance(meta, dict):
        errors.append(CalendarValidationError(field="meta", message="meta object is required"))
        return

    if not _is_non_empty_string(meta.get("id")):
        errors.append(
            CalendarValidationError(
                field="meta.id", message="meta.id is required and must be a non-empty string"
            )
        )
    if not _is_non_empty_string(meta.get("name")):
        errors.append(
            CalendarValidationError(
                field="meta.name", message="meta.name is required and must be a non-empty string"
            )
        )
    if not _is_non_empty_string(meta.get("defaultColor")):
        errors.append(
            CalendarValidationError(
                field="meta.defaultColor", message="meta.defaultColor is required"
            )
        )


def _validate_rules(rules: Any, errors: list[CalendarValidationError]) -> None:
    if not isinstance(rules, dict) or not rules.get("weekend"):
        return

    weekend = rules["weekend"]
    if not isinstance(weekend, list):
        errors.append(
            CalendarValidationError(
                field="rules.weekend", message="rules.weekend must be an array of day names"
            )
        )
        return

    for day in weekend:
        if not isinstance(day, str) or day not in WEEKDAY_NAMES:
            errors.append(
                CalendarValidationError(
                    field="rules.weekend",
                    message=f"Invalid day name: {day}. Must be one of: {', '.join(WEEKDAY_NAMES)}",
                )
            )


def _validate_holiday(index: int, holiday: Any, errors: list[CalendarValidationError]) -> None:
    prefix = f"holidays[{index}]"
    if not isinstance(holiday, dict):
        errors.append(CalendarValidationError(field=prefix, message="Invalid holiday object"))
        return

    holiday_date = holiday.get("date")
    if not isinstance(holiday_date, str) or not _ISO_DATE_RE.fullmatch(holiday_date):
        errors.append(
            CalendarValidationError(
                field=f"{prefix}.date", message="date must be in YYYY-MM-DD format"
            )
        )
    elif not _is_real_date(holiday_date):
        errors.append(
            CalendarValidationError(field=f"{prefix}.date", message=f"Invalid date: {holiday_date}")
        )

    if not _is_non_empty_string(holiday.get("name")):
        errors.append(CalendarValidationError(field=f"{prefix}.name", message="name is required"))

    if holiday.get("type") not in HOLIDAY_TYPES:
        errors.append(
            CalendarValidationError(
                field=f"{prefix}.type", message=f"type must be one of: {', '.join(HOLIDAY_TYPES)}"
            )
        )

    if (
        "halfDay" in holiday
        and holiday["halfDay"] is not None
        and not isinstance(holiday["halfDay"], bool)
    ):
        errors.append(
            CalendarValidationError(field=f"{prefix}.halfDay", message="halfDay must be a boolean")
        )


def validate_custom_calendar(document: Any) -> CalendarValidationResult:
    """
    Validate a custom calendar document (parsed JSON or raw JSON text).

    Returns:
        ``valid=True`` with the parsed calendar, or ``valid=False`` with
        every error found. Never raises.
    """
    errors: list[CalendarValidationError] = []

    if isinstance(document, (str, bytes)):
        try:
            document = json.loads(document)
        except json.JSONDecodeError as e:
            errors.append(CalendarValidationError(field="root", message=f"Invalid JSON: {e.msg}"))
            return CalendarValidationResult(valid=False, errors=errors)

    if not isinstance(document, dict):
        errors.append(CalendarValidationError(field="root", message="Invalid JSON object"))
        return CalendarValidationResult(valid=False, errors=errors)

    _validate_meta(document.get("meta"), errors)
    _validate_rules(document.get("rules"), errors)

    holidays = document.get("holidays")
    if not isinstance(holidays, list):
        errors.append(
            CalendarValidationError(field="holidays", message="holidays array is required")
        )
    else:
        for index, holiday in enumerate(holidays):
            _validate_holiday(index, holiday, errors)

    if errors:
        return CalendarValidationResult(valid=False, errors=errors)

    # Remaining shape checks (optional string fields and the like)
    try:
        calendar = CustomCalendar.model_validate(document)
    except PydanticValidationError as e:
        for err in e.errors():
            field = ".".join(str(part) for part in err["loc"]) or "root"
            errors.append(CalendarValidationError(field=field, message=err["msg"]))
        return CalendarValidationResult(valid=False, errors=errors)

    return CalendarValidationResult(valid=True, errors=[], calendar=calendar)


def dump_calendar(calendar: CustomCalendar) -> dict:
    """JSON document form of a calendar (camelCase, no nulls)."""
    return calendar.model_dump(by_alias=True, exclude_none=True)


class CustomCalendarRepository:
    """Custom calendars stored as one JSON list in a key-value store."""

    def __init__(self, store: KeyValueStore):
        self._store = store

    def _load(self) -> list[CustomCalendar]:
        raw = read_json_storage(
            self._store,
            STORAGE_KEYS["custom_calendars"],
            LEGACY_STORAGE_KEYS["custom_calendars"],
        )
        if not isinstance(raw, list):
            return []

        calendars: list[CustomCalendar] = []
        for item in raw:
            try:
                calendars.append(CustomCalendar.model_validate(item))
            except PydanticValidationError:
                logger.warning("Skipping malformed stored custom calendar: %r", item)
        return calendars

    def _save(self, calendars: list[CustomCalendar]) -> None:
        write_json_storage(
            self._store,
            STORAGE_KEYS["custom_calendars"],
            [dump_calendar(c) for c in calendars],
        )

    def list_all(self) -> list[CustomCalendar]:
        return self._load()

    def get(self, calendar_id: str) -> Optional[CustomCalendar]:
        return next((c for c in self._load() if c.meta.id == calendar_id), None)

    def get_many(self, calendar_ids: list[str]) -> list[CustomCalendar]:
        """Calendars for the given ids, in request order; unknown ids skipped."""
        by_id = {c.meta.id: c for c in self._load()}
        return [by_id[cid] for cid in calendar_ids if cid in by_id]

    def add(self, calendar: CustomCalendar) -> CustomCalendar:
        calendars = self._load()
        if any(c.meta.id == calendar.meta.id for c in calendars):
            raise ConflictError(f'A calendar with ID "{calendar.meta.id}" already exists')
        calendars.append(calendar)
        self._save(calendars)
        return calendar

    def update(self, calendar: CustomCalendar) -> CustomCalendar:
        calendars = self._load()
        for index, existing in enumerate(calendars):
            if existing.meta.id == calendar.meta.id:
                calendars[index] = calendar
                self._save(calendars)
                return calendar
        raise NotFoundError("Calendar", calendar.meta.id)

    def delete(self, calendar_id: str) -> None:
        calendars = self._load()
        self._save([c for c in calendars if c.meta.id != calendar_id])


async def create_calendar_from_location(
    location_id: str,
    year: int,
    provider: "HolidayProvider",
) -> CustomCalendar:
    """
    Build an editable custom calendar from an official location's holidays.

    Raises:
        NotFoundError: if the location id is not in the catalog.
    """
    from app.data.locations import get_location_by_id
    from app.services.holiday_provider import is_holiday_for_location

    location = get_location_by_id(location_id)
    if location is None:
        raise NotFoundError("Location", location_id)

    holidays = await provider.get_official_holidays(location.country_code, year)
    applicable = [h for h in holidays if is_holiday_for_location(h, location)]

    if 0 in location.weekend_days and 6 in location.weekend_days:
        weekend = ["SATURDAY", "SUNDAY"]
    else:
        weekend = [WEEKDAY_NAMES[d] for d in location.weekend_days]

    return CustomCalendar.model_validate(
        {
            "meta": {
                "id": f"{location_id}-{year}-copy",
                "name": f"{location.name} ({year})",
                "description": f"Holidays from {location.name} for {year}",
                "timezone": "UTC",
                "defaultColor": DEFAULT_CALENDAR_COLOR,
            },
            "rules": {"weekend": weekend},
            "holidays": [
                {
                    "date": h.date,
                    "name": h.local_name or h.name,
                    "type": "PUBLIC_HOLIDAY",
                    "halfDay": False,
                    "notes": h.name if h.name != h.local_name else None,
                }
                for h in applicable
            ],
        }
    )


EXAMPLE_CUSTOM_CALENDAR: dict = {
    "meta": {
        "id": "my-company-calendar",
        "name": "My Company Calendar",
        "description": "Company-specific holidays and events",
        "timezone": "Europe/Berlin",
        "defaultColor": DEFAULT_CALENDAR_COLOR,
    },
    "rules": {
        "weekend": ["SATURDAY", "SUNDAY"],
    },
    "holidays": [
        {
            "date": "2026-01-01",
            "name": "New Year's Day",
            "type": "PUBLIC_HOLIDAY",
            "halfDay": False,
            "notes": "Office closed",
        },
        {
            "date": "2026-12-24",
            "name": "Christmas Eve",
            "type": "COMPANY_HOLIDAY",
            "halfDay": True,
        },
        {
            "date": "2026-07-15",
            "name": "Company Foundation Day",
            "type": "COMPANY_HOLIDAY",
            "halfDay": False,
            "notes": "Annual celebration",
        },
    ],
}
