"""
Pydantic schemas for holidays and custom calendars.
"""

from typing import Literal, Optional

from pydantic import Field

from app.schemas.base import BaseSchema

HolidayType = Literal["PUBLIC_HOLIDAY", "OBSERVANCE", "COMPANY_HOLIDAY", "OTHER"]
HolidaySource = Literal["official", "custom"]
WeekdayName = Literal["SUNDAY", "MONDAY", "TUESDAY", "WEDNESDAY", "THURSDAY", "FRIDAY", "SATURDAY"]

HOLIDAY_TYPES: tuple[str, ...] = ("PUBLIC_HOLIDAY", "OBSERVANCE", "COMPANY_HOLIDAY", "OTHER")
WEEKDAY_NAMES: tuple[str, ...] = (
    "SUNDAY",
    "MONDAY",
    "TUESDAY",
    "WEDNESDAY",
    "THURSDAY",
    "FRIDAY",
    "SATURDAY",
)


class Holiday(BaseSchema):
    """A single holiday from either Nager.Date or a custom calendar."""

    date: str  # YYYY-MM-DD
    name: str
    local_name: str
    country_code: str
    counties: Optional[list[str]] = None
    type: HolidayType = "PUBLIC_HOLIDAY"
    source: HolidaySource = "official"
    calendar_id: Optional[str] = None
    half_day: Optional[bool] = None
    notes: Optional[str] = None


class CustomCalendarMeta(BaseSchema):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    timezone: Optional[str] = None
    default_color: str


class CustomCalendarRules(BaseSchema):
    weekend: Optional[list[WeekdayName]] = None


class CustomCalendarHoliday(BaseSchema):
    date: str  # YYYY-MM-DD
    name: str
    type: HolidayType
    half_day: Optional[bool] = None
    notes: Optional[str] = None


class CustomCalendar(BaseSchema):
    """User-authored holiday calendar, imported as a JSON document."""

    meta: CustomCalendarMeta
    rules: Optional[CustomCalendarRules] = None
    holidays: list[CustomCalendarHoliday] = Field(default_factory=list)

    @property
    def location_id(self) -> str:
        """Identifier the calendar uses inside grid cells and summaries."""
        return f"custom-{self.meta.id}"


class CalendarValidationError(BaseSchema):
    field: str
    message: str


class CalendarValidationResult(BaseSchema):
    """Tagged result of validating a custom calendar document."""

    valid: bool
    errors: list[CalendarValidationError] = Field(default_factory=list)
    calendar: Optional[CustomCalendar] = None


class CalendarFromLocationRequest(BaseSchema):
    location_id: str
    year: int = Field(..., ge=1900, le=2200)
