"""
Pydantic schemas for the year grid and the requests that select it.
"""

from typing import Literal, Optional

from pydantic import Field

from app.schemas.base import BaseSchema, DateSimple
from app.schemas.holiday import CustomCalendar, HolidaySource, HolidayType
from app.schemas.location import LocationConfig

Theme = Literal["light", "dark"]


class DayLocationInfo(BaseSchema):
    """Status of one day for one official location or custom calendar."""

    location_id: str
    location_name: str
    color: str
    is_weekend: bool
    is_holiday: bool
    holiday_name: Optional[str] = None
    holiday_type: Optional[HolidayType] = None
    half_day: Optional[bool] = None
    notes: Optional[str] = None
    source: HolidaySource


class DayInfo(BaseSchema):
    """
    One grid cell. Invalid cells (Feb 30, Apr 31, ...) exist only to keep
    the grid rectangular and carry no date.
    """

    date: Optional[DateSimple] = None
    date_iso: str = Field(..., alias="dateISO")
    is_valid: bool
    is_global_weekend: bool
    locations: list[DayLocationInfo] = Field(default_factory=list)


# "month-day" (month 0-11, day 1-31) -> DayInfo
YearGrid = dict[str, DayInfo]


class CellRenderModel(BaseSchema):
    day_type: Literal["WORKDAY", "WEEKEND", "INVALID"]
    holiday_count: int
    marker_type: Literal["NONE", "SOLID", "PIE", "WHEEL"]
    marker_size: Literal["WORKDAY", "WEEKEND"]


class CalendarSelection(BaseSchema):
    """
    Which locations and calendars a request is about.

    Locations may be given by catalog id (colored server-side) or inline.
    Custom calendars may be given by stored id or inline.
    """

    year: int = Field(..., ge=1900, le=2200)
    location_ids: list[str] = Field(default_factory=list)
    locations: list[LocationConfig] = Field(default_factory=list)
    calendar_ids: list[str] = Field(default_factory=list)
    calendars: list[CustomCalendar] = Field(default_factory=list)
    theme: Optional[Theme] = None


class YearGridResponse(BaseSchema):
    year: int
    locations: list[LocationConfig]
    calendars: list[CustomCalendar]
    days: dict[str, DayInfo]


class CellModelsResponse(BaseSchema):
    year: int
    cells: dict[str, CellRenderModel]
