"""
Pydantic schemas for vacation planning results and requests.
"""

from typing import Literal

from pydantic import Field

from app.schemas.base import BaseSchema
from app.schemas.grid import CalendarSelection


class VacationDateDetail(BaseSchema):
    date_iso: str = Field(..., alias="dateISO")
    weekday: str
    status: Literal["required", "weekend", "holiday"]
    reason: str


class DateInterval(BaseSchema):
    """A run of consecutive dates sharing one classification."""

    start_iso: str = Field(..., alias="startISO")
    end_iso: str = Field(..., alias="endISO")
    start_weekday: str
    end_weekday: str
    count: int


class VacationStats(BaseSchema):
    """Flat per-location statistics."""

    location_id: str
    location_name: str
    color: str
    planned_count: int
    weekend_excluded_count: int
    holiday_excluded_count: int
    required_vacation_days: int
    required_dates: list[VacationDateDetail] = Field(default_factory=list)
    excluded_dates: list[VacationDateDetail] = Field(default_factory=list)
    required_intervals: list[DateInterval] = Field(default_factory=list)
    excluded_intervals: list[DateInterval] = Field(default_factory=list)


class VacationInterval(BaseSchema):
    """One run of consecutive planned dates, classified for a location."""

    start_iso: str = Field(..., alias="startISO")
    end_iso: str = Field(..., alias="endISO")
    total_days: int
    required_days: int
    excluded_weekends: int
    excluded_holidays: int
    excluded_details: list[VacationDateDetail] = Field(default_factory=list)


class VacationLocationSummary(BaseSchema):
    location_id: str
    location_name: str
    color: str
    total_planned: int
    total_required: int
    total_excluded: int
    intervals: list[VacationInterval] = Field(default_factory=list)


class RequiredExtreme(BaseSchema):
    count: int
    locations: list[str] = Field(default_factory=list)


class VacationSummary(BaseSchema):
    total_planned_dates: int
    min_required: RequiredExtreme
    max_required: RequiredExtreme
    stats_by_location: list[VacationStats] = Field(default_factory=list)
    intervals_by_location: list[VacationLocationSummary] = Field(default_factory=list)


class VacationSummaryRequest(CalendarSelection):
    dates: list[str] = Field(default_factory=list)


class VacationDatesRequest(BaseSchema):
    dates: list[str] = Field(default_factory=list)


class VacationDatesResponse(BaseSchema):
    year: int
    dates: list[str]


class VacationToggleRequest(BaseSchema):
    date_iso: str = Field(..., alias="dateISO")


class VacationRangeRequest(BaseSchema):
    """
    Range edit. ``mode="toggle"`` removes the range when most of it is
    already selected and adds it otherwise.
    """

    start_iso: str = Field(..., alias="startISO")
    end_iso: str = Field(..., alias="endISO")
    mode: Literal["add", "toggle"] = "add"


class VacationRangeResponse(BaseSchema):
    year: int
    dates: list[str]
    mode: Literal["add", "remove"]
    affected_dates: list[str]
