"""
Pydantic schemas for request/response validation.
"""

from app.schemas.location import LocationConfig, LocationListItem
from app.schemas.holiday import (
    Holiday,
    CustomCalendar,
    CustomCalendarMeta,
    CustomCalendarRules,
    CustomCalendarHoliday,
    CalendarValidationError,
    CalendarValidationResult,
    CalendarFromLocationRequest,
)
from app.schemas.grid import (
    DayInfo,
    DayLocationInfo,
    YearGrid,
    CellRenderModel,
    CalendarSelection,
    YearGridResponse,
    CellModelsResponse,
)
from app.schemas.vacation import (
    VacationDateDetail,
    DateInterval,
    VacationStats,
    VacationInterval,
    VacationLocationSummary,
    RequiredExtreme,
    VacationSummary,
    VacationSummaryRequest,
    VacationDatesRequest,
    VacationDatesResponse,
    VacationToggleRequest,
    VacationRangeRequest,
    VacationRangeResponse,
)
from app.schemas.color import (
    ColorAssignRequest,
    ColorAssignResponse,
    ContrastResponse,
    ThemeSafeColorResponse,
)

__all__ = [
    # Locations
    "LocationConfig",
    "LocationListItem",
    # Holidays & custom calendars
    "Holiday",
    "CustomCalendar",
    "CustomCalendarMeta",
    "CustomCalendarRules",
    "CustomCalendarHoliday",
    "CalendarValidationError",
    "CalendarValidationResult",
    "CalendarFromLocationRequest",
    # Grid
    "DayInfo",
    "DayLocationInfo",
    "YearGrid",
    "CellRenderModel",
    "CalendarSelection",
    "YearGridResponse",
    "CellModelsResponse",
    # Vacations
    "VacationDateDetail",
    "DateInterval",
    "VacationStats",
    "VacationInterval",
    "VacationLocationSummary",
    "RequiredExtreme",
    "VacationSummary",
    "VacationSummaryRequest",
    "VacationDatesRequest",
    "VacationDatesResponse",
    "VacationToggleRequest",
    "VacationRangeRequest",
    "VacationRangeResponse",
    # Colors
    "ColorAssignRequest",
    "ColorAssignResponse",
    "ContrastResponse",
    "ThemeSafeColorResponse",
]
