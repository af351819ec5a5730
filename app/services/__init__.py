"""
Services package for business logic.
"""

from app.services.calendar_grid import YearGridSession, build_year_grid
from app.services.colors import assign_colors, get_contrast_text_color
from app.services.holiday_provider import HolidayProvider, create_holiday_provider
from app.services.vacation import compute_vacation_summary

__all__ = [
    "HolidayProvider",
    "YearGridSession",
    "assign_colors",
    "build_year_grid",
    "compute_vacation_summary",
    "create_holiday_provider",
    "get_contrast_text_color",
]
