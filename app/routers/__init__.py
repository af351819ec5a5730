"""
API routers package.
"""

from app.routers import (
    calendar,
    colors,
    custom_calendars,
    health,
    holidays,
    locations,
    vacations,
)

__all__ = [
    "calendar",
    "colors",
    "custom_calendars",
    "health",
    "holidays",
    "locations",
    "vacations",
]
