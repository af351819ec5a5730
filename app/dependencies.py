"""
Request dependencies.

Long-lived services are created once in the application lifespan and kept on
``app.state``; these getters hand them to route handlers through
``Depends()`` so tests can swap them with ``app.dependency_overrides``.
"""

from fastapi import Request

from app.config import Settings, get_settings
from app.services.custom_calendars import CustomCalendarRepository
from app.services.holiday_provider import HolidayProvider
from app.services.vacation import VacationDateStore


def get_app_settings() -> Settings:
    return get_settings()


def get_holiday_provider(request: Request) -> HolidayProvider:
    """Holiday provider shared by all requests of this app instance."""
    return request.app.state.holiday_provider


def get_calendar_repository(request: Request) -> CustomCalendarRepository:
    return request.app.state.calendar_repository


def get_vacation_store(request: Request) -> VacationDateStore:
    return request.app.state.vacation_store
