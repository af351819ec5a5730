"""
Shared test fixtures for the Vacation Planner API test suite.
"""

import asyncio

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.config import Settings
from app.exceptions import HolidayFetchError
from app.schemas.holiday import Holiday
from app.services.custom_calendars import CustomCalendarRepository
from app.services.holiday_provider import HolidayProvider
from app.services.storage import InMemoryStore
from app.services.vacation import VacationDateStore


def make_holiday(date_iso, name, local_name=None, country_code="DE", counties=None):
    return Holiday(
        date=date_iso,
        name=name,
        local_name=local_name or name,
        country_code=country_code,
        counties=counties,
    )


GERMAN_HOLIDAYS_2026 = [
    make_holiday("2026-01-01", "New Year's Day", "Neujahr"),
    make_holiday(
        "2026-01-06",
        "Epiphany",
        "Heilige Drei Könige",
        counties=["DE-BW", "DE-BY", "DE-ST"],
    ),
    make_holiday("2026-04-03", "Good Friday", "Karfreitag"),
    make_holiday("2026-04-06", "Easter Monday", "Ostermontag"),
    make_holiday(
        "2026-06-04",
        "Corpus Christi",
        "Fronleichnam",
        counties=["DE-BW", "DE-BY", "DE-HE", "DE-NW", "DE-RP", "DE-SL"],
    ),
]


class FakeHolidaySource:
    """
    In-memory stand-in for the Nager.Date client.

    Records every fetch; countries listed in ``failing`` raise
    HolidayFetchError. When ``gate`` is set, fetches wait for it.
    """

    def __init__(self, holidays=None, failing=()):
        self.holidays = holidays if holidays is not None else {("DE", 2026): GERMAN_HOLIDAYS_2026}
        self.failing = set(failing)
        self.calls: list[tuple[str, int]] = []
        self.gate: asyncio.Event | None = None
        self.closed = False

    async def fetch_public_holidays(self, country_code: str, year: int) -> list[Holiday]:
        self.calls.append((country_code, year))
        if self.gate is not None:
            await self.gate.wait()
        if country_code in self.failing:
            raise HolidayFetchError(country_code, year, "HTTP 503")
        return list(self.holidays.get((country_code, year), []))

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def test_settings():
    """Settings configured for testing (no real network access needed)."""
    return Settings(
        nager_api_url="https://nager.test/api/v3/",
        debug=True,
        default_theme="light",
    )


@pytest.fixture
def fake_source_factory():
    """The FakeHolidaySource class, for tests that need a custom setup."""
    return FakeHolidaySource


@pytest.fixture
def holiday_source():
    return FakeHolidaySource()


@pytest.fixture
def holiday_provider(holiday_source):
    return HolidayProvider(holiday_source)


@pytest.fixture
def memory_store():
    return InMemoryStore()


@pytest.fixture
def calendar_repository(memory_store):
    return CustomCalendarRepository(memory_store)


@pytest.fixture
def vacation_store(memory_store):
    return VacationDateStore(memory_store)


@pytest.fixture
def team_calendar_document():
    return {
        "meta": {
            "id": "team",
            "name": "Team Calendar",
            "defaultColor": "#7B61FF",
        },
        "rules": {"weekend": ["FRIDAY", "SATURDAY"]},
        "holidays": [
            {"date": "2026-03-04", "name": "Team Day", "type": "COMPANY_HOLIDAY"},
            {"date": "2026-12-24", "name": "Christmas Eve", "type": "COMPANY_HOLIDAY", "halfDay": True},
            {"date": "2025-12-31", "name": "Old Year", "type": "OTHER"},
        ],
    }


@pytest_asyncio.fixture
async def app_client(test_settings, holiday_provider, calendar_repository, vacation_store):
    """Create a test client with in-memory services."""
    from app.dependencies import (
        get_app_settings,
        get_calendar_repository,
        get_holiday_provider,
        get_vacation_store,
    )
    from app.main import create_app

    app = create_app()

    app.dependency_overrides[get_app_settings] = lambda: test_settings
    app.dependency_overrides[get_holiday_provider] = lambda: holiday_provider
    app.dependency_overrides[get_calendar_repository] = lambda: calendar_repository
    app.dependency_overrides[get_vacation_store] = lambda: vacation_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
