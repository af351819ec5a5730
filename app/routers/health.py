"""
Health check and process statistics endpoints.
"""

import sys
import time
from datetime import datetime, timezone

import psutil
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app import __version__
from app.config import get_settings
from app.dependencies import get_calendar_repository, get_holiday_provider
from app.services.custom_calendars import CustomCalendarRepository
from app.services.holiday_provider import HolidayProvider

router = APIRouter()

_start_time = time.time()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str
    backend: str
    timestamp: str
    holiday_api: str
    cached_holiday_sets: int


@router.get("/health", response_model=HealthResponse)
async def health_check(provider: HolidayProvider = Depends(get_holiday_provider)):
    """
    Health check endpoint.
    Returns server status and the holiday cache size.
    """
    settings = get_settings()

    return HealthResponse(
        status="ok",
        version=__version__,
        backend="python-fastapi",
        timestamp=datetime.now(timezone.utc).isoformat(),
        holiday_api=settings.nager_base_url,
        cached_holiday_sets=len(provider.cache),
    )


@router.get("/api/health")
async def api_health_check(provider: HolidayProvider = Depends(get_holiday_provider)):
    """
    API prefixed health check (for consistency with /api/* routes).
    """
    return await health_check(provider)


@router.get("/api/stats")
async def get_system_stats(
    provider: HolidayProvider = Depends(get_holiday_provider),
    repository: CustomCalendarRepository = Depends(get_calendar_repository),
):
    """Get process and cache statistics."""
    process = psutil.Process()
    memory_info = process.memory_info()

    return {
        "holidays": {
            "cached_sets": len(provider.cache),
            "cached_keys": [f"{country}/{year}" for country, year in provider.cache.keys()],
        },
        "custom_calendars": len(repository.list_all()),
        "system": {
            "uptime": time.time() - _start_time,
            "memory_mb": memory_info.rss / 1024 / 1024,
            "python_version": sys.version,
        },
    }
