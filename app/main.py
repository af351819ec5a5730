"""
Main FastAPI application entry point.
"""

import json
import logging
import time
from contextlib import asynccontextmanager
from datetime import date
from typing import Any, AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app import __version__
from app.config import get_settings
from app.exceptions import AppError
from app.services.custom_calendars import CustomCalendarRepository
from app.services.holiday_provider import create_holiday_provider
from app.services.storage import InMemoryStore
from app.services.vacation import VacationDateStore

logger = logging.getLogger(__name__)

SLOW_REQUEST_MS = 100


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def custom_json_serializer(obj: Any) -> Any:
    """Custom JSON serializer for non-standard types."""
    if isinstance(obj, date):
        return obj.isoformat()
    if isinstance(obj, (set, frozenset)):
        return sorted(obj)
    raise TypeError(f"Object of type {type(obj)} is not JSON serializable")


class CustomJSONResponse(JSONResponse):
    """Compact UTF-8 JSON, with dates as YYYY-MM-DD."""

    def render(self, content: Any) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=False,
            allow_nan=False,
            indent=None,
            separators=(",", ":"),
            default=custom_json_serializer,
        ).encode("utf-8")


class TimingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration = (time.perf_counter() - start) * 1000
        if duration > SLOW_REQUEST_MS:
            logger.warning(
                "SLOW REQUEST: %s %s took %.0fms", request.method, request.url.path, duration
            )
        return response


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan handler.
    Creates the holiday provider and stores on startup, closes the HTTP
    client on shutdown.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Starting %s v%s", settings.app_name, __version__)
    logger.info("Holiday API: %s", settings.nager_base_url)

    store = InMemoryStore()
    app.state.holiday_provider = create_holiday_provider(settings)
    app.state.calendar_repository = CustomCalendarRepository(store)
    app.state.vacation_store = VacationDateStore(store)

    yield

    await app.state.holiday_provider.close()
    logger.info("%s shutdown complete", settings.app_name)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        description="Holiday calendar and vacation planning API for European locations",
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
        openapi_url="/api/openapi.json" if settings.debug else None,
        default_response_class=CustomJSONResponse,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(TimingMiddleware)

    from app.routers import (
        calendar,
        colors,
        custom_calendars,
        health,
        holidays,
        locations,
        vacations,
    )

    app.include_router(health.router, tags=["Health"])
    app.include_router(locations.router, prefix="/api", tags=["Locations"])
    app.include_router(holidays.router, prefix="/api", tags=["Holidays"])
    app.include_router(calendar.router, prefix="/api", tags=["Calendar"])
    app.include_router(vacations.router, prefix="/api", tags=["Vacations"])
    app.include_router(colors.router, prefix="/api", tags=["Colors"])
    app.include_router(custom_calendars.router, prefix="/api", tags=["Custom Calendars"])

    # Unknown API routes get a JSON 404 instead of the default detail body
    @app.api_route(
        "/api/{full_path:path}",
        methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        include_in_schema=False,
    )
    async def api_not_found(full_path: str):
        return JSONResponse(status_code=404, content={"error": "Not found"})

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        content: dict[str, Any] = {"error": exc.detail}
        if exc.extra_detail is not None:
            content["detail"] = exc.extra_detail
        return JSONResponse(status_code=exc.status_code, content=content)

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions."""
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"error": str(exc)},
        )

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.debug,
    )
