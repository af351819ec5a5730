"""
Application errors and their HTTP status codes.

Usage:
    from app.exceptions import NotFoundError, ConflictError

    raise NotFoundError("Location", location_id)
    raise ConflictError('A calendar with ID "team" already exists')
    raise ValidationError("Unknown theme")

The AppError handler in main.py renders each of them as:
    {"error": "<message>", "detail": <optional extra info>}
"""

from typing import Any

from fastapi import HTTPException, status


class AppError(HTTPException):
    """HTTP error whose status code comes from the subclass."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, detail: Any = None):
        super().__init__(
            status_code=self.__class__.status_code,
            detail=message,
        )
        self.extra_detail = detail


class NotFoundError(AppError):
    """Unknown location, calendar or other lookup (404)."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str, resource_id: int | str | None = None):
        if resource_id is not None:
            message = f"{resource} not found (id={resource_id})"
        else:
            message = f"{resource} not found"
        super().__init__(message)


class ConflictError(AppError):
    """Id already taken (409)."""

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, message: str):
        super().__init__(message)


class ValidationError(AppError):
    """Bad input the request schema cannot catch (400)."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, detail: Any = None):
        super().__init__(message, detail)


class HolidayFetchError(Exception):
    """Raised by the holiday client when the upstream API cannot be used."""

    def __init__(self, country_code: str, year: int, reason: str):
        super().__init__(f"Failed to fetch holidays for {country_code}/{year}: {reason}")
        self.country_code = country_code
        self.year = year
        self.reason = reason
