"""
Shared date helpers for ISO formatting and range operations.

Month indexes are 0-based (January = 0) and weekday numbers follow the
frontend convention (0 = Sunday ... 6 = Saturday), because both end up as
keys in JSON documents the frontend stores.
"""

import calendar
from datetime import date, timedelta
from typing import Iterator, Optional

WEEKDAY_LABELS = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


def format_date_iso(year: int, month_index: int, day: int) -> str:
    return f"{year:04d}-{month_index + 1:02d}-{day:02d}"


def days_in_month(year: int, month_index: int) -> int:
    return calendar.monthrange(year, month_index + 1)[1]


def js_weekday(d: date) -> int:
    """Weekday number with Sunday = 0."""
    return (d.weekday() + 1) % 7


def parse_iso_date(date_iso: str) -> Optional[date]:
    """Parse YYYY-MM-DD, returning None for anything that is not a real date."""
    try:
        return date.fromisoformat(date_iso)
    except (TypeError, ValueError):
        return None


def weekday_name(date_iso: str) -> str:
    """English weekday name for an ISO date ("" when unparseable)."""
    parsed = parse_iso_date(date_iso)
    if parsed is None:
        return ""
    return WEEKDAY_LABELS[js_weekday(parsed)]


def next_day_iso(date_iso: str) -> Optional[str]:
    parsed = parse_iso_date(date_iso)
    if parsed is None or parsed == date.max:
        return None
    return (parsed + timedelta(days=1)).isoformat()


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Yield all dates between start and end (inclusive), in either order."""
    if start > end:
        start, end = end, start
    current = start
    while True:
        yield current
        # end may be date.max
        if current == end:
            return
        current += timedelta(days=1)


def dates_between(start_iso: str, end_iso: str, year: Optional[int] = None) -> list[str]:
    """
    ISO dates from start to end inclusive, in either order.

    With ``year`` the range is first clipped to that calendar year.
    """
    start = parse_iso_date(start_iso)
    end = parse_iso_date(end_iso)
    if start is None or end is None:
        return []
    if start > end:
        start, end = end, start
    if year is not None:
        start = max(start, date(year, 1, 1))
        end = min(end, date(year, 12, 31))
        if start > end:
            return []
    return [d.isoformat() for d in iter_dates(start, end)]
