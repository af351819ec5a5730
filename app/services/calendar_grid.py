"""
Year grid builder.

Materializes a dense 12 x 31 grid for one year. Every cell carries the
weekend/holiday status of each selected official location and each
enabled custom calendar. Cells that do not exist in the calendar (Feb 30,
Apr 31, ...) are kept, flagged invalid, so the grid is always rectangular.

Two weekend notions are tracked separately:
- ``is_global_weekend`` on the cell is always Saturday/Sunday and drives
  cell shading;
- ``is_weekend`` per location follows that location's own weekend days and
  drives vacation-day accounting.

The grid is rebuilt from scratch for every (year, selection); nothing is
updated in place.
"""

import asyncio
import logging
from datetime import date
from typing import Iterable, Optional

from app.schemas.grid import CellRenderModel, DayInfo, DayLocationInfo, YearGrid
from app.schemas.holiday import CustomCalendar, Holiday
from app.schemas.location import LocationConfig
from app.services.custom_calendars import weekend_days_from_rules
from app.services.dates import days_in_month, format_date_iso, js_weekday
from app.services.holiday_provider import HolidayProvider, is_holiday_for_location

logger = logging.getLogger(__name__)

MONTHS = 12
GRID_DAYS = 31
GRID_SIZE = MONTHS * GRID_DAYS


def grid_key(month_index: int, day: int) -> str:
    return f"{month_index}-{day}"


def grid_key_for_iso(date_iso: str) -> Optional[str]:
    """Grid key for a YYYY-MM-DD string (year ignored), None if malformed."""
    parts = date_iso.split("-") if isinstance(date_iso, str) else []
    if len(parts) != 3:
        return None
    try:
        month = int(parts[1])
        day = int(parts[2])
    except ValueError:
        return None
    return grid_key(month - 1, day)


def is_weekend(d: date, weekend_days: Iterable[int]) -> bool:
    return js_weekday(d) in set(weekend_days)


def is_global_weekend(d: date) -> bool:
    """Standard Saturday/Sunday weekend."""
    return d.weekday() >= 5


def get_custom_calendar_holidays(calendar: CustomCalendar, year: int) -> list[Holiday]:
    """Custom calendar holidays falling in ``year``, as Holiday models."""
    prefix = f"{year}-"
    return [
        Holiday(
            date=h.date,
            name=h.name,
            local_name=h.name,
            country_code="CUSTOM",
            type=h.type,
            source="custom",
            calendar_id=calendar.meta.id,
            half_day=h.half_day,
            notes=h.notes,
        )
        for h in calendar.holidays
        if h.date.startswith(prefix)
    ]


async def _official_holiday_maps(
    year: int,
    locations: list[LocationConfig],
    provider: HolidayProvider,
) -> dict[str, dict[str, Holiday]]:
    """location id -> ISO date -> holiday, fetched concurrently per location."""
    fetched = await asyncio.gather(
        *(provider.get_official_holidays(loc.country_code, year) for loc in locations)
    )

    holiday_maps: dict[str, dict[str, Holiday]] = {}
    for location, holidays in zip(locations, fetched):
        holiday_maps[location.id] = {
            h.date: h for h in holidays if is_holiday_for_location(h, location)
        }
    return holiday_maps


async def build_year_grid(
    year: int,
    official_locations: list[LocationConfig],
    custom_calendars: list[CustomCalendar],
    provider: HolidayProvider,
) -> YearGrid:
    """
    Build the 372-cell grid for a year.

    Args:
        year: Calendar year.
        official_locations: Locations whose holidays come from Nager.Date.
        custom_calendars: Enabled user calendars.
        provider: Holiday provider (cached, never raises).

    Returns:
        Mapping of "month-day" keys (month 0-11) to DayInfo.
    """
    official_maps = await _official_holiday_maps(year, official_locations, provider)

    custom_maps: dict[str, dict[str, Holiday]] = {}
    custom_weekends: dict[str, set[int]] = {}
    for calendar in custom_calendars:
        custom_maps[calendar.meta.id] = {
            h.date: h for h in get_custom_calendar_holidays(calendar, year)
        }
        custom_weekends[calendar.meta.id] = set(weekend_days_from_rules(calendar.rules))

    location_weekends = {loc.id: set(loc.weekend_days) for loc in official_locations}

    grid: YearGrid = {}
    for month in range(MONTHS):
        month_length = days_in_month(year, month)

        for day in range(1, GRID_DAYS + 1):
            is_valid = day <= month_length
            date_iso = format_date_iso(year, month, day)
            current = date(year, month + 1, day) if is_valid else None
            weekday = js_weekday(current) if current else None

            cells: list[DayLocationInfo] = []
            for location in official_locations:
                holiday = official_maps[location.id].get(date_iso) if is_valid else None
                cells.append(
                    DayLocationInfo(
                        location_id=location.id,
                        location_name=location.name,
                        color=location.color,
                        is_weekend=weekday in location_weekends[location.id],
                        is_holiday=holiday is not None,
                        holiday_name=(holiday.local_name or holiday.name) if holiday else None,
                        holiday_type=holiday.type if holiday else None,
                        source="official",
                    )
                )

            for calendar in custom_calendars:
                holiday = custom_maps[calendar.meta.id].get(date_iso) if is_valid else None
                cells.append(
                    DayLocationInfo(
                        location_id=calendar.location_id,
                        location_name=calendar.meta.name,
                        color=calendar.meta.default_color,
                        is_weekend=weekday in custom_weekends[calendar.meta.id],
                        is_holiday=holiday is not None,
                        holiday_name=holiday.name if holiday else None,
                        holiday_type=holiday.type if holiday else None,
                        half_day=holiday.half_day if holiday else None,
                        notes=holiday.notes if holiday else None,
                        source="custom",
                    )
                )

            grid[grid_key(month, day)] = DayInfo(
                date=current,
                date_iso=date_iso,
                is_valid=is_valid,
                is_global_weekend=current is not None and is_global_weekend(current),
                locations=cells,
            )

    return grid


def cell_render_model(day_info: Optional[DayInfo]) -> CellRenderModel:
    """How the frontend should draw a cell: shading and holiday marker."""
    if day_info is None or not day_info.is_valid:
        return CellRenderModel(
            day_type="INVALID",
            holiday_count=0,
            marker_type="NONE",
            marker_size="WORKDAY",
        )

    holiday_count = sum(1 for loc in day_info.locations if loc.is_holiday)
    weekend_kind = "WEEKEND" if day_info.is_global_weekend else "WORKDAY"

    if holiday_count == 0:
        marker_type = "NONE"
    elif holiday_count == 1:
        marker_type = "SOLID"
    elif holiday_count <= 8:
        marker_type = "PIE"
    else:
        marker_type = "WHEEL"

    return CellRenderModel(
        day_type=weekend_kind,
        holiday_count=holiday_count,
        marker_type=marker_type,
        marker_size=weekend_kind,
    )


class YearGridSession:
    """
    Sequence-stamped grid builds for one consumer.

    Every ``refresh`` takes a new sequence number. A build that finishes
    after a newer one has started is returned to its caller but never
    published, so ``current`` always reflects the latest request.
    """

    def __init__(self, provider: HolidayProvider):
        self._provider = provider
        self._sequence = 0
        self.current: Optional[YearGrid] = None
        self.current_year: Optional[int] = None

    @property
    def sequence(self) -> int:
        return self._sequence

    async def refresh(
        self,
        year: int,
        official_locations: list[LocationConfig],
        custom_calendars: list[CustomCalendar],
    ) -> tuple[YearGrid, bool]:
        """
        Build a grid and publish it unless superseded.

        Returns:
            (grid, published) where ``published`` is False for stale builds.
        """
        self._sequence += 1
        stamp = self._sequence

        grid = await build_year_grid(year, official_locations, custom_calendars, self._provider)

        if stamp < self._sequence:
            logger.debug("Discarding superseded grid build %d (latest %d)", stamp, self._sequence)
            return grid, False

        self.current = grid
        self.current_year = year
        return grid, True
