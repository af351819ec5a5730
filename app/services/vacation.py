"""
Vacation analysis.

Given a year grid and a set of planned vacation dates, works out for each
location how many of those dates actually cost a day of leave (working
days) and how many fall on that location's weekend or public holidays.

Dates that cannot be resolved against the grid (wrong year, invalid day,
location missing from the cell) are silently left out of the counts; a
saved date set may well belong to a different grid than the one loaded.

Also holds the pure date-set edits (toggle, ranges, clear), the per-year
date store, and CSV export.
"""

import csv
import io
import logging
from typing import Iterable, Literal, Optional

from app.schemas.grid import DayInfo, DayLocationInfo, YearGrid
from app.schemas.holiday import CustomCalendar
from app.schemas.location import LocationConfig
from app.schemas.vacation import (
    DateInterval,
    RequiredExtreme,
    VacationDateDetail,
    VacationInterval,
    VacationLocationSummary,
    VacationStats,
    VacationSummary,
)
from app.services.calendar_grid import grid_key_for_iso
from app.services.dates import dates_between, next_day_iso, weekday_name
from app.services.storage import (
    LEGACY_STORAGE_KEYS,
    STORAGE_KEYS,
    KeyValueStore,
    read_json_storage,
    write_json_storage,
)

logger = logging.getLogger(__name__)

RangeMode = Literal["add", "remove"]


# =============================================================================
# Classification
# =============================================================================


def _lookup_location_day(
    date_iso: str, grid: YearGrid, location_id: str
) -> Optional[DayLocationInfo]:
    """The location's entry for a date, or None when it cannot be resolved."""
    key = grid_key_for_iso(date_iso)
    if key is None:
        return None

    day_info: Optional[DayInfo] = grid.get(key)
    if day_info is None or not day_info.is_valid:
        return None
    # Grid keys carry no year; a date from another year must not match
    if day_info.date_iso != date_iso:
        return None

    return next((loc for loc in day_info.locations if loc.location_id == location_id), None)


def _classify(
    date_iso: str, info: DayLocationInfo, holiday_default: str, holiday_prefix: str
) -> VacationDateDetail:
    weekday = weekday_name(date_iso)
    if info.is_weekend:
        return VacationDateDetail(
            date_iso=date_iso, weekday=weekday, status="weekend", reason="Weekend"
        )
    if info.is_holiday:
        return VacationDateDetail(
            date_iso=date_iso,
            weekday=weekday,
            status="holiday",
            reason=f"{holiday_prefix}{info.holiday_name or holiday_default}",
        )
    return VacationDateDetail(
        date_iso=date_iso, weekday=weekday, status="required", reason="Working day"
    )


# =============================================================================
# Intervals
# =============================================================================


def _split_into_runs(sorted_dates: list[str]) -> list[list[str]]:
    """Split sorted ISO dates into runs of calendar-consecutive days."""
    runs: list[list[str]] = []
    for date_iso in sorted_dates:
        if runs and next_day_iso(runs[-1][-1]) == date_iso:
            runs[-1].append(date_iso)
        else:
            runs.append([date_iso])
    return runs


def group_dates_into_intervals(details: Iterable[VacationDateDetail]) -> list[DateInterval]:
    """
    Group date details into maximal runs of consecutive calendar days.

    A run breaks whenever the day after the current end is not the next
    entry, so {Mar 2, Mar 3, Mar 5} gives two intervals.
    """
    by_date = {d.date_iso: d for d in details}
    intervals: list[DateInterval] = []
    for run in _split_into_runs(sorted(by_date)):
        first, last = by_date[run[0]], by_date[run[-1]]
        intervals.append(
            DateInterval(
                start_iso=first.date_iso,
                end_iso=last.date_iso,
                start_weekday=first.weekday,
                end_weekday=last.weekday,
                count=len(run),
            )
        )
    return intervals


# =============================================================================
# Per-location computations
# =============================================================================


def compute_location_stats(
    location_id: str,
    location_name: str,
    color: str,
    vacation_dates: set[str],
    grid: YearGrid,
) -> VacationStats:
    """Flat statistics for one location."""
    required: list[VacationDateDetail] = []
    excluded: list[VacationDateDetail] = []
    weekend_count = 0
    holiday_count = 0

    for date_iso in vacation_dates:
        info = _lookup_location_day(date_iso, grid, location_id)
        if info is None:
            continue

        detail = _classify(date_iso, info, "Public Holiday", "Holiday: ")
        if detail.status == "required":
            required.append(detail)
            continue

        excluded.append(detail)
        if detail.status == "weekend":
            weekend_count += 1
        else:
            holiday_count += 1

    required.sort(key=lambda d: d.date_iso)
    excluded.sort(key=lambda d: d.date_iso)

    return VacationStats(
        location_id=location_id,
        location_name=location_name,
        color=color,
        planned_count=len(vacation_dates),
        weekend_excluded_count=weekend_count,
        holiday_excluded_count=holiday_count,
        required_vacation_days=len(required),
        required_dates=required,
        excluded_dates=excluded,
        required_intervals=group_dates_into_intervals(required),
        excluded_intervals=group_dates_into_intervals(excluded),
    )


def _build_interval_stats(run: list[str], location_id: str, grid: YearGrid) -> VacationInterval:
    required_days = 0
    excluded_weekends = 0
    excluded_holidays = 0
    excluded_details: list[VacationDateDetail] = []

    for date_iso in run:
        info = _lookup_location_day(date_iso, grid, location_id)
        if info is None:
            continue

        detail = _classify(date_iso, info, "Holiday", "")
        if detail.status == "required":
            required_days += 1
        elif detail.status == "weekend":
            excluded_weekends += 1
            excluded_details.append(detail)
        else:
            excluded_holidays += 1
            excluded_details.append(detail)

    return VacationInterval(
        start_iso=run[0],
        end_iso=run[-1],
        total_days=len(run),
        required_days=required_days,
        excluded_weekends=excluded_weekends,
        excluded_holidays=excluded_holidays,
        excluded_details=excluded_details,
    )


def compute_location_intervals(
    location_id: str,
    location_name: str,
    color: str,
    vacation_dates: set[str],
    grid: YearGrid,
) -> VacationLocationSummary:
    """
    Interval breakdown for one location.

    The raw planned dates are grouped into runs first; each run is then
    classified day by day, so a run spanning a weekend stays one interval.
    """
    intervals = [
        _build_interval_stats(run, location_id, grid)
        for run in _split_into_runs(sorted(vacation_dates))
    ]

    return VacationLocationSummary(
        location_id=location_id,
        location_name=location_name,
        color=color,
        total_planned=len(vacation_dates),
        total_required=sum(i.required_days for i in intervals),
        total_excluded=sum(i.excluded_weekends + i.excluded_holidays for i in intervals),
        intervals=intervals,
    )


def _required_extremes(stats: list[VacationStats]) -> tuple[RequiredExtreme, RequiredExtreme]:
    if not stats:
        return RequiredExtreme(count=0), RequiredExtreme(count=0)

    counts = [s.required_vacation_days for s in stats]
    low, high = min(counts), max(counts)
    lowest = [s.location_name for s in stats if s.required_vacation_days == low]
    highest = [s.location_name for s in stats if s.required_vacation_days == high]
    return (
        RequiredExtreme(count=low, locations=lowest),
        RequiredExtreme(count=high, locations=highest),
    )


def compute_vacation_summary(
    vacation_dates: Iterable[str],
    grid: YearGrid,
    official_locations: list[LocationConfig],
    custom_calendars: list[CustomCalendar],
) -> VacationSummary:
    """
    Vacation statistics for every official location and custom calendar.

    Args:
        vacation_dates: Planned ISO dates (duplicates are ignored).
        grid: Year grid built for the same locations and calendars.
        official_locations: Selected official locations.
        custom_calendars: Enabled custom calendars.

    Returns:
        VacationSummary with official locations first, then calendars, and
        the locations needing the fewest and the most vacation days.
    """
    dates = set(vacation_dates)

    targets = [(loc.id, loc.name, loc.color) for loc in official_locations]
    targets += [
        (cal.location_id, cal.meta.name, cal.meta.default_color) for cal in custom_calendars
    ]

    stats_by_location = [
        compute_location_stats(loc_id, name, color, dates, grid) for loc_id, name, color in targets
    ]
    intervals_by_location = [
        compute_location_intervals(loc_id, name, color, dates, grid)
        for loc_id, name, color in targets
    ]
    min_required, max_required = _required_extremes(stats_by_location)

    return VacationSummary(
        total_planned_dates=len(dates),
        min_required=min_required,
        max_required=max_required,
        stats_by_location=stats_by_location,
        intervals_by_location=intervals_by_location,
    )


# =============================================================================
# Date-set editing
# =============================================================================


def toggle_vacation_date(date_iso: str, current: set[str]) -> set[str]:
    updated = set(current)
    if date_iso in updated:
        updated.discard(date_iso)
    else:
        updated.add(date_iso)
    return updated


def range_dates_in_grid(year: int, start_iso: str, end_iso: str, grid: YearGrid) -> list[str]:
    """Dates between start and end (either order) that are valid days of ``year``."""
    result = []
    for date_iso in dates_between(start_iso, end_iso, year):
        day_info = grid.get(grid_key_for_iso(date_iso) or "")
        if day_info is not None and day_info.is_valid:
            result.append(date_iso)
    return result


def add_vacation_range(
    year: int, start_iso: str, end_iso: str, current: set[str], grid: YearGrid
) -> set[str]:
    return set(current) | set(range_dates_in_grid(year, start_iso, end_iso, grid))


def toggle_vacation_range(
    year: int, start_iso: str, end_iso: str, current: set[str], grid: YearGrid
) -> tuple[set[str], RangeMode, list[str]]:
    """
    Add or remove a whole range at once.

    The range is removed when more than half of its valid dates are already
    selected, otherwise it is added.

    Returns:
        (new date set, mode applied, dates in the range)
    """
    range_dates = range_dates_in_grid(year, start_iso, end_iso, grid)
    selected = sum(1 for d in range_dates if d in current)
    mode: RangeMode = "remove" if selected > len(range_dates) / 2 else "add"

    if mode == "add":
        updated = set(current) | set(range_dates)
    else:
        updated = set(current) - set(range_dates)
    return updated, mode, range_dates


def clear_vacation_dates() -> set[str]:
    return set()


class VacationDateStore:
    """Per-year vacation date sets persisted as ``{year: [sorted dates]}``."""

    def __init__(self, store: KeyValueStore):
        self._store = store

    def _load_all(self) -> dict[str, list[str]]:
        data = read_json_storage(
            self._store, STORAGE_KEYS["vacation"], LEGACY_STORAGE_KEYS["vacation"]
        )
        if not isinstance(data, dict):
            return {}
        return data

    def load(self, year: int) -> set[str]:
        dates = self._load_all().get(str(year)) or []
        if not isinstance(dates, list):
            logger.warning("Ignoring malformed vacation dates stored for %s", year)
            return set()
        return {d for d in dates if isinstance(d, str)}

    def save(self, year: int, dates: Iterable[str]) -> list[str]:
        data = self._load_all()
        data[str(year)] = sorted(set(dates))
        write_json_storage(self._store, STORAGE_KEYS["vacation"], data)
        return data[str(year)]

    def toggle(self, year: int, date_iso: str) -> list[str]:
        return self.save(year, toggle_vacation_date(date_iso, self.load(year)))

    def add_range(self, year: int, start_iso: str, end_iso: str, grid: YearGrid) -> list[str]:
        return self.save(year, add_vacation_range(year, start_iso, end_iso, self.load(year), grid))

    def toggle_range(
        self, year: int, start_iso: str, end_iso: str, grid: YearGrid
    ) -> tuple[list[str], RangeMode, list[str]]:
        updated, mode, affected = toggle_vacation_range(
            year, start_iso, end_iso, self.load(year), grid
        )
        return self.save(year, updated), mode, affected

    def clear(self, year: int) -> list[str]:
        return self.save(year, clear_vacation_dates())


# =============================================================================
# CSV export
# =============================================================================


def _csv_text(rows: list[list]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerows(rows)
    return buffer.getvalue().rstrip("\n")


def export_vacation_dates_csv(vacation_dates: Iterable[str]) -> str:
    rows: list[list] = [["Date", "Weekday"]]
    rows += [[d, weekday_name(d)] for d in sorted(set(vacation_dates))]
    return _csv_text(rows)


def export_vacation_results_csv(summary: VacationSummary) -> str:
    rows: list[list] = [
        [
            "Region/Calendar",
            "Planned Dates",
            "Excluded (Weekends)",
            "Excluded (Holidays)",
            "Vacation Days Required",
        ]
    ]
    for stats in summary.stats_by_location:
        rows.append(
            [
                stats.location_name,
                stats.planned_count,
                stats.weekend_excluded_count,
                stats.holiday_excluded_count,
                stats.required_vacation_days,
            ]
        )

    rows.append([])
    rows.append(["Total Planned Dates", summary.total_planned_dates])
    for label, extreme in (
        ("Minimum Required", summary.min_required),
        ("Maximum Required", summary.max_required),
    ):
        rows.append([label, f"{extreme.count} ({', '.join(extreme.locations)})"])
    return _csv_text(rows)
