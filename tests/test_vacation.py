"""Tests for vacation analysis, date-set editing and CSV export."""

import asyncio

import pytest

from app.data.locations import get_location_by_id
from app.schemas.holiday import CustomCalendar
from app.schemas.vacation import VacationDateDetail
from app.services.calendar_grid import build_year_grid
from app.services.dates import dates_between, weekday_name
from app.services.storage import LEGACY_STORAGE_KEYS, STORAGE_KEYS, InMemoryStore
from app.services.vacation import (
    VacationDateStore,
    add_vacation_range,
    compute_location_intervals,
    compute_location_stats,
    compute_vacation_summary,
    export_vacation_dates_csv,
    export_vacation_results_csv,
    group_dates_into_intervals,
    toggle_vacation_date,
    toggle_vacation_range,
)

FULL_WEEK = dates_between("2026-03-02", "2026-03-08")


def _detail(date_iso: str) -> VacationDateDetail:
    return VacationDateDetail(
        date_iso=date_iso, weekday=weekday_name(date_iso), status="required", reason="Working day"
    )


@pytest.fixture
def bavaria():
    return get_location_by_id("de-by").model_copy(update={"color": "#aa0000"})


@pytest.fixture
def berlin():
    return get_location_by_id("de-be").model_copy(update={"color": "#0000aa"})


@pytest.fixture
def grid(holiday_provider, bavaria, berlin):
    return asyncio.run(build_year_grid(2026, [bavaria, berlin], [], holiday_provider))


@pytest.fixture
def empty_grid(holiday_provider):
    return asyncio.run(build_year_grid(2026, [], [], holiday_provider))


class TestIntervals:
    def test_gap_breaks_run(self):
        intervals = group_dates_into_intervals(
            [_detail("2026-03-05"), _detail("2026-03-02"), _detail("2026-03-03")]
        )
        assert [(i.start_iso, i.end_iso, i.count) for i in intervals] == [
            ("2026-03-02", "2026-03-03", 2),
            ("2026-03-05", "2026-03-05", 1),
        ]
        assert intervals[0].start_weekday == "Monday"
        assert intervals[0].end_weekday == "Tuesday"
        assert intervals[1].start_weekday == "Thursday"

    def test_runs_cross_month_and_year_boundaries(self):
        intervals = group_dates_into_intervals(
            [_detail(d) for d in ["2025-12-31", "2026-01-01", "2026-02-28", "2026-03-01"]]
        )
        assert [(i.start_iso, i.end_iso) for i in intervals] == [
            ("2025-12-31", "2026-01-01"),
            ("2026-02-28", "2026-03-01"),
        ]

    def test_empty(self):
        assert group_dates_into_intervals([]) == []


class TestLocationStats:
    def test_full_week_excludes_weekend(self, grid):
        stats = compute_location_stats("de-be", "Berlin", "#0000aa", set(FULL_WEEK), grid)
        assert stats.planned_count == 7
        assert stats.required_vacation_days == 5
        assert stats.weekend_excluded_count == 2
        assert stats.holiday_excluded_count == 0
        assert [d.date_iso for d in stats.excluded_dates] == ["2026-03-07", "2026-03-08"]
        assert {d.reason for d in stats.excluded_dates} == {"Weekend"}
        assert [(i.start_iso, i.end_iso, i.count) for i in stats.required_intervals] == [
            ("2026-03-02", "2026-03-06", 5)
        ]
        assert [(i.start_iso, i.end_iso) for i in stats.excluded_intervals] == [
            ("2026-03-07", "2026-03-08")
        ]

    def test_weekday_holiday_is_excluded(self, grid):
        dates = {"2026-06-03", "2026-06-04", "2026-06-05"}

        bavaria = compute_location_stats("de-by", "Bavaria", "#aa0000", dates, grid)
        assert bavaria.required_vacation_days == 2
        assert bavaria.holiday_excluded_count == 1
        assert bavaria.excluded_dates[0].status == "holiday"
        assert bavaria.excluded_dates[0].reason == "Holiday: Fronleichnam"

        berlin = compute_location_stats("de-be", "Berlin", "#0000aa", dates, grid)
        assert berlin.required_vacation_days == 3
        assert berlin.holiday_excluded_count == 0

    def test_unresolvable_dates_are_dropped(self, grid):
        dates = {"2026-03-02", "2025-03-03", "not-a-date"}
        stats = compute_location_stats("de-be", "Berlin", "#0000aa", dates, grid)
        assert stats.planned_count == 3
        assert stats.required_vacation_days == 1

    def test_unknown_location_counts_nothing(self, grid):
        stats = compute_location_stats("xx", "Nowhere", "#000000", set(FULL_WEEK), grid)
        assert stats.required_vacation_days == 0
        assert stats.weekend_excluded_count == 0
        assert stats.planned_count == 7


class TestLocationIntervals:
    def test_run_spanning_weekend_stays_one_interval(self, grid):
        dates = set(dates_between("2026-03-06", "2026-03-09"))
        summary = compute_location_intervals("de-be", "Berlin", "#0000aa", dates, grid)

        assert len(summary.intervals) == 1
        interval = summary.intervals[0]
        assert (interval.start_iso, interval.end_iso) == ("2026-03-06", "2026-03-09")
        assert interval.total_days == 4
        assert interval.required_days == 2
        assert interval.excluded_weekends == 2
        assert [d.weekday for d in interval.excluded_details] == ["Saturday", "Sunday"]
        assert summary.total_planned == 4
        assert summary.total_required == 2
        assert summary.total_excluded == 2

    def test_holiday_reason_is_the_name(self, grid):
        summary = compute_location_intervals("de-by", "Bavaria", "#aa0000", {"2026-06-04"}, grid)
        assert summary.intervals[0].excluded_holidays == 1
        assert summary.intervals[0].excluded_details[0].reason == "Fronleichnam"

    def test_gaps_split_intervals(self, grid):
        dates = {"2026-03-02", "2026-03-03", "2026-03-05"}
        summary = compute_location_intervals("de-be", "Berlin", "#0000aa", dates, grid)
        assert [i.total_days for i in summary.intervals] == [2, 1]

    def test_no_dates(self, grid):
        summary = compute_location_intervals("de-be", "Berlin", "#0000aa", set(), grid)
        assert summary.intervals == []
        assert summary.total_planned == 0


class TestVacationSummary:
    def test_min_and_max(self, grid, bavaria, berlin):
        dates = dates_between("2026-06-01", "2026-06-05")
        summary = compute_vacation_summary(dates, grid, [bavaria, berlin], [])

        assert summary.total_planned_dates == 5
        assert summary.min_required.count == 4
        assert summary.min_required.locations == ["Germany — Bavaria"]
        assert summary.max_required.count == 5
        assert summary.max_required.locations == ["Germany — Berlin"]
        assert [s.location_id for s in summary.stats_by_location] == ["de-by", "de-be"]
        assert [s.location_id for s in summary.intervals_by_location] == ["de-by", "de-be"]

    def test_ties_collect_all_locations(self, grid, bavaria, berlin):
        summary = compute_vacation_summary(FULL_WEEK, grid, [bavaria, berlin], [])
        assert summary.min_required.count == summary.max_required.count == 5
        assert summary.min_required.locations == ["Germany — Bavaria", "Germany — Berlin"]

    @pytest.mark.asyncio
    async def test_custom_calendar_stats(self, holiday_provider, berlin, team_calendar_document):
        calendar = CustomCalendar.model_validate(team_calendar_document)
        grid = await build_year_grid(2026, [berlin], [calendar], holiday_provider)

        summary = compute_vacation_summary(FULL_WEEK, grid, [berlin], [calendar])
        team = summary.stats_by_location[1]
        assert team.location_id == "custom-team"
        assert team.location_name == "Team Calendar"
        # Friday/Saturday weekend plus the Team Day holiday on Wednesday
        assert team.weekend_excluded_count == 2
        assert team.holiday_excluded_count == 1
        assert team.required_vacation_days == 4

    def test_empty_dates(self, grid, bavaria):
        summary = compute_vacation_summary([], grid, [bavaria], [])
        assert summary.total_planned_dates == 0
        assert summary.min_required.count == 0
        assert summary.min_required.locations == ["Germany — Bavaria"]

    def test_no_locations(self, empty_grid):
        summary = compute_vacation_summary(FULL_WEEK, empty_grid, [], [])
        assert summary.total_planned_dates == 7
        assert summary.min_required.model_dump() == {"count": 0, "locations": []}
        assert summary.max_required.model_dump() == {"count": 0, "locations": []}
        assert summary.stats_by_location == []

    def test_duplicate_dates_count_once(self, grid, berlin):
        summary = compute_vacation_summary(["2026-03-02", "2026-03-02"], grid, [berlin], [])
        assert summary.total_planned_dates == 1


class TestDateSetEditing:
    def test_toggle(self):
        dates = toggle_vacation_date("2026-03-02", set())
        assert dates == {"2026-03-02"}
        assert toggle_vacation_date("2026-03-02", dates) == set()

    def test_toggle_does_not_mutate_input(self):
        current = {"2026-03-02"}
        toggle_vacation_date("2026-03-03", current)
        assert current == {"2026-03-02"}

    def test_add_range_in_either_order(self, empty_grid):
        forward = add_vacation_range(2026, "2026-03-02", "2026-03-04", set(), empty_grid)
        backward = add_vacation_range(2026, "2026-03-04", "2026-03-02", set(), empty_grid)
        assert forward == backward == {"2026-03-02", "2026-03-03", "2026-03-04"}

    def test_range_limited_to_year(self, empty_grid):
        dates = add_vacation_range(2026, "2025-12-30", "2026-01-02", set(), empty_grid)
        assert dates == {"2026-01-01", "2026-01-02"}

    def test_toggle_range_adds_when_mostly_unselected(self, empty_grid):
        current = {"2026-03-02", "2026-03-03"}
        updated, mode, affected = toggle_vacation_range(
            2026, "2026-03-02", "2026-03-06", current, empty_grid
        )
        assert mode == "add"
        assert len(affected) == 5
        assert updated == set(affected)

    def test_toggle_range_removes_when_mostly_selected(self, empty_grid):
        current = {"2026-03-02", "2026-03-03", "2026-03-04", "2026-04-01"}
        updated, mode, _ = toggle_vacation_range(
            2026, "2026-03-02", "2026-03-06", current, empty_grid
        )
        assert mode == "remove"
        assert updated == {"2026-04-01"}

    def test_toggle_range_exactly_half_adds(self, empty_grid):
        current = {"2026-03-02", "2026-03-03"}
        _, mode, _ = toggle_vacation_range(2026, "2026-03-02", "2026-03-05", current, empty_grid)
        assert mode == "add"

    def test_range_ending_on_last_representable_date(self, empty_grid):
        dates = add_vacation_range(2026, "2026-12-30", "9999-12-31", set(), empty_grid)
        assert dates == {"2026-12-30", "2026-12-31"}

    def test_very_wide_range_covers_the_year(self, empty_grid):
        dates = add_vacation_range(2026, "0001-01-01", "9999-12-31", set(), empty_grid)
        assert len(dates) == 365
        assert min(dates) == "2026-01-01"
        assert max(dates) == "2026-12-31"

    def test_toggle_range_outside_year_is_empty(self, empty_grid):
        updated, _, affected = toggle_vacation_range(
            2026, "9999-12-30", "9999-12-31", {"2026-03-02"}, empty_grid
        )
        assert affected == []
        assert updated == {"2026-03-02"}


class TestVacationDateStore:
    def test_round_trip_per_year(self):
        store = VacationDateStore(InMemoryStore())
        store.save(2026, ["2026-03-03", "2026-03-02"])
        store.save(2027, ["2027-01-04"])
        assert store.load(2026) == {"2026-03-02", "2026-03-03"}
        assert store.load(2027) == {"2027-01-04"}
        assert store.load(2028) == set()

    def test_saved_sorted(self):
        backend = InMemoryStore()
        VacationDateStore(backend).save(2026, ["2026-03-03", "2026-03-02"])
        assert backend.get(STORAGE_KEYS["vacation"]) == '{"2026": ["2026-03-02", "2026-03-03"]}'

    def test_legacy_key_is_migrated(self):
        backend = InMemoryStore({LEGACY_STORAGE_KEYS["vacation"]: '{"2026": ["2026-05-01"]}'})
        assert VacationDateStore(backend).load(2026) == {"2026-05-01"}
        assert backend.get(STORAGE_KEYS["vacation"]) is not None

    def test_corrupt_data_degrades_to_empty(self):
        backend = InMemoryStore({STORAGE_KEYS["vacation"]: "{not json"})
        assert VacationDateStore(backend).load(2026) == set()

    def test_edits(self, empty_grid):
        store = VacationDateStore(InMemoryStore())
        assert store.toggle(2026, "2026-03-02") == ["2026-03-02"]
        assert store.add_range(2026, "2026-03-03", "2026-03-04", empty_grid) == [
            "2026-03-02",
            "2026-03-03",
            "2026-03-04",
        ]
        dates, mode, _ = store.toggle_range(2026, "2026-03-02", "2026-03-04", empty_grid)
        assert mode == "remove"
        assert dates == []
        store.toggle(2026, "2026-03-10")
        assert store.clear(2026) == []


class TestCsv:
    def test_dates_csv(self):
        text = export_vacation_dates_csv({"2026-03-03", "2026-03-02"})
        assert text == "Date,Weekday\n2026-03-02,Monday\n2026-03-03,Tuesday"

    def test_results_csv(self, grid, bavaria, berlin):
        summary = compute_vacation_summary(FULL_WEEK, grid, [bavaria, berlin], [])
        lines = export_vacation_results_csv(summary).split("\n")

        assert lines[0] == (
            "Region/Calendar,Planned Dates,Excluded (Weekends),"
            "Excluded (Holidays),Vacation Days Required"
        )
        assert lines[1] == "Germany — Bavaria,7,2,0,5"
        assert lines[3] == ""
        assert lines[4] == "Total Planned Dates,7"
        assert lines[5] == 'Minimum Required,"5 (Germany — Bavaria, Germany — Berlin)"'
