"""Tests for custom calendar validation, storage and templating."""

import json

import pytest

from app.exceptions import ConflictError, NotFoundError
from app.schemas.holiday import CustomCalendar, CustomCalendarRules
from app.services.custom_calendars import (
    EXAMPLE_CUSTOM_CALENDAR,
    CustomCalendarRepository,
    create_calendar_from_location,
    validate_custom_calendar,
    weekend_days_from_rules,
)
from app.services.storage import LEGACY_STORAGE_KEYS, STORAGE_KEYS, InMemoryStore


def _fields(result):
    return [e.field for e in result.errors]


class TestValidation:
    def test_valid_document(self, team_calendar_document):
        result = validate_custom_calendar(team_calendar_document)
        assert result.valid is True
        assert result.errors == []
        assert result.calendar.meta.id == "team"
        assert result.calendar.holidays[1].half_day is True

    def test_example_is_valid(self):
        assert validate_custom_calendar(EXAMPLE_CUSTOM_CALENDAR).valid is True

    def test_accepts_json_text(self, team_calendar_document):
        assert validate_custom_calendar(json.dumps(team_calendar_document)).valid is True

    def test_invalid_json_text(self):
        result = validate_custom_calendar("{nope")
        assert result.valid is False
        assert _fields(result) == ["root"]

    @pytest.mark.parametrize("document", [None, [], 42, "[1, 2]"])
    def test_root_must_be_object(self, document):
        result = validate_custom_calendar(document)
        assert result.valid is False
        assert _fields(result) == ["root"]

    def test_missing_sections(self):
        result = validate_custom_calendar({})
        assert _fields(result) == ["meta", "holidays"]

    def test_meta_fields(self):
        result = validate_custom_calendar(
            {"meta": {"id": " ", "name": 7}, "holidays": []}
        )
        assert _fields(result) == ["meta.id", "meta.name", "meta.defaultColor"]

    def test_bad_weekend_day(self, team_calendar_document):
        team_calendar_document["rules"] = {"weekend": ["FRIDAY", "Funday"]}
        result = validate_custom_calendar(team_calendar_document)
        assert result.valid is False
        assert _fields(result) == ["rules.weekend"]
        assert "Funday" in result.errors[0].message

    def test_holiday_errors_carry_index(self, team_calendar_document):
        team_calendar_document["holidays"] = [
            {"date": "2026-01-01", "name": "Fine", "type": "OTHER"},
            {"date": "2026-02-30", "name": "Impossible", "type": "OTHER"},
            {"date": "01/05/2026", "name": "", "type": "HOLIDAY", "halfDay": "yes"},
        ]
        result = validate_custom_calendar(team_calendar_document)
        assert result.valid is False
        assert _fields(result) == [
            "holidays[1].date",
            "holidays[2].date",
            "holidays[2].name",
            "holidays[2].type",
            "holidays[2].halfDay",
        ]
        assert result.errors[0].message == "Invalid date: 2026-02-30"

    def test_never_raises_on_wrong_optional_types(self, team_calendar_document):
        team_calendar_document["meta"]["description"] = ["not", "a", "string"]
        result = validate_custom_calendar(team_calendar_document)
        assert result.valid is False
        assert result.errors


class TestWeekendRules:
    def test_default(self):
        assert weekend_days_from_rules(None) == [0, 6]
        assert weekend_days_from_rules(CustomCalendarRules()) == [0, 6]
        assert weekend_days_from_rules({"weekend": []}) == [0, 6]

    def test_named_days(self):
        assert weekend_days_from_rules({"weekend": ["FRIDAY", "SATURDAY"]}) == [5, 6]
        assert weekend_days_from_rules(CustomCalendarRules(weekend=["SUNDAY"])) == [0]


class TestRepository:
    def test_add_list_get(self, calendar_repository, team_calendar_document):
        calendar = CustomCalendar.model_validate(team_calendar_document)
        calendar_repository.add(calendar)

        assert [c.meta.id for c in calendar_repository.list_all()] == ["team"]
        assert calendar_repository.get("team").model_dump() == calendar.model_dump()
        assert calendar_repository.get("other") is None

    def test_duplicate_id_conflicts(self, calendar_repository, team_calendar_document):
        calendar = CustomCalendar.model_validate(team_calendar_document)
        calendar_repository.add(calendar)
        with pytest.raises(ConflictError):
            calendar_repository.add(calendar)

    def test_update(self, calendar_repository, team_calendar_document):
        calendar_repository.add(CustomCalendar.model_validate(team_calendar_document))
        team_calendar_document["meta"]["name"] = "Renamed"
        calendar_repository.update(CustomCalendar.model_validate(team_calendar_document))
        assert calendar_repository.get("team").meta.name == "Renamed"

    def test_update_unknown(self, calendar_repository, team_calendar_document):
        with pytest.raises(NotFoundError):
            calendar_repository.update(CustomCalendar.model_validate(team_calendar_document))

    def test_delete(self, calendar_repository, team_calendar_document):
        calendar_repository.add(CustomCalendar.model_validate(team_calendar_document))
        calendar_repository.delete("team")
        assert calendar_repository.list_all() == []

    def test_get_many_keeps_request_order(self, calendar_repository):
        for cid in ("a", "b", "c"):
            calendar_repository.add(
                CustomCalendar.model_validate(
                    {"meta": {"id": cid, "name": cid, "defaultColor": "#000000"}, "holidays": []}
                )
            )
        assert [c.meta.id for c in calendar_repository.get_many(["c", "x", "a"])] == ["c", "a"]

    def test_stored_as_camel_case_json(self, memory_store, calendar_repository, team_calendar_document):
        calendar_repository.add(CustomCalendar.model_validate(team_calendar_document))
        stored = json.loads(memory_store.get(STORAGE_KEYS["custom_calendars"]))
        assert stored[0]["meta"]["defaultColor"] == "#7B61FF"
        assert stored[0]["holidays"][1]["halfDay"] is True
        assert "notes" not in stored[0]["holidays"][0]

    def test_reads_legacy_key(self, team_calendar_document):
        backend = InMemoryStore(
            {LEGACY_STORAGE_KEYS["custom_calendars"]: json.dumps([team_calendar_document])}
        )
        assert [c.meta.id for c in CustomCalendarRepository(backend).list_all()] == ["team"]

    def test_skips_malformed_entries(self, team_calendar_document):
        backend = InMemoryStore(
            {STORAGE_KEYS["custom_calendars"]: json.dumps([{"meta": {}}, team_calendar_document])}
        )
        assert len(CustomCalendarRepository(backend).list_all()) == 1


class TestFromLocation:
    @pytest.mark.asyncio
    async def test_clones_regional_holidays(self, holiday_provider):
        calendar = await create_calendar_from_location("de-be", 2026, holiday_provider)

        assert calendar.meta.id == "de-be-2026-copy"
        assert calendar.meta.name == "Germany — Berlin (2026)"
        assert calendar.meta.timezone == "UTC"
        assert calendar.meta.default_color == "#7B61FF"
        assert calendar.rules.weekend == ["SATURDAY", "SUNDAY"]

        # Epiphany and Corpus Christi are not Berlin holidays
        assert [h.date for h in calendar.holidays] == [
            "2026-01-01",
            "2026-04-03",
            "2026-04-06",
        ]
        new_year = calendar.holidays[0]
        assert new_year.name == "Neujahr"
        assert new_year.notes == "New Year's Day"
        assert new_year.type == "PUBLIC_HOLIDAY"

    @pytest.mark.asyncio
    async def test_result_validates(self, holiday_provider):
        calendar = await create_calendar_from_location("de-by", 2026, holiday_provider)
        document = calendar.model_dump(by_alias=True, exclude_none=True)
        assert validate_custom_calendar(document).valid is True

    @pytest.mark.asyncio
    async def test_unknown_location(self, holiday_provider):
        with pytest.raises(NotFoundError):
            await create_calendar_from_location("atlantis", 2026, holiday_provider)
