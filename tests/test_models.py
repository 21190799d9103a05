"""Tests for energy_coins.data.models — actions, patches and settings."""

from dataclasses import asdict

import pytest
from pydantic import ValidationError

from energy_coins.core.errors import InvalidTimeFormat
from energy_coins.data.models import (
    Action,
    ActionPatch,
    Category,
    Day,
    HistoryEntry,
    NewAction,
    Priority,
    UserSettings,
)


class TestAction:
    def test_interval_properties(self):
        action = Action(id="a1", title="Focus", category=Category.WORK,
                        start_time="09:30", end_time="11:00")
        assert action.start_minutes == 570
        assert action.end_minutes == 660
        assert action.duration_minutes == 90

    def test_defaults(self):
        action = Action(id="a1", title="Focus", category=Category.WORK,
                        start_time="09:00", end_time="10:00")
        assert action.priority is Priority.MEDIUM
        assert action.note == ""
        assert action.created_at == ""

    def test_from_dict_normalizes_times(self):
        action = Action.from_dict({
            "id": "x", "title": "Nap", "category": "rest",
            "startTime": "9:00", "endTime": "9:30",
        })
        assert action.start_time == "09:00"

    def test_from_dict_rejects_malformed_time(self):
        with pytest.raises(InvalidTimeFormat):
            Action.from_dict({
                "id": "x", "title": "Nap", "category": "rest",
                "startTime": "9am", "endTime": "10:00",
            })

    def test_from_dict_rejects_reversed_interval(self):
        with pytest.raises(ValueError, match="ends before it starts"):
            Action.from_dict({
                "id": "x", "title": "Nap", "category": "rest",
                "startTime": "11:00", "endTime": "09:00",
            })

    def test_document_round_trip(self):
        action = Action(id="a1", title="Run", category=Category.SPORT,
                        start_time="07:00", end_time="08:00", priority=Priority.HIGH,
                        note="park", created_at="2026-03-10T06:00:00")
        raw = action.to_dict()
        assert raw["startTime"] == "07:00"
        assert raw["category"] == "sport"
        assert Action.from_dict(raw) == action

    def test_from_dict_tolerates_missing_optional_fields(self):
        action = Action.from_dict({
            "id": "x", "title": "Nap", "category": "rest",
            "startTime": "14:00", "endTime": "14:30",
        })
        assert action.priority is Priority.MEDIUM
        assert action.note == ""

    def test_serializable(self):
        action = Action(id="a1", title="T", category=Category.OTHER,
                        start_time="10:00", end_time="11:00")
        d = asdict(action)
        assert d["title"] == "T"


class TestDay:
    def test_from_dict(self):
        day = Day.from_dict("2026-03-10", {"actions": [], "notes": "calm"})
        assert day.date == "2026-03-10"
        assert day.actions == []
        assert day.notes == "calm"


class TestHistoryEntry:
    def test_round_trip(self):
        entry = HistoryEntry(title="Gym", category=Category.SPORT, count=3)
        assert HistoryEntry.from_dict(entry.to_dict()) == entry


class TestNewAction:
    def test_valid(self):
        action = NewAction(title="  Lunch ", category="rest", start_time="12:00", end_time="13:00")
        assert action.title == "Lunch"
        assert action.category is Category.REST
        assert action.priority is Priority.MEDIUM

    def test_pads_times(self):
        action = NewAction(title="Early", category="work", start_time="7:00", end_time="8:15")
        assert action.start_time == "07:00"

    def test_blank_title_rejected(self):
        with pytest.raises(ValidationError):
            NewAction(title="   ", category="work", start_time="09:00", end_time="10:00")

    def test_unknown_category_rejected(self):
        with pytest.raises(ValidationError):
            NewAction(title="X", category="sleeping", start_time="09:00", end_time="10:00")

    def test_malformed_time_rejected(self):
        with pytest.raises(ValidationError):
            NewAction(title="X", category="work", start_time="9h", end_time="10:00")

    def test_end_must_follow_start(self):
        with pytest.raises(ValidationError):
            NewAction(title="X", category="work", start_time="10:00", end_time="10:00")
        with pytest.raises(ValidationError):
            NewAction(title="X", category="work", start_time="23:00", end_time="01:00")

    def test_none_note_becomes_empty(self):
        action = NewAction(title="X", category="work", start_time="09:00",
                           end_time="10:00", note=None)
        assert action.note == ""


class TestActionPatch:
    def test_changes_only_include_supplied_fields(self):
        patch = ActionPatch(id="a1", title="Renamed")
        assert patch.changes() == {"title": "Renamed"}

    def test_explicit_none_is_ignored(self):
        patch = ActionPatch(id="a1", note=None, priority="high")
        assert patch.changes() == {"priority": Priority.HIGH}

    def test_time_validated(self):
        with pytest.raises(ValidationError):
            ActionPatch(id="a1", start_time="99:99")


class TestUserSettings:
    def test_defaults(self):
        settings = UserSettings()
        assert settings.sleep_start == "22:30"
        assert settings.sleep_end == "08:30"
        assert settings.theme == "dark"
        assert settings.notifications.morning is True
        assert settings.notifications.sleep is True

    def test_accepts_document_aliases(self):
        settings = UserSettings.model_validate({"sleepStart": "23:00", "sleepEnd": "07:00"})
        assert settings.sleep_start == "23:00"
        assert settings.sleep_end == "07:00"

    def test_dumps_document_aliases(self):
        assert UserSettings().to_dict()["sleepStart"] == "22:30"

    def test_rejects_bad_time(self):
        with pytest.raises(ValidationError):
            UserSettings(sleep_start="late")
