"""Tests for energy_coins.adapters.json_transfer — JSON backup and restore."""

import json

import pytest

from energy_coins.adapters.json_storage import MemoryStorage
from energy_coins.adapters.json_transfer import export_json, import_json, validate_backup
from energy_coins.core.errors import InvalidImportData
from energy_coins.data.models import NewAction
from energy_coins.data.store import ActionStore

DAY = "2026-03-10"


def _new(title="Block", start="09:00", end="10:00"):
    return NewAction(title=title, category="work", start_time=start, end_time=end)


class TestExport:
    def test_envelope(self, store):
        store.save_action(DAY, _new())
        payload = json.loads(export_json(store))
        assert payload["version"] == "1.0"
        assert payload["exportDate"]
        assert DAY in payload["data"]["days"]
        assert payload["settings"]["sleepStart"] == "22:30"
        assert payload["categories"]["learn"] == "Learning"


class TestImport:
    def test_restore_into_empty_store(self, store):
        store.save_action(DAY, _new(title="Backed up"))
        store.update_settings({"sleep_start": "23:30"})
        backup = export_json(store)

        target = ActionStore(MemoryStorage(), history_limit=50)
        result = import_json(target, backup)
        assert result.imported_days == 1
        assert result.version == "1.0"
        assert [a.title for a in target.get_actions(DAY)] == ["Backed up"]
        assert target.get_settings().sleep_start == "23:30"

    def test_backup_days_replace_local_days(self, store):
        backup_source = ActionStore(MemoryStorage(), history_limit=50)
        backup_source.save_action("2026-03-11", _new(title="From backup"))
        store.save_action(DAY, _new(title="Local"))
        import_json(store, export_json(backup_source))
        # Top-level merge: the backup's "days" mapping replaces ours wholesale
        assert store.get_actions(DAY) == []
        assert [a.title for a in store.get_actions("2026-03-11")] == ["From backup"]

    def test_settings_merge(self, store):
        payload = {"version": "1.0", "data": {}, "settings": {"theme": "light"}}
        import_json(store, json.dumps(payload))
        assert store.get_settings().theme == "light"
        assert store.get_settings().sleep_start == "22:30"

    def test_not_json(self, store):
        with pytest.raises(InvalidImportData):
            import_json(store, "{not json")

    def test_wrong_shape(self, store):
        with pytest.raises(InvalidImportData):
            import_json(store, json.dumps({"data": {}}))

    def test_failed_apply_restores_previous_state(self, store):
        store.save_action(DAY, _new(title="Keep me"))
        bad = {"version": "1.0", "data": {"days": {DAY: {"actions": [{"title": "broken"}]}}}}
        with pytest.raises(InvalidImportData):
            import_json(store, json.dumps(bad))
        assert [a.title for a in store.get_actions(DAY)] == ["Keep me"]

    @pytest.mark.parametrize("start, end", [("9am", "10:00"), ("11:00", "09:00"), ("10:00", "10:00")])
    def test_bad_action_times_rejected(self, store, start, end):
        store.save_action(DAY, _new(title="Keep me"))
        bad = {"version": "1.0", "data": {"days": {DAY: {"actions": [{
            "id": "b1", "title": "Broken", "category": "work",
            "startTime": start, "endTime": end,
        }]}}}}
        with pytest.raises(InvalidImportData):
            import_json(store, json.dumps(bad))
        assert [a.title for a in store.get_actions(DAY)] == ["Keep me"]

    def test_non_object_day_leaves_store_untouched(self, store):
        store.save_action(DAY, _new(title="Keep me"))
        store.update_settings({"sleep_start": "23:00"})
        bad = {
            "version": "1.0",
            "data": {"days": {DAY: "oops"}},
            "settings": {"sleepStart": "20:00"},
        }
        with pytest.raises(InvalidImportData):
            import_json(store, json.dumps(bad))
        assert store.get_settings().sleep_start == "23:00"
        assert [a.title for a in store.get_actions(DAY)] == ["Keep me"]

    def test_days_must_be_an_object(self, store):
        bad = {"version": "1.0", "data": {"days": ["2026-03-10"]}}
        with pytest.raises(InvalidImportData):
            import_json(store, json.dumps(bad))

    def test_validate_backup(self):
        assert validate_backup({"version": "1.0", "data": {}}) is True
        assert validate_backup([]) is False
        assert validate_backup({"version": "", "data": {}}) is False
