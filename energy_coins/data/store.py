"""
Energy Coins — Action Store.

Owns every Day and its actions, the title history used for suggestions, and
the person's settings. Each mutation is applied in memory first, then the
whole document is written through the storage port.
"""

from __future__ import annotations

import logging
import threading
import uuid
from collections import defaultdict
from datetime import datetime
from typing import TYPE_CHECKING, Iterator

from energy_coins.core.errors import PersistenceWriteFailure
from energy_coins.data.models import (
    Action,
    ActionPatch,
    Category,
    Day,
    HistoryEntry,
    NewAction,
    UserSettings,
)

if TYPE_CHECKING:
    from energy_coins.ports.storage_port import StoragePort

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 5


def generate_id() -> str:
    """Return a new opaque action id."""
    return uuid.uuid4().hex


class ActionStore:
    """In-memory ledger of days and actions, persisted through a StoragePort.

    Mutations on the same date are serialized with a per-date lock; the
    document lock guards the history, the settings and the durable write.
    """

    def __init__(self, storage: StoragePort, history_limit: int | None = None) -> None:
        if history_limit is None:
            from energy_coins.config import settings
            history_limit = settings.HISTORY_LIMIT

        self._storage = storage
        self._history_limit = history_limit
        self._days: dict[str, Day] = {}
        self._history: list[HistoryEntry] = []
        self._settings = UserSettings()
        self._dirty = False
        self._doc_lock = threading.RLock()
        self._day_locks: defaultdict[str, threading.Lock] = defaultdict(threading.Lock)
        self.load()

    # ------------------------------------------------------------------
    # Document (de)serialization
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Replace the in-memory state with what the storage holds."""
        document = self._storage.load()
        with self._doc_lock:
            self._apply_document(document or {})
        logger.info("Ledger loaded: %d days, %d history entries", len(self._days), len(self._history))

    def _apply_document(self, document: dict) -> None:
        # Build everything first so a bad document leaves the current state intact.
        raw_days = document.get("days") or {}
        if not isinstance(raw_days, dict):
            raise ValueError("'days' must be an object keyed by date")
        for key, raw in raw_days.items():
            if not isinstance(raw, dict):
                raise ValueError(f"day {key!r} must be an object, got {type(raw).__name__}")

        settings = UserSettings.model_validate(document.get("settings") or {})
        days = {key: Day.from_dict(key, raw) for key, raw in raw_days.items()}
        history = [HistoryEntry.from_dict(h) for h in document.get("actionHistory") or []]

        self._settings = settings
        self._days = days
        self._history = history

    def to_document(self) -> dict:
        """The full ledger as JSON-compatible data."""
        with self._doc_lock:
            return {
                "settings": self._settings.to_dict(),
                "days": {key: day.to_dict() for key, day in self._days.items()},
                "actionHistory": [h.to_dict() for h in self._history],
            }

    def replace_data(self, document: dict) -> None:
        """Swap in a whole new document (used by JSON restore) and persist it."""
        with self._doc_lock:
            self._apply_document(document)
            self._persist()

    @property
    def dirty(self) -> bool:
        """True when the last durable write failed."""
        return self._dirty

    def flush(self) -> None:
        """Write the current state; raises PersistenceWriteFailure on error."""
        with self._doc_lock:
            self._persist()

    def _persist(self) -> None:
        try:
            self._storage.save(self.to_document())
        except Exception as exc:
            self._dirty = True
            logger.error("Failed to persist ledger: %s", exc)
            raise PersistenceWriteFailure(str(exc)) from exc
        self._dirty = False

    # ------------------------------------------------------------------
    # Days and actions
    # ------------------------------------------------------------------

    def get_day(self, date_key: str) -> Day:
        """Return the Day for a date, creating an empty one on first access."""
        with self._doc_lock:
            day = self._days.get(date_key)
            if day is None:
                day = Day(date=date_key)
                self._days[date_key] = day
            return day

    def has_day(self, date_key: str) -> bool:
        return date_key in self._days

    def iter_days(self) -> Iterator[Day]:
        """Days in insertion order."""
        with self._doc_lock:
            days = list(self._days.values())
        return iter(days)

    def get_actions(self, date_key: str) -> list[Action]:
        """Snapshot of a day's actions; an unknown date yields an empty list."""
        day = self._days.get(date_key)
        return list(day.actions) if day is not None else []

    def get_action(self, date_key: str, action_id: str) -> Action | None:
        for action in self.get_actions(date_key):
            if action.id == action_id:
                return action
        return None

    def save_action(self, date_key: str, action: NewAction | ActionPatch) -> Action | None:
        """Create a new action or merge a patch into an existing one.

        A NewAction gets a fresh id and created_at and is appended.
        An ActionPatch is shallow-merged over the action with the same id;
        returns None when no such action exists on that date.
        """
        with self._day_locks[date_key]:
            day = self.get_day(date_key)
            if isinstance(action, ActionPatch):
                saved = self._merge_patch(day, action)
            else:
                saved = Action(
                    id=generate_id(),
                    title=action.title,
                    category=action.category,
                    priority=action.priority,
                    start_time=action.start_time,
                    end_time=action.end_time,
                    note=action.note,
                    created_at=datetime.now().isoformat(),
                )
                day.actions.append(saved)
                logger.info(
                    "Action added on %s: %s '%s' %s-%s",
                    date_key, saved.id, saved.title, saved.start_time, saved.end_time,
                )

            with self._doc_lock:
                if saved is not None:
                    self._add_to_history(saved.title, saved.category)
                self._persist()
        return saved

    def _merge_patch(self, day: Day, patch: ActionPatch) -> Action | None:
        for index, existing in enumerate(day.actions):
            if existing.id != patch.id:
                continue
            merged = existing.to_dict()
            merged.update(_patch_to_document_keys(patch.changes()))
            # Re-validate the merged record so start < end still holds.
            checked = NewAction(
                title=merged["title"],
                category=merged["category"],
                priority=merged["priority"],
                start_time=merged["startTime"],
                end_time=merged["endTime"],
                note=merged["note"],
            )
            updated = Action(
                id=existing.id,
                title=checked.title,
                category=checked.category,
                priority=checked.priority,
                start_time=checked.start_time,
                end_time=checked.end_time,
                note=checked.note,
                created_at=existing.created_at,
            )
            day.actions[index] = updated
            logger.info("Action updated on %s: %s", day.date, updated.id)
            return updated

        logger.warning("Action %s not found on %s, nothing updated", patch.id, day.date)
        return None

    def delete_action(self, date_key: str, action_id: str) -> bool:
        """Remove an action by id. A missing id is a no-op returning False."""
        with self._day_locks[date_key]:
            day = self.get_day(date_key)
            remaining = [a for a in day.actions if a.id != action_id]
            deleted = len(remaining) != len(day.actions)
            day.actions = remaining
            with self._doc_lock:
                self._persist()
        if deleted:
            logger.info("Action %s deleted from %s", action_id, date_key)
        return deleted

    def set_notes(self, date_key: str, notes: str) -> Day:
        with self._day_locks[date_key]:
            day = self.get_day(date_key)
            day.notes = notes
            with self._doc_lock:
                self._persist()
        return day

    # ------------------------------------------------------------------
    # History and suggestions
    # ------------------------------------------------------------------

    def _add_to_history(self, title: str, category: Category) -> None:
        lowered = title.lower()
        for entry in self._history:
            if entry.title.lower() == lowered:
                entry.count += 1
                break
        else:
            self._history.append(HistoryEntry(title=title, category=category))

        self._history.sort(key=lambda h: h.count, reverse=True)
        del self._history[self._history_limit:]

    @property
    def history(self) -> list[HistoryEntry]:
        return list(self._history)

    def get_suggestions(self, query: str = "") -> list[HistoryEntry]:
        """Up to five remembered titles containing ``query``, most used first."""
        if not query:
            return []
        lowered = query.lower()
        matches = [h for h in self._history if lowered in h.title.lower()]
        matches.sort(key=lambda h: h.count, reverse=True)
        return matches[:MAX_SUGGESTIONS]

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def get_settings(self) -> UserSettings:
        return self._settings

    def update_settings(self, partial: dict) -> UserSettings:
        """Merge ``partial`` over the current settings (last writer wins)."""
        with self._doc_lock:
            merged = self._settings.to_dict()
            for key, value in partial.items():
                if key == "notifications" and isinstance(value, dict):
                    merged["notifications"] = {**merged["notifications"], **value}
                else:
                    merged[_SETTINGS_ALIASES.get(key, key)] = value
            self._settings = UserSettings.model_validate(merged)
            logger.info(
                "Settings updated: sleep %s-%s",
                self._settings.sleep_start, self._settings.sleep_end,
            )
            self._persist()
        return self._settings


_SETTINGS_ALIASES = {
    "sleep_start": "sleepStart",
    "sleep_end": "sleepEnd",
}


def _patch_to_document_keys(changes: dict) -> dict:
    renamed = {
        "start_time": "startTime",
        "end_time": "endTime",
    }
    return {renamed.get(key, key): value for key, value in changes.items()}
