"""
Energy Coins — Data Models.

Actions are the time-blocks a person spends coins on. They live inside a Day
keyed by ISO date. Stored documents and JSON backups use camelCase keys
(startTime, createdAt, ...); Python code uses snake_case.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from energy_coins.core.time_arithmetic import normalize_time, time_to_minutes


class Category(str, Enum):
    WORK = "work"
    REST = "rest"
    SPORT = "sport"
    COMMUNICATION = "communication"
    LEARN = "learn"
    ENTERTAINMENT = "entertainment"
    TASKS = "tasks"
    OTHER = "other"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# Display names used by CSV export and reverse-mapped on import.
CATEGORY_NAMES: dict[Category, str] = {
    Category.WORK: "Work",
    Category.REST: "Rest",
    Category.SPORT: "Sport",
    Category.COMMUNICATION: "Communication",
    Category.LEARN: "Learning",
    Category.ENTERTAINMENT: "Entertainment",
    Category.TASKS: "Tasks",
    Category.OTHER: "Other",
}

PRIORITY_NAMES: dict[Priority, str] = {
    Priority.LOW: "Low",
    Priority.MEDIUM: "Medium",
    Priority.HIGH: "High",
}


@dataclass
class Action:
    """A titled, categorized time-block within one day.

    start_time < end_time always holds; an action never wraps midnight.
    """

    id: str
    title: str
    category: Category
    start_time: str                   # HH:MM
    end_time: str                     # HH:MM
    priority: Priority = Priority.MEDIUM
    note: str = ""
    created_at: str = ""              # ISO timestamp, set once

    @property
    def start_minutes(self) -> int:
        return time_to_minutes(self.start_time)

    @property
    def end_minutes(self) -> int:
        return time_to_minutes(self.end_time)

    @property
    def duration_minutes(self) -> int:
        return self.end_minutes - self.start_minutes

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "category": self.category.value,
            "priority": self.priority.value,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "note": self.note,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, raw: dict) -> Action:
        """Rebuild a stored action, re-checking its times.

        Raises InvalidTimeFormat for a malformed time and ValueError when
        the interval is empty or reversed.
        """
        start_time = normalize_time(raw["startTime"])
        end_time = normalize_time(raw["endTime"])
        if time_to_minutes(start_time) >= time_to_minutes(end_time):
            raise ValueError(f"action {raw.get('id')!r} ends before it starts: {start_time}-{end_time}")
        return cls(
            id=str(raw["id"]),
            title=raw["title"],
            category=Category(raw["category"]),
            priority=Priority(raw.get("priority") or Priority.MEDIUM.value),
            start_time=start_time,
            end_time=end_time,
            note=raw.get("note") or "",
            created_at=raw.get("createdAt") or "",
        )


@dataclass
class Day:
    """All actions scheduled on one date, in insertion order."""

    date: str                         # ISO date YYYY-MM-DD
    actions: list[Action] = field(default_factory=list)
    notes: str = ""

    def to_dict(self) -> dict:
        return {
            "actions": [a.to_dict() for a in self.actions],
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, date_key: str, raw: dict) -> Day:
        return cls(
            date=date_key,
            actions=[Action.from_dict(a) for a in raw.get("actions", [])],
            notes=raw.get("notes") or "",
        )


@dataclass
class HistoryEntry:
    """A remembered action title for suggestions."""

    title: str
    category: Category
    count: int = 1

    def to_dict(self) -> dict:
        return {"title": self.title, "category": self.category.value, "count": self.count}

    @classmethod
    def from_dict(cls, raw: dict) -> HistoryEntry:
        return cls(
            title=raw["title"],
            category=Category(raw["category"]),
            count=int(raw.get("count", 1)),
        )


# ---------------------------------------------------------------------------
# Validated boundary contracts
# ---------------------------------------------------------------------------


class NewAction(BaseModel):
    """A new action submitted by a caller; the store assigns id and created_at.

    JSON example:
    {
        "title": "Deep work",
        "category": "work",
        "start_time": "09:00",
        "end_time": "12:00",
        "priority": "high",
        "note": ""
    }
    """
    title: str
    category: Category
    start_time: str    # HH:MM in 24h format
    end_time: str      # HH:MM in 24h format
    priority: Priority = Priority.MEDIUM
    note: str = ""

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title must not be empty")
        return v

    @field_validator("start_time", "end_time")
    @classmethod
    def valid_time(cls, v: str) -> str:
        return normalize_time(v)

    @field_validator("note", mode="before")
    @classmethod
    def strip_note(cls, v: str | None) -> str:
        return (v or "").strip()

    @model_validator(mode="after")
    def start_before_end(self) -> NewAction:
        if time_to_minutes(self.start_time) >= time_to_minutes(self.end_time):
            raise ValueError("end_time must be later than start_time")
        return self


class ActionPatch(BaseModel):
    """A partial update for an existing action.

    Only the fields that were set are merged over the stored record;
    ``id`` selects the record and is never changed.
    """
    id: str
    title: str | None = None
    category: Category | None = None
    start_time: str | None = None
    end_time: str | None = None
    priority: Priority | None = None
    note: str | None = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("title must not be empty")
        return v

    @field_validator("start_time", "end_time")
    @classmethod
    def valid_time(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return normalize_time(v)

    def changes(self) -> dict:
        """Fields supplied by the caller, excluding the id."""
        return self.model_dump(exclude_unset=True, exclude_none=True, exclude={"id"})


class NotificationSettings(BaseModel):
    morning: bool = True
    sleep: bool = True


class UserSettings(BaseModel):
    """The person's sleep schedule and display preferences.

    sleep_start/sleep_end bound the awake window: waking at sleep_end,
    going to bed at sleep_start. Either may lie on the other side of
    midnight.
    """
    model_config = ConfigDict(populate_by_name=True)

    sleep_start: str = Field(default="22:30", alias="sleepStart")
    sleep_end: str = Field(default="08:30", alias="sleepEnd")
    theme: str = "dark"
    notifications: NotificationSettings = Field(default_factory=NotificationSettings)

    @field_validator("sleep_start", "sleep_end")
    @classmethod
    def valid_time(cls, v: str) -> str:
        return normalize_time(v)

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)
