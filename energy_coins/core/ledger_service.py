"""
Energy Coins — Ledger Service.

UI-agnostic façade over one ActionStore: every read a view needs (budget,
occupancy, slots, statistics) and the few mutations that combine engine
logic with the store (moving an action, seeding sample data).

Each UI adapter (CLI, web, ...) holds a LedgerService and renders the
returned dataclasses in its own way.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import TYPE_CHECKING

from energy_coins.core import budget, insights, occupancy, slot_finder, stats
from energy_coins.core.time_arithmetic import minute_of_day, minutes_to_time, time_to_minutes
from energy_coins.data.models import ActionPatch, Category, NewAction, Priority

if TYPE_CHECKING:
    from energy_coins.data.models import Action
    from energy_coins.data.store import ActionStore

logger = logging.getLogger(__name__)

_SLEEP_REMINDER_LEAD = 30


# ---------------------------------------------------------------------------
# Response types
# ---------------------------------------------------------------------------


@dataclass
class DaySummary:
    date: str
    available_coins: int
    used_coins: int
    remaining_coins: int
    energy_percentage: float


@dataclass
class Reminder:
    key: str           # "morning" | "sleep"
    message: str


class LedgerService:
    """Read-views and compound operations for one injected store."""

    def __init__(self, store: ActionStore) -> None:
        self.store = store

    # ------------------------------------------------------------------
    # Budget
    # ------------------------------------------------------------------

    def available_coins(self) -> int:
        return budget.available_coins(self.store.get_settings())

    def used_coins(self, date_key: str) -> int:
        return occupancy.used_coins(self.store.get_actions(date_key))

    def day_summary(self, date_key: str) -> DaySummary:
        available = self.available_coins()
        used = self.used_coins(date_key)
        remaining = budget.remaining_coins(available, used)
        return DaySummary(
            date=date_key,
            available_coins=available,
            used_coins=used,
            remaining_coins=remaining,
            energy_percentage=budget.energy_percentage(available, remaining),
        )

    def minutes_until_sleep(self, now: datetime | None = None) -> int:
        return budget.minutes_until_sleep(self.store.get_settings(), now or datetime.now())

    # ------------------------------------------------------------------
    # Occupancy and slots
    # ------------------------------------------------------------------

    def coin_status(self, date_key: str, hour: int) -> occupancy.CoinStatus:
        return occupancy.coin_status(self.store.get_actions(date_key), hour)

    def timeline(self, date_key: str) -> list[occupancy.CoinStatus]:
        return occupancy.timeline(self.store.get_actions(date_key))

    def active_hours(self) -> list[int]:
        return slot_finder.active_hours_for(self.store.get_settings())

    def next_available_slot(
        self,
        date_key: str,
        duration: int = slot_finder.DEFAULT_DURATION,
        now: datetime | None = None,
    ) -> slot_finder.Slot:
        return slot_finder.next_available_slot(
            self.store.get_actions(date_key), self.store.get_settings(), duration, now=now,
        )

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    def category_stats(self, date_key: str) -> dict[Category, float]:
        return stats.category_stats(self.store.get_actions(date_key))

    def week_stats(self, start_date: date) -> list[stats.DayStats]:
        return stats.week_stats(self.store, start_date)

    def week_category_stats(self, start_date: date) -> dict[Category, float]:
        return stats.week_category_stats(self.store, start_date)

    def month_category_stats(self, year: int, month: int) -> dict[Category, float]:
        return stats.month_category_stats(self.store, year, month)

    def hourly_stats(self, date_key: str) -> list[int]:
        return stats.hourly_stats(self.store.get_actions(date_key))

    def summary_report(self, date_key: str) -> insights.SummaryReport:
        return insights.build_summary_report(
            date_key,
            self.category_stats(date_key),
            self.hourly_stats(date_key),
            self.available_coins(),
        )

    # ------------------------------------------------------------------
    # Compound mutations
    # ------------------------------------------------------------------

    def move_action(self, date_key: str, action_id: str, target_hour: int) -> Action | None:
        """Re-place an action to start at ``target_hour``, keeping its duration.

        Returns None when the action does not exist. Raises a validation
        error when the moved action would run past midnight.
        """
        action = self.store.get_action(date_key, action_id)
        if action is None:
            logger.warning("Cannot move missing action %s on %s", action_id, date_key)
            return None

        new_start = target_hour * 60
        patch = ActionPatch(
            id=action_id,
            start_time=minutes_to_time(new_start),
            end_time=minutes_to_time(new_start + action.duration_minutes),
        )
        return self.store.save_action(date_key, patch)

    def due_reminders(self, now: datetime | None = None) -> list[Reminder]:
        """Reminders whose moment is the current minute."""
        now = now or datetime.now()
        settings = self.store.get_settings()
        current = minute_of_day(now)
        reminders: list[Reminder] = []

        if settings.notifications.morning and current == time_to_minutes(settings.sleep_end):
            reminders.append(Reminder(
                key="morning",
                message="Good morning! Don't forget to plan your first actions.",
            ))

        if settings.notifications.sleep and current == time_to_minutes(settings.sleep_start) - _SLEEP_REMINDER_LEAD:
            remaining = self.day_summary(now.date().isoformat()).remaining_coins
            reminders.append(Reminder(
                key="sleep",
                message=f"Bedtime in {_SLEEP_REMINDER_LEAD} minutes. {remaining} coins left.",
            ))

        return reminders

    def create_sample_data(self, date_key: str) -> list[Action]:
        """Seed a demonstration day."""
        saved = []
        for title, category, start, end, priority, note in _SAMPLE_ACTIONS:
            saved.append(self.store.save_action(date_key, NewAction(
                title=title,
                category=category,
                start_time=start,
                end_time=end,
                priority=priority,
                note=note,
            )))
        logger.info("Sample data created for %s (%d actions)", date_key, len(saved))
        return saved


_SAMPLE_ACTIONS = [
    ("Breakfast", Category.REST, "08:30", "09:00", Priority.MEDIUM, "Oatmeal with fruit"),
    ("Project work", Category.WORK, "09:00", "12:00", Priority.HIGH, "New feature"),
    ("Lunch", Category.REST, "12:00", "13:00", Priority.MEDIUM, ""),
    ("Call mom", Category.COMMUNICATION, "13:30", "14:00", Priority.MEDIUM, ""),
    ("Study Python", Category.LEARN, "15:00", "16:30", Priority.HIGH, "Async patterns"),
    ("Groceries", Category.TASKS, "17:00", "17:30", Priority.MEDIUM, "Food for the week"),
    ("Workout", Category.SPORT, "18:00", "19:30", Priority.HIGH, "Strength training"),
    ("Movie night", Category.ENTERTAINMENT, "20:00", "22:00", Priority.LOW, ""),
]
