"""
Energy Coins — Statistics.

Roll-ups of scheduled time: hours per category for a day, a week or a
calendar month, and an hour-of-day activity histogram. All functions are
read-only; dates with no data contribute zeros.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import TYPE_CHECKING

from energy_coins.core.occupancy import HOURS_PER_DAY, touched_hours
from energy_coins.data.models import Category

if TYPE_CHECKING:
    from energy_coins.data.models import Action
    from energy_coins.data.store import ActionStore

DAYS_PER_WEEK = 7


@dataclass
class DayStats:
    """One day of a week breakdown."""

    date: str                 # ISO date YYYY-MM-DD
    day_label: str            # short weekday name, e.g. "Mon"
    total_hours: float
    categories: dict[Category, float] = field(default_factory=dict)


def empty_category_totals() -> dict[Category, float]:
    return {cat: 0.0 for cat in Category}


def category_stats(actions: list[Action]) -> dict[Category, float]:
    """Fractional hours per category; every category is present."""
    stats = empty_category_totals()
    for action in actions:
        stats[action.category] += action.duration_minutes / 60
    return stats


def sum_category_totals(totals: list[dict[Category, float]]) -> dict[Category, float]:
    """Element-wise sum of several category breakdowns."""
    aggregated = empty_category_totals()
    for stats in totals:
        for cat, hours in stats.items():
            aggregated[cat] += hours
    return aggregated


def week_dates(start_date: date) -> list[date]:
    return [start_date + timedelta(days=offset) for offset in range(DAYS_PER_WEEK)]


def week_stats(store: ActionStore, start_date: date) -> list[DayStats]:
    """Seven consecutive days of category breakdowns starting at ``start_date``."""
    stats: list[DayStats] = []
    for day in week_dates(start_date):
        day_stats = category_stats(store.get_actions(day.isoformat()))
        stats.append(DayStats(
            date=day.isoformat(),
            day_label=calendar.day_abbr[day.weekday()],
            total_hours=sum(day_stats.values()),
            categories=day_stats,
        ))
    return stats


def week_category_stats(store: ActionStore, start_date: date) -> dict[Category, float]:
    """Category hours summed over the week starting at ``start_date``."""
    return sum_category_totals([d.categories for d in week_stats(store, start_date)])


def month_category_stats(store: ActionStore, year: int, month: int) -> dict[Category, float]:
    """Category hours summed over every day of a calendar month (month is 1-12)."""
    _, days_in_month = calendar.monthrange(year, month)
    return sum_category_totals([
        category_stats(store.get_actions(date(year, month, day).isoformat()))
        for day in range(1, days_in_month + 1)
    ])


def hourly_stats(actions: list[Action]) -> list[int]:
    """Touches per hour of the day.

    Unlike used_coins this does not deduplicate: two actions in the same
    hour count twice.
    """
    histogram = [0] * HOURS_PER_DAY
    for action in actions:
        for hour in touched_hours(action):
            if 0 <= hour < HOURS_PER_DAY:
                histogram[hour] += 1
    return histogram


def week_boundaries(day: date) -> tuple[date, date]:
    """Monday and Sunday of the week containing ``day``."""
    monday = day - timedelta(days=day.weekday())
    return monday, monday + timedelta(days=DAYS_PER_WEEK - 1)
