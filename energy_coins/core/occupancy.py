"""Hour occupancy — which coins of a day are taken, and by what.

Intervals are half-open: an action 09:00–10:00 occupies hour 9 only.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from energy_coins.data.models import Action, Category

HOURS_PER_DAY = 24


@dataclass
class CoinStatus:
    """Occupancy of one hour-coin."""

    occupied: bool
    action: Action | None = None
    category: Category | None = None


def overlaps(start: int, end: int, window_start: int, window_end: int) -> bool:
    """Half-open overlap test between [start, end) and [window_start, window_end)."""
    return start < window_end and end > window_start


def coin_status(actions: list[Action], hour: int) -> CoinStatus:
    """Status of the coin for ``hour``.

    When several actions touch the hour, the first one in insertion order
    wins, regardless of priority or start time.
    """
    hour_start = hour * 60
    hour_end = (hour + 1) * 60
    for action in actions:
        if overlaps(action.start_minutes, action.end_minutes, hour_start, hour_end):
            return CoinStatus(occupied=True, action=action, category=action.category)
    return CoinStatus(occupied=False)


def timeline(actions: list[Action]) -> list[CoinStatus]:
    """Coin status for every hour of the day."""
    return [coin_status(actions, hour) for hour in range(HOURS_PER_DAY)]


def touched_hours(action: Action) -> list[int]:
    """Hours visited when striding through the action in 60-minute steps from its start."""
    return [minute // 60 for minute in range(action.start_minutes, action.end_minutes, 60)]


def used_coins(actions: list[Action]) -> int:
    """Number of distinct hours touched by any action.

    A 90-minute action from 09:30 touches hours 9 and 10 and costs two coins;
    a duplicate of an existing action costs nothing extra.
    """
    used: set[int] = set()
    for action in actions:
        used.update(touched_hours(action))
    return len(used)


def is_current_hour(date_key: str, hour: int, now: datetime | None = None) -> bool:
    """True when ``date_key`` is today and the wall clock is in ``hour``."""
    now = now or datetime.now()
    if date_key != now.date().isoformat():
        return False
    return now.hour == hour


def occupied_minutes(actions: list[Action]) -> set[int]:
    """Every minute covered by some action's [start, end)."""
    minutes: set[int] = set()
    for action in actions:
        minutes.update(range(action.start_minutes, action.end_minutes))
    return minutes
