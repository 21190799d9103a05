"""Coin budget — pure business logic.

A coin is one whole awake hour. The budget depends only on the sleep
window, never on the date.

No I/O: this module only transforms data.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from energy_coins.core.time_arithmetic import MINUTES_PER_DAY, time_to_minutes

if TYPE_CHECKING:
    from energy_coins.data.models import UserSettings


def sleep_duration_minutes(sleep_start: str, sleep_end: str) -> int:
    """Minutes asleep; a window whose end is not after its start crosses midnight."""
    start = time_to_minutes(sleep_start)
    end = time_to_minutes(sleep_end)
    if end > start:
        return end - start
    return (MINUTES_PER_DAY - start) + end


def available_coins(settings: UserSettings) -> int:
    """Whole awake hours per day. Partial hours are dropped, not rounded.

    22:30 → 08:30 sleeps 600 minutes, leaving 840 awake: 14 coins.
    Equal start and end counts as a full day of sleep: 0 coins.
    """
    awake = MINUTES_PER_DAY - sleep_duration_minutes(settings.sleep_start, settings.sleep_end)
    return awake // 60


def remaining_coins(available: int, used: int) -> int:
    """Coins left; negative when the day is over-booked."""
    return available - used


def energy_percentage(available: int, remaining: int) -> float:
    """Share of the budget still unspent, 100 when there is no budget."""
    if available <= 0:
        return 100.0
    return remaining / available * 100


def minutes_until_sleep(settings: UserSettings, now: datetime) -> int:
    """Minutes from ``now`` until the next sleep_start (today or tomorrow)."""
    hour, minute = map(int, settings.sleep_start.split(":"))
    sleep_at = now.replace(hour=hour, minute=minute, second=0, microsecond=0)
    if sleep_at <= now:
        sleep_at += timedelta(days=1)
    return int((sleep_at - now).total_seconds() // 60)
