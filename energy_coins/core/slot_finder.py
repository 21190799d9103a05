"""
Energy Coins — Slot Finder.

Proposes where the next action of a given length should go: the first
active hour (wake → sleep, wrapping past midnight) whose following
``duration`` minutes are all free. Hour-granular greedy first-fit; it does
not try to pack actions inside partially used hours.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from energy_coins.core.occupancy import occupied_minutes
from energy_coins.core.time_arithmetic import hour_of, minute_of_day, minutes_to_time

if TYPE_CHECKING:
    from energy_coins.data.models import Action, UserSettings

logger = logging.getLogger(__name__)

DEFAULT_DURATION = 60


@dataclass
class Slot:
    """A proposed time range."""

    start_time: str   # HH:MM
    end_time: str     # HH:MM, may read "24:00" or later for slots at the end of the day


def active_hours(wake_hour: int, sleep_hour: int) -> list[int]:
    """Hours from waking to sleeping, both inclusive.

    wake 8, sleep 23 → 8..23; wake 8, sleep 2 → 8..23 then 0..2.
    """
    if sleep_hour > wake_hour:
        return list(range(wake_hour, sleep_hour + 1))
    return list(range(wake_hour, 24)) + list(range(0, sleep_hour + 1))


def active_hours_for(settings: UserSettings) -> list[int]:
    return active_hours(hour_of(settings.sleep_end), hour_of(settings.sleep_start))


def _slot_at(start: int, duration: int) -> Slot:
    return Slot(start_time=minutes_to_time(start), end_time=minutes_to_time(start + duration))


def find_slot(
    actions: list[Action],
    hours: list[int],
    duration: int = DEFAULT_DURATION,
    now: datetime | None = None,
) -> Slot:
    """First fully free ``duration``-minute span starting on one of ``hours``.

    Falls back to the first hour even if it conflicts, and to the current
    wall-clock minute when ``hours`` is empty.
    """
    busy = occupied_minutes(actions)

    for hour in hours:
        hour_start = hour * 60
        if not any(m in busy for m in range(hour_start, hour_start + duration)):
            return _slot_at(hour_start, duration)

    if hours:
        logger.info("No free %d-minute slot in active hours, proposing first active hour", duration)
        return _slot_at(hours[0] * 60, duration)

    now = now or datetime.now()
    logger.info("No active hours configured, proposing current time")
    return _slot_at(minute_of_day(now), duration)


def next_available_slot(
    actions: list[Action],
    settings: UserSettings,
    duration: int = DEFAULT_DURATION,
    now: datetime | None = None,
) -> Slot:
    """Next free slot of ``duration`` minutes within the settings' active hours."""
    return find_slot(actions, active_hours_for(settings), duration, now=now)
