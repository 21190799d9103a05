"""Time-of-day arithmetic — pure functions on "HH:MM" strings and minute offsets.

``time_to_minutes`` is the bare parser used on values that were already
validated. Anything coming from outside (forms, imports, settings) must go
through ``parse_time_of_day`` first.
"""

from __future__ import annotations

import re
from datetime import date, datetime

from energy_coins.core.errors import InvalidDateFormat, InvalidTimeFormat

MINUTES_PER_DAY = 24 * 60

# Matched with fullmatch: a trailing newline is not accepted.
TIME_PATTERN = re.compile(r"([0-1]?[0-9]|2[0-3]):[0-5][0-9]")
DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


def time_to_minutes(time_str: str) -> int:
    """Convert "HH:MM" to minutes from midnight. Does not validate."""
    hours, minutes = time_str.split(":")
    return int(hours) * 60 + int(minutes)


def minutes_to_time(minutes: int) -> str:
    """Format a minute count as zero-padded "HH:MM".

    The hour is not wrapped: 1440 formats as "24:00".
    """
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def is_valid_time(time_str: object) -> bool:
    """Check whether a value is a valid 24h "HH:MM" (or "H:MM") string."""
    return isinstance(time_str, str) and TIME_PATTERN.fullmatch(time_str) is not None


def parse_time_of_day(time_str: object) -> int:
    """Validate and convert a time string to minutes in 0..1439.

    Raises InvalidTimeFormat on anything that is not HH:MM.
    """
    if not is_valid_time(time_str):
        raise InvalidTimeFormat(time_str)
    return time_to_minutes(time_str)


def normalize_time(time_str: object) -> str:
    """Validate a time string and return its zero-padded "HH:MM" form."""
    return minutes_to_time(parse_time_of_day(time_str))


def hour_of(time_str: str) -> int:
    """Hour component of a valid time string ("08:30" → 8)."""
    return int(time_str.split(":")[0])


def is_valid_date(date_str: object) -> bool:
    """Check a YYYY-MM-DD date key (shape and calendar validity)."""
    if not isinstance(date_str, str) or not DATE_PATTERN.fullmatch(date_str):
        return False
    try:
        date.fromisoformat(date_str)
    except ValueError:
        return False
    return True


def parse_date(date_str: object) -> date:
    """Validate a YYYY-MM-DD key and return it as a date."""
    if not is_valid_date(date_str):
        raise InvalidDateFormat(date_str)
    return date.fromisoformat(date_str)


def minute_of_day(moment: datetime) -> int:
    """Minutes since midnight for a wall-clock datetime."""
    return moment.hour * 60 + moment.minute
