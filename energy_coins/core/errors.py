"""Domain errors raised at the ledger's validation and persistence boundaries."""

from __future__ import annotations


class EnergyCoinsError(Exception):
    """Base class for every error raised by the ledger."""


class InvalidTimeFormat(EnergyCoinsError, ValueError):
    """A time-of-day string does not match HH:MM (00:00–23:59)."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Invalid time of day: {value!r} (expected HH:MM)")


class InvalidDateFormat(EnergyCoinsError, ValueError):
    """A date key does not match YYYY-MM-DD."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Invalid date: {value!r} (expected YYYY-MM-DD)")


class UnknownCategoryOrPriority(EnergyCoinsError, ValueError):
    """A category or priority name could not be mapped back to its key."""

    def __init__(self, kind: str, value: object) -> None:
        self.kind = kind
        self.value = value
        super().__init__(f"Unknown {kind}: {value!r}")


class InvalidImportData(EnergyCoinsError, ValueError):
    """A JSON backup does not have the expected structure."""


class PersistenceWriteFailure(EnergyCoinsError):
    """The durable write failed; the in-memory state is ahead of storage.

    The mutation that triggered the write has already been applied.
    Call ``ActionStore.flush()`` to retry.
    """
