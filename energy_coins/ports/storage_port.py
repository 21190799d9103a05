"""Storage port — abstract interface for persisting the ledger document.

The store depends on this protocol, never on a specific backend.
The document is JSON-compatible:
    {"settings": {...}, "days": {"YYYY-MM-DD": {...}}, "actionHistory": [...]}
"""

from __future__ import annotations

from typing import Protocol


class StoragePort(Protocol):
    """Abstract persistence interface used by ActionStore."""

    def load(self) -> dict | None: ...

    def save(self, document: dict) -> None: ...
