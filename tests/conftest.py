"""Shared test fixtures and configuration.

Sets environment defaults before any energy_coins import so a developer's
.env cannot point the tests at real data, and provides stores backed by
in-memory or temp-file storage.
"""

import os

# Patch env vars BEFORE any energy_coins imports
os.environ["ENERGY_COINS_STORAGE"] = "memory"
os.environ["ENERGY_COINS_HISTORY_LIMIT"] = "50"
os.environ["ENERGY_COINS_LOG_LEVEL"] = "DEBUG"

import pytest


DAY = "2026-03-10"


@pytest.fixture
def memory_storage():
    from energy_coins.adapters.json_storage import MemoryStorage
    return MemoryStorage()


@pytest.fixture
def store(memory_storage):
    """Return an ActionStore backed by in-memory storage."""
    from energy_coins.data.store import ActionStore
    return ActionStore(memory_storage, history_limit=50)


@pytest.fixture
def service(store):
    from energy_coins.core.ledger_service import LedgerService
    return LedgerService(store)


@pytest.fixture
def add(store):
    """Helper: add an action on a date and return it."""
    from energy_coins.data.models import NewAction

    def _add(start, end, category="work", title="Block", date_key=DAY, **kwargs):
        return store.save_action(date_key, NewAction(
            title=title, category=category, start_time=start, end_time=end, **kwargs,
        ))
    return _add
