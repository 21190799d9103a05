"""Storage factory — creates the configured storage backend."""

from __future__ import annotations

from energy_coins.ports.storage_port import StoragePort


def create_storage(backend: str | None = None, path: str | None = None) -> StoragePort:
    """Create the storage adapter named by ``backend`` or by STORAGE_BACKEND."""
    if backend is None:
        from energy_coins.config import settings
        backend = settings.STORAGE_BACKEND

    if backend == "sqlite":
        from energy_coins.adapters.sqlite_storage import SqliteStorage
        return SqliteStorage(db_path=path)
    if backend == "memory":
        from energy_coins.adapters.json_storage import MemoryStorage
        return MemoryStorage()
    if backend == "json":
        from energy_coins.adapters.json_storage import JsonFileStorage
        return JsonFileStorage(path=path)
    raise ValueError(f"Unknown storage backend: {backend!r}")
