"""SQLite storage adapter.

One row per day plus a key/value table for settings and the action history.
A save rewrites the whole document inside one transaction, so readers never
see half of an update.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)


class SqliteStorage:
    """SQLite-backed storage for the ledger document."""

    def __init__(self, db_path: str | None = None) -> None:
        if db_path is None:
            from energy_coins.config import settings
            db_path = settings.DB_PATH

        self._db_path = db_path
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_db(self) -> None:
        """Create the tables if they don't exist."""
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS days (
                    date     TEXT PRIMARY KEY,
                    payload  TEXT NOT NULL
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS meta (
                    key      TEXT PRIMARY KEY,
                    payload  TEXT NOT NULL
                )
            """)
        logger.debug("Ledger tables initialized at %s", self._db_path)

    def load(self) -> dict | None:
        with self._connect() as conn:
            day_rows = conn.execute("SELECT date, payload FROM days ORDER BY date").fetchall()
            meta_rows = conn.execute("SELECT key, payload FROM meta").fetchall()

        if not day_rows and not meta_rows:
            return None

        document: dict = {"days": {row["date"]: json.loads(row["payload"]) for row in day_rows}}
        for row in meta_rows:
            document[row["key"]] = json.loads(row["payload"])
        return document

    def save(self, document: dict) -> None:
        days = document.get("days", {})
        with self._connect() as conn:
            conn.execute("DELETE FROM days")
            conn.executemany(
                "INSERT INTO days (date, payload) VALUES (?, ?)",
                [(key, json.dumps(day, ensure_ascii=False)) for key, day in days.items()],
            )
            for key, value in document.items():
                if key == "days":
                    continue
                conn.execute(
                    "INSERT OR REPLACE INTO meta (key, payload) VALUES (?, ?)",
                    (key, json.dumps(value, ensure_ascii=False)),
                )
        logger.debug("Ledger written to %s (%d days)", self._db_path, len(days))
