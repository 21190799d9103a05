"""
Energy Coins — Centralized configuration.

Loads settings from .env and validates them.
Storage adapters fall back to this module when no explicit path is given.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

# Load .env from project root (one level up from energy_coins/config.py)
_ENV_PATH = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_ENV_PATH)

_STORAGE_BACKENDS = ("json", "sqlite", "memory")


class Settings(BaseModel):
    """Application settings loaded from environment variables."""

    # Storage backend: "json" | "sqlite" | "memory"
    STORAGE_BACKEND: str = "json"

    # JSON document store (only used when STORAGE_BACKEND=json)
    DATA_PATH: str = "data/energy_coins.json"

    # SQLite (only used when STORAGE_BACKEND=sqlite)
    DB_PATH: str = "data/energy_coins.db"

    # Title suggestions kept in the action history
    HISTORY_LIMIT: int = 50

    LOG_LEVEL: str = "INFO"

    @field_validator("STORAGE_BACKEND", mode="before")
    @classmethod
    def parse_backend(cls, v: str) -> str:
        backend = str(v).strip().lower()
        if backend not in _STORAGE_BACKENDS:
            raise ValueError(
                f"STORAGE_BACKEND must be one of {', '.join(_STORAGE_BACKENDS)}, got {v!r}"
            )
        return backend

    @field_validator("HISTORY_LIMIT", mode="before")
    @classmethod
    def parse_limit(cls, v: str | int) -> int:
        limit = int(v)
        if limit < 1:
            raise ValueError("HISTORY_LIMIT must be positive")
        return limit

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def parse_level(cls, v: str) -> str:
        return str(v).strip().upper()


def _load_settings() -> Settings:
    """Load settings from the environment."""
    return Settings(
        STORAGE_BACKEND=os.getenv("ENERGY_COINS_STORAGE", "json"),
        DATA_PATH=os.getenv("ENERGY_COINS_DATA_PATH", "data/energy_coins.json"),
        DB_PATH=os.getenv("ENERGY_COINS_DB_PATH", "data/energy_coins.db"),
        HISTORY_LIMIT=os.getenv("ENERGY_COINS_HISTORY_LIMIT", "50"),
        LOG_LEVEL=os.getenv("ENERGY_COINS_LOG_LEVEL", "INFO"),
    )


# Singleton — imported lazily by adapters as:
#   from energy_coins.config import settings
settings = _load_settings()
