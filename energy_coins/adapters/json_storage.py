"""JSON file storage adapter — the whole ledger in one document.

Writes go to a temp file in the same directory and are swapped in with
os.replace, so a crash mid-write never leaves a half-written document.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


class JsonFileStorage:
    """Persist the ledger document as a single JSON file."""

    def __init__(self, path: str | None = None) -> None:
        if path is None:
            from energy_coins.config import settings
            path = settings.DATA_PATH

        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict | None:
        if not self._path.exists():
            logger.debug("No data file at %s, starting empty", self._path)
            return None
        return json.loads(self._path.read_text(encoding="utf-8"))

    def save(self, document: dict) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_path = tempfile.mkstemp(
            prefix=f"{self._path.name}.", suffix=".tmp", dir=str(self._path.parent),
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(document, fh, ensure_ascii=False, indent=2)
            os.replace(temp_path, self._path)
        finally:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
        logger.debug("Ledger written to %s", self._path)


class MemoryStorage:
    """In-process storage; keeps a deep copy of the last saved document."""

    def __init__(self, document: dict | None = None) -> None:
        self._document = json.loads(json.dumps(document)) if document is not None else None
        self.save_count = 0

    def load(self) -> dict | None:
        if self._document is None:
            return None
        return json.loads(json.dumps(self._document))

    def save(self, document: dict) -> None:
        self._document = json.loads(json.dumps(document))
        self.save_count += 1
