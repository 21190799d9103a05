"""JSON backup export/restore of the whole ledger."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import ValidationError

from energy_coins.core.errors import InvalidImportData
from energy_coins.data.models import CATEGORY_NAMES

if TYPE_CHECKING:
    from energy_coins.data.store import ActionStore

logger = logging.getLogger(__name__)

BACKUP_VERSION = "1.0"


@dataclass
class RestoreResult:
    imported_days: int
    version: str


def export_json(store: ActionStore) -> str:
    """Serialize the ledger with version and export metadata."""
    document = store.to_document()
    payload = {
        "version": BACKUP_VERSION,
        "exportDate": datetime.now().isoformat(),
        "data": document,
        "categories": {cat.value: name for cat, name in CATEGORY_NAMES.items()},
        "settings": document["settings"],
    }
    return json.dumps(payload, ensure_ascii=False, indent=2)


def validate_backup(payload: object) -> bool:
    return (
        isinstance(payload, dict)
        and bool(payload.get("version"))
        and isinstance(payload.get("data"), dict)
    )


def import_json(store: ActionStore, text: str) -> RestoreResult:
    """Merge a backup into the store: its days and settings win over ours.

    On any failure the previous state is put back and InvalidImportData is
    raised.
    """
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidImportData(f"Backup is not valid JSON: {exc}") from exc

    if not validate_backup(payload):
        raise InvalidImportData("Backup must be an object with 'version' and 'data'")

    backup = store.to_document()
    data = payload["data"]
    merged = {**backup, **data}
    if isinstance(payload.get("settings"), dict):
        merged["settings"] = {**backup["settings"], **payload["settings"]}

    try:
        store.replace_data(merged)
    except (ValidationError, KeyError, TypeError, ValueError) as exc:
        store.replace_data(backup)
        raise InvalidImportData(f"Backup could not be applied: {exc}") from exc

    imported_days = len(data.get("days") or {})
    logger.info("Restored backup version %s (%d days)", payload["version"], imported_days)
    return RestoreResult(imported_days=imported_days, version=str(payload["version"]))
