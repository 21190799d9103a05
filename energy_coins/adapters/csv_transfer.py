"""CSV import/export of scheduled actions.

Column order: date, title, category, start time, end time, duration
(hours), priority, note. Category and priority are written as display names
and mapped back to their keys on import; raw keys are accepted too.
"""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from energy_coins.core.errors import EnergyCoinsError, UnknownCategoryOrPriority
from energy_coins.core.time_arithmetic import normalize_time, parse_date
from energy_coins.data.models import (
    CATEGORY_NAMES,
    PRIORITY_NAMES,
    Category,
    NewAction,
    Priority,
)

if TYPE_CHECKING:
    from energy_coins.data.store import ActionStore

logger = logging.getLogger(__name__)

HEADER = [
    "Date",
    "Title",
    "Category",
    "Start time",
    "End time",
    "Duration (hours)",
    "Priority",
    "Note",
]

_MIN_COLUMNS = 6


@dataclass
class ImportResult:
    imported: int = 0
    errors: int = 0

    @property
    def message(self) -> str:
        return f"Imported {self.imported} actions, skipped {self.errors}"


def find_category_key(name: str) -> Category:
    """Reverse-map a display name (or raw key) to its Category."""
    name = name.strip()
    for cat, display in CATEGORY_NAMES.items():
        if display == name:
            return cat
    try:
        return Category(name)
    except ValueError:
        raise UnknownCategoryOrPriority("category", name) from None


def find_priority_key(name: str) -> Priority:
    """Reverse-map a display name (or raw key) to its Priority."""
    name = name.strip()
    for prio, display in PRIORITY_NAMES.items():
        if display == name:
            return prio
    try:
        return Priority(name)
    except ValueError:
        raise UnknownCategoryOrPriority("priority", name) from None


def export_csv(store: ActionStore) -> str:
    """Every action of every day as CSV text, header first, all cells quoted."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(HEADER)

    count = 0
    for day in store.iter_days():
        for action in day.actions:
            writer.writerow([
                day.date,
                action.title,
                CATEGORY_NAMES.get(action.category, action.category.value),
                action.start_time,
                action.end_time,
                f"{action.duration_minutes / 60:.2f}",
                PRIORITY_NAMES.get(action.priority, action.priority.value),
                action.note,
            ])
            count += 1

    logger.info("Exported %d actions to CSV", count)
    return buffer.getvalue()


def _parse_row(values: list[str]) -> tuple[str, NewAction]:
    if len(values) < _MIN_COLUMNS:
        raise ValueError(f"expected at least {_MIN_COLUMNS} columns, got {len(values)}")

    date_key, title, category, start_time, end_time = (v.strip() for v in values[:5])
    priority = values[6] if len(values) > 6 else ""
    note = values[7] if len(values) > 7 else ""

    parse_date(date_key)
    action = NewAction(
        title=title,
        category=find_category_key(category),
        priority=find_priority_key(priority),
        start_time=normalize_time(start_time),
        end_time=normalize_time(end_time),
        note=note,
    )
    return date_key, action


def import_csv(store: ActionStore, text: str) -> ImportResult:
    """Import every valid row; invalid rows are counted and skipped.

    Raises ValueError when the text holds no data rows at all.
    """
    text = text.lstrip("\ufeff")
    rows = [row for row in csv.reader(io.StringIO(text)) if any(cell.strip() for cell in row)]
    if len(rows) < 2:
        raise ValueError("CSV is empty or contains only a header")

    result = ImportResult()
    for row_number, values in enumerate(rows[1:], start=2):
        try:
            date_key, action = _parse_row(values)
        except (EnergyCoinsError, ValueError) as exc:
            result.errors += 1
            logger.warning("Skipping CSV row %d: %s", row_number, exc)
            continue
        store.save_action(date_key, action)
        result.imported += 1

    logger.info(result.message)
    return result


def write_csv(store: ActionStore, path: str | Path) -> int:
    """Export to a file (UTF-8 with BOM for spreadsheet apps); returns the action count."""
    Path(path).write_text("\ufeff" + export_csv(store), encoding="utf-8")
    return sum(len(day.actions) for day in store.iter_days())


def read_csv(store: ActionStore, path: str | Path) -> ImportResult:
    return import_csv(store, Path(path).read_text(encoding="utf-8"))
