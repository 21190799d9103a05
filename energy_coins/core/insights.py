"""Productivity insights — pure business logic.

Turns a day's category breakdown and hour histogram into a short list of
observations and a summary report.

No I/O: this module only transforms data.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from energy_coins.data.models import Category

_HIGH_UTILIZATION = 80.0
_LOW_UTILIZATION = 50.0
_MAX_WORK_REST_RATIO = 3.0


class InsightKind(Enum):
    SUCCESS = "success"
    WARNING = "warning"
    INFO = "info"


@dataclass
class Insight:
    kind: InsightKind
    title: str
    message: str


@dataclass
class SummaryReport:
    """Everything the analytics view shows for one day."""

    date: str
    total_hours: float
    available_coins: int
    utilization: float
    category_breakdown: dict[Category, float]
    insights: list[Insight] = field(default_factory=list)
    top_category: Category | None = None


def utilization_percent(total_hours: float, available: int) -> float:
    """Scheduled hours as a share of the coin budget; 0 when there is no budget."""
    if available <= 0:
        return 0.0
    return total_hours / available * 100


def build_insights(
    stats: dict[Category, float],
    hourly: list[int],
    available: int,
) -> list[Insight]:
    insights: list[Insight] = []
    total_hours = sum(stats.values())
    utilization = utilization_percent(total_hours, available)

    if utilization > _HIGH_UTILIZATION:
        insights.append(Insight(
            InsightKind.SUCCESS, "High productivity",
            f"You used {utilization:.1f}% of your available time",
        ))
    elif utilization < _LOW_UTILIZATION:
        insights.append(Insight(
            InsightKind.WARNING, "Time in reserve",
            f"Only {utilization:.1f}% of your time is used",
        ))

    work = stats.get(Category.WORK, 0.0)
    rest = stats.get(Category.REST, 0.0)
    if work / (rest or 1) > _MAX_WORK_REST_RATIO:
        insights.append(Insight(
            InsightKind.WARNING, "Work/rest imbalance",
            "Consider scheduling more rest",
        ))

    peak = max(hourly) if hourly else 0
    if peak > 0:
        insights.append(Insight(
            InsightKind.INFO, "Peak activity",
            f"Most active hour: {hourly.index(peak)}:00",
        ))

    return insights


def top_category(stats: dict[Category, float]) -> Category | None:
    """Category with the most hours; None when nothing is scheduled."""
    best: Category | None = None
    best_hours = 0.0
    for cat, hours in stats.items():
        if hours > best_hours:
            best, best_hours = cat, hours
    return best


def build_summary_report(
    date_key: str,
    stats: dict[Category, float],
    hourly: list[int],
    available: int,
) -> SummaryReport:
    total_hours = sum(stats.values())
    return SummaryReport(
        date=date_key,
        total_hours=total_hours,
        available_coins=available,
        utilization=utilization_percent(total_hours, available),
        category_breakdown=stats,
        insights=build_insights(stats, hourly, available),
        top_category=top_category(stats),
    )
