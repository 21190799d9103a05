"""
Energy Coins — Command line interface.

Thin adapter over LedgerService: parses arguments, calls the core, prints
the result. Dates default to today.
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

from pydantic import ValidationError

from energy_coins.adapters import csv_transfer, json_transfer
from energy_coins.adapters.storage_factory import create_storage
from energy_coins.core.errors import EnergyCoinsError, InvalidDateFormat
from energy_coins.core.ledger_service import LedgerService
from energy_coins.core.stats import week_boundaries
from energy_coins.core.time_arithmetic import parse_date
from energy_coins.data.models import CATEGORY_NAMES, ActionPatch, Category, NewAction, Priority
from energy_coins.data.store import ActionStore

logger = logging.getLogger(__name__)


def _date_arg(value: str) -> str:
    try:
        parse_date(value)
    except InvalidDateFormat as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc
    return value


def _format_hours(stats: dict[Category, float]) -> str:
    return "\n".join(f"  {CATEGORY_NAMES[cat]:<14} {hours:5.2f}h" for cat, hours in stats.items())


def cmd_summary(service: LedgerService, args: argparse.Namespace) -> None:
    summary = service.day_summary(args.date)
    print(f"{summary.date}: {summary.remaining_coins} coins left "
          f"of {summary.available_coins} ({summary.energy_percentage:.0f}% energy)")
    for action in service.store.get_actions(args.date):
        print(f"  {action.start_time}-{action.end_time}  {action.title} "
              f"[{action.category.value}, {action.priority.value}]  id={action.id}")


def cmd_timeline(service: LedgerService, args: argparse.Namespace) -> None:
    for hour in service.active_hours():
        status = service.coin_status(args.date, hour)
        label = f"{status.action.title} ({status.category.value})" if status.occupied else "free"
        print(f"  {hour:02d}:00  {label}")


def cmd_add(service: LedgerService, args: argparse.Namespace) -> None:
    start, end = args.start, args.end
    if start is None:
        slot = service.next_available_slot(args.date, args.duration)
        start, end = slot.start_time, slot.end_time
    action = service.store.save_action(args.date, NewAction(
        title=args.title,
        category=args.category,
        start_time=start,
        end_time=end,
        priority=args.priority,
        note=args.note,
    ))
    print(f"Added {action.title} {action.start_time}-{action.end_time} (id={action.id})")


def cmd_update(service: LedgerService, args: argparse.Namespace) -> None:
    fields = {
        "title": args.title,
        "category": args.category,
        "start_time": args.start,
        "end_time": args.end,
        "priority": args.priority,
        "note": args.note,
    }
    patch = ActionPatch(id=args.id, **{k: v for k, v in fields.items() if v is not None})
    action = service.store.save_action(args.date, patch)
    if action is None:
        print(f"No action {args.id} on {args.date}")
        return
    print(f"Updated {action.title} {action.start_time}-{action.end_time}")


def cmd_delete(service: LedgerService, args: argparse.Namespace) -> None:
    if service.store.delete_action(args.date, args.id):
        print(f"Deleted {args.id}")
    else:
        print(f"No action {args.id} on {args.date}")


def cmd_move(service: LedgerService, args: argparse.Namespace) -> None:
    action = service.move_action(args.date, args.id, args.hour)
    if action is None:
        print(f"No action {args.id} on {args.date}")
        return
    print(f"Moved {action.title} to {action.start_time}-{action.end_time}")


def cmd_slot(service: LedgerService, args: argparse.Namespace) -> None:
    slot = service.next_available_slot(args.date, args.duration)
    print(f"{slot.start_time}-{slot.end_time}")


def cmd_stats(service: LedgerService, args: argparse.Namespace) -> None:
    day = parse_date(args.date)
    if args.period == "day":
        print(f"{args.date}:")
        print(_format_hours(service.category_stats(args.date)))
        hourly = service.hourly_stats(args.date)
        busy = ", ".join(f"{h:02d}:00×{n}" for h, n in enumerate(hourly) if n)
        print(f"  hours: {busy or '-'}")
    elif args.period == "week":
        monday, sunday = week_boundaries(day)
        print(f"Week {monday.isoformat()} – {sunday.isoformat()}:")
        for day_stats in service.week_stats(monday):
            print(f"  {day_stats.day_label} {day_stats.date}  {day_stats.total_hours:5.2f}h")
        print(_format_hours(service.week_category_stats(monday)))
    else:
        print(f"Month {day.year}-{day.month:02d}:")
        print(_format_hours(service.month_category_stats(day.year, day.month)))


def cmd_report(service: LedgerService, args: argparse.Namespace) -> None:
    report = service.summary_report(args.date)
    print(f"{report.date}: {report.total_hours:.2f}h scheduled, "
          f"{report.utilization:.1f}% of {report.available_coins} coins")
    if report.top_category is not None:
        print(f"  top category: {CATEGORY_NAMES[report.top_category]}")
    for insight in report.insights:
        print(f"  [{insight.kind.value}] {insight.title}: {insight.message}")


def cmd_suggest(service: LedgerService, args: argparse.Namespace) -> None:
    for entry in service.store.get_suggestions(args.query):
        print(f"  {entry.title} ({entry.category.value}, used {entry.count}×)")


def cmd_settings(service: LedgerService, args: argparse.Namespace) -> None:
    partial = {}
    if args.sleep_start:
        partial["sleep_start"] = args.sleep_start
    if args.sleep_end:
        partial["sleep_end"] = args.sleep_end
    settings = service.store.update_settings(partial) if partial else service.store.get_settings()
    print(f"Sleep {settings.sleep_start}-{settings.sleep_end}, "
          f"{service.available_coins()} coins per day")


def cmd_export_csv(service: LedgerService, args: argparse.Namespace) -> None:
    count = csv_transfer.write_csv(service.store, args.path)
    print(f"Exported {count} actions to {args.path}")


def cmd_import_csv(service: LedgerService, args: argparse.Namespace) -> None:
    result = csv_transfer.read_csv(service.store, args.path)
    print(result.message)


def cmd_export_json(service: LedgerService, args: argparse.Namespace) -> None:
    Path(args.path).write_text(json_transfer.export_json(service.store), encoding="utf-8")
    print(f"Backup written to {args.path}")


def cmd_import_json(service: LedgerService, args: argparse.Namespace) -> None:
    result = json_transfer.import_json(service.store, Path(args.path).read_text(encoding="utf-8"))
    print(f"Restored {result.imported_days} days (backup version {result.version})")


def cmd_sample(service: LedgerService, args: argparse.Namespace) -> None:
    actions = service.create_sample_data(args.date)
    print(f"Created {len(actions)} sample actions on {args.date}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="energy-coins", description="Plan your day in hourly coins.")
    parser.add_argument("--storage", choices=["json", "sqlite", "memory"], default=None)
    parser.add_argument("--data", default=None, help="path of the JSON file or SQLite database")
    sub = parser.add_subparsers(dest="command", required=True)

    def dated(name: str, handler, help_text: str) -> argparse.ArgumentParser:
        p = sub.add_parser(name, help=help_text)
        p.add_argument("--date", type=_date_arg, default=date.today().isoformat())
        p.set_defaults(handler=handler)
        return p

    dated("summary", cmd_summary, "coins left and the day's actions")
    dated("timeline", cmd_timeline, "occupancy of each active hour")

    p = dated("add", cmd_add, "schedule an action (next free slot when no time given)")
    p.add_argument("title")
    p.add_argument("category", choices=[c.value for c in Category])
    p.add_argument("--start")
    p.add_argument("--end")
    p.add_argument("--duration", type=int, default=60)
    p.add_argument("--priority", choices=[pr.value for pr in Priority], default="medium")
    p.add_argument("--note", default="")

    p = dated("update", cmd_update, "change some fields of an action")
    p.add_argument("id")
    p.add_argument("--title")
    p.add_argument("--category", choices=[c.value for c in Category])
    p.add_argument("--start")
    p.add_argument("--end")
    p.add_argument("--priority", choices=[pr.value for pr in Priority])
    p.add_argument("--note")

    p = dated("delete", cmd_delete, "remove an action")
    p.add_argument("id")

    p = dated("move", cmd_move, "move an action to another hour")
    p.add_argument("id")
    p.add_argument("hour", type=int)

    p = dated("slot", cmd_slot, "next free slot")
    p.add_argument("--duration", type=int, default=60)

    p = dated("stats", cmd_stats, "hours per category")
    p.add_argument("--period", choices=["day", "week", "month"], default="day")

    dated("report", cmd_report, "productivity insights")
    dated("sample", cmd_sample, "create a demonstration day")

    p = sub.add_parser("suggest", help="previously used titles")
    p.add_argument("query")
    p.set_defaults(handler=cmd_suggest)

    p = sub.add_parser("settings", help="show or change the sleep window")
    p.add_argument("--sleep-start")
    p.add_argument("--sleep-end")
    p.set_defaults(handler=cmd_settings)

    for name, handler in (
        ("export-csv", cmd_export_csv),
        ("import-csv", cmd_import_csv),
        ("export-json", cmd_export_json),
        ("import-json", cmd_import_json),
    ):
        p = sub.add_parser(name)
        p.add_argument("path")
        p.set_defaults(handler=handler)

    return parser


def configure_logging(level: str | None = None) -> None:
    """Root logging setup shared by main.py and the console script."""
    if level is None:
        from energy_coins.config import settings
        level = settings.LOG_LEVEL
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    args = build_parser().parse_args(argv)
    try:
        service = LedgerService(ActionStore(create_storage(args.storage, args.data)))
        args.handler(service, args)
    except (EnergyCoinsError, ValidationError, ValueError, OSError) as exc:
        logger.debug("%s failed", args.command, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0
