"""CLI para registrar check-ins diarios y consultar puntos, racha y visión."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable
from datetime import date

from habit_tool.config import load_config, today_in
from habit_tool.model import CheckInValidationError, VisionRecord
from habit_tool.scoring import points_breakdown
from habit_tool.stats import OVERVIEW_FIELDS, format_average, weekly_overview
from habit_tool.storage import KeyValueStore, SQLiteStore, StorageError
from habit_tool.tracker import (
    apply_edits,
    load_snapshot,
    load_vision,
    open_draft,
    save_draft,
    save_vision,
)

logger = logging.getLogger(__name__)

_RITUAL_LABELS: tuple[tuple[str, str], ...] = (
    ("morning_mindset", "Morning Mindset"),
    ("affirmations_read", "Affirmations"),
    ("night_mindset", "Night Review"),
)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argparse namespace.
    """
    parser = argparse.ArgumentParser(
        description="Check-in diario de hábitos: puntos, racha y visión."
    )
    parser.add_argument("--db", default=None, help="Ruta del archivo SQLite.")
    parser.add_argument(
        "--tz", default=None, help="Zona horaria (default: la local del sistema)."
    )
    parser.add_argument("--verbose", action="store_true", help="Log detallado.")
    sub = parser.add_subparsers(dest="command", required=True)

    log = sub.add_parser("log", help="Registrar o reemplazar el check-in de un día.")
    log.add_argument("--date", default=None, help="Fecha YYYY-MM-DD (default: hoy).")
    log.add_argument("--sleep", dest="sleep_time", help="Hora de dormir HH:MM.")
    log.add_argument("--wake", dest="wake_time", help="Hora de despertar HH:MM.")
    log.add_argument("--sleep-quality", type=int, help="Calidad de sueño 1-10.")
    log.add_argument("--deep-work", dest="deep_work_blocks", type=int)
    log.add_argument("--distractions", dest="distraction_count", type=int)
    log.add_argument("--stimulation", dest="stimulation_score", type=int)
    log.add_argument("--diet", dest="diet_quality", type=int)
    log.add_argument("--energy", dest="energy_level", type=int)
    for flag, dest in (
        ("--morning", "morning_mindset"),
        ("--night", "night_mindset"),
        ("--affirmations", "affirmations_read"),
    ):
        log.add_argument(
            flag, dest=dest, action=argparse.BooleanOptionalAction, default=None
        )
    log.add_argument("--notes", default=None)

    sub.add_parser("stats", help="Puntos, racha y promedios de 7 días.")

    history = sub.add_parser("history", help="Check-ins recientes.")
    history.add_argument("--limit", type=int, default=7)

    vision = sub.add_parser("vision", help="Ver o guardar la visión.")
    vision_sub = vision.add_subparsers(dest="vision_command", required=True)
    vision_sub.add_parser("show")
    vision_set = vision_sub.add_parser("set")
    vision_set.add_argument("--business", default=None)
    vision_set.add_argument("--fitness", default=None)
    vision_set.add_argument("--life", default=None)

    return parser.parse_args(argv)


def _cmd_log(ns: argparse.Namespace, store: KeyValueStore, today: date) -> int:
    day = ns.date or today.isoformat()
    draft = apply_edits(
        open_draft(store, day),
        sleep_time=ns.sleep_time,
        wake_time=ns.wake_time,
        sleep_quality=ns.sleep_quality,
        deep_work_blocks=ns.deep_work_blocks,
        distraction_count=ns.distraction_count,
        stimulation_score=ns.stimulation_score,
        diet_quality=ns.diet_quality,
        energy_level=ns.energy_level,
        morning_mindset=ns.morning_mindset,
        night_mindset=ns.night_mindset,
        affirmations_read=ns.affirmations_read,
        notes=ns.notes,
    )
    entry = save_draft(store, draft)
    print(f"OK: Check-in {entry.date}: {entry.points} points")
    for rule, points in points_breakdown(entry.fields).items():
        print(f"  {rule}: {points}")
    return 0


def _cmd_stats(ns: argparse.Namespace, store: KeyValueStore, today: date) -> int:
    snap = load_snapshot(store, today)
    print(f"OK: Points: {snap.stats.total_points}")
    print(f"OK: Streak: {snap.stats.current_streak} days")
    print(f"OK: Entries: {len(snap.entries)}")

    today_entry = snap.today_entry
    for name, label in _RITUAL_LABELS:
        done = bool(today_entry and getattr(today_entry.fields, name))
        print(f"  [{'x' if done else ' '}] {label}")
    if today_entry is None:
        print("No check-in for today yet.")

    if snap.entries:
        print("Last 7 Days:")
        for field, value in weekly_overview(snap.entries).items():
            print(f"  {OVERVIEW_FIELDS[field]}: {format_average(value)}")
    return 0


def _cmd_history(ns: argparse.Namespace, store: KeyValueStore, today: date) -> int:
    snap = load_snapshot(store, today)
    for entry in snap.entries[: max(ns.limit, 0)]:
        print(f"{entry.date}  {entry.points}")
    return 0


def _cmd_vision(ns: argparse.Namespace, store: KeyValueStore, today: date) -> int:
    current = load_vision(store)
    if ns.vision_command == "set":
        current = save_vision(
            store,
            VisionRecord(
                business=current.business if ns.business is None else ns.business,
                fitness=current.fitness if ns.fitness is None else ns.fitness,
                life=current.life if ns.life is None else ns.life,
            ),
        )
        print("OK: Saved")
    print(f"Business: {current.business}")
    print(f"Fitness: {current.fitness}")
    print(f"Life: {current.life}")
    return 0


_COMMANDS: dict[str, Callable[[argparse.Namespace, KeyValueStore, date], int]] = {
    "log": _cmd_log,
    "stats": _cmd_stats,
    "history": _cmd_history,
    "vision": _cmd_vision,
}


def main(argv: list[str] | None = None) -> int:
    """Run the habit tracker CLI.

    Returns:
        Exit code (0 on success, 1 on storage failure, 2 on invalid input).
    """
    ns = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if ns.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        config = load_config(db=ns.db, tz_name=ns.tz)
    except ValueError as exc:
        print(f"ERROR: {exc}")
        return 2

    today = today_in(config.tzinfo)
    try:
        store = SQLiteStore(config.db_path)
        return _COMMANDS[ns.command](ns, store, today)
    except CheckInValidationError as exc:
        print(f"ERROR: {exc}")
        return 2
    except StorageError as exc:
        logger.error("%s", exc)
        print(f"ERROR: {exc}")
        return 1
