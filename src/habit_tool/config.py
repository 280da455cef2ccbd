"""Configuración: ruta de la base y zona horaria local."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from pathlib import Path

from dateutil import tz

DB_ENV = "HABIT_TOOL_DB"
TZ_ENV = "HABIT_TOOL_TZ"


@dataclass(frozen=True)
class TrackerConfig:
    """Resolved runtime configuration."""

    db_path: Path
    tz_name: str | None = None

    @property
    def tzinfo(self) -> tzinfo:
        return resolve_tz(self.tz_name)


def default_db_path() -> Path:
    return Path.home() / ".habit_tool" / "habit_tool.sqlite3"


def load_config(db: str | None = None, tz_name: str | None = None) -> TrackerConfig:
    """Resolve config from arguments, then environment, then defaults."""
    raw_db = db or os.environ.get(DB_ENV)
    db_path = Path(raw_db).expanduser() if raw_db else default_db_path()
    zone = tz_name or os.environ.get(TZ_ENV) or None
    resolve_tz(zone)
    return TrackerConfig(db_path=db_path, tz_name=zone)


def resolve_tz(name: str | None) -> tzinfo:
    """Return the named zone, or the system local zone when ``name`` is None.

    Raises:
        ValueError: If ``name`` is not a known time zone.
    """
    if not name:
        return tz.tzlocal()
    zone = tz.gettz(name)
    if zone is None:
        raise ValueError(f"Zona horaria desconocida: {name}")
    return zone


def today_in(zone: tzinfo) -> date:
    """Calendar date of "now" in ``zone``."""
    return datetime.now(tz=zone).date()
