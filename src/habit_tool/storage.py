"""Persistencia clave/valor (SQLite) para check-ins y visión."""

from __future__ import annotations

import json
import logging
import sqlite3
from abc import ABC, abstractmethod
from contextlib import closing
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

ENTRY_PREFIX = "entry:"
VISION_KEY = "vision"

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""


class StorageError(RuntimeError):
    """The key-value store could not be opened or written."""


class KeyValueStore(ABC):
    """Abstract key-value capability used by the tracker.

    Reads never raise: a failed read is reported as "no data". Writes
    raise ``StorageError``.
    """

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Return the value stored under ``key`` or None."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, replacing any previous value.

        Raises:
            StorageError: If the value could not be written.
        """

    @abstractmethod
    def values_with_prefix(self, prefix: str) -> list[Any]:
        """Return every value whose key starts with ``prefix``."""


def entry_key(day: str) -> str:
    """Storage key for the check-in of an ISO date."""
    return f"{ENTRY_PREFIX}{day}"


class SQLiteStore(KeyValueStore):
    """Key-value store over a single SQLite table of JSON documents."""

    def __init__(self, db_path: Path) -> None:
        """Create store and ensure schema exists.

        Raises:
            StorageError: If the database file cannot be created or opened.
        """
        self._db_path = db_path
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            self._init_schema()
        except (OSError, sqlite3.Error) as exc:
            raise StorageError(f"No se pudo abrir {db_path}: {exc}") from exc

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        with closing(self._connect()) as conn:
            conn.executescript(SCHEMA_SQL)
            conn.commit()

    def get(self, key: str) -> Any | None:
        try:
            with closing(self._connect()) as conn:
                row = conn.execute(
                    "SELECT value FROM kv_store WHERE key = ?", (key,)
                ).fetchone()
        except sqlite3.Error as exc:
            logger.warning("Lectura fallida para %s: %s", key, exc)
            return None
        if row is None:
            return None
        return _decode(key, row["value"])

    def set(self, key: str, value: Any) -> None:
        payload = json.dumps(value, ensure_ascii=False, sort_keys=True)
        try:
            with closing(self._connect()) as conn:
                conn.execute(
                    """
                    INSERT INTO kv_store(key, value) VALUES(?, ?)
                    ON CONFLICT(key) DO UPDATE SET value=excluded.value
                    """,
                    (key, payload),
                )
                conn.commit()
        except sqlite3.Error as exc:
            raise StorageError(f"No se pudo guardar {key}: {exc}") from exc
        logger.debug("Guardado %s", key)

    def values_with_prefix(self, prefix: str) -> list[Any]:
        try:
            with closing(self._connect()) as conn:
                rows = conn.execute(
                    """
                    SELECT key, value FROM kv_store
                    WHERE substr(key, 1, ?) = ?
                    ORDER BY key
                    """,
                    (len(prefix), prefix),
                ).fetchall()
        except sqlite3.Error as exc:
            logger.warning("Lectura fallida para prefijo %s: %s", prefix, exc)
            return []
        out: list[Any] = []
        for row in rows:
            value = _decode(row["key"], row["value"])
            if value is not None:
                out.append(value)
        return out


def _decode(key: str, raw: str) -> Any | None:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Valor ilegible en %s, se ignora", key)
        return None
