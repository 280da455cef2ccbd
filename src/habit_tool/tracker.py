"""Estado explícito del tracker y transiciones carga → edición → guardado."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from datetime import date
from typing import Any

from habit_tool.model import (
    CheckInEntry,
    CheckInFields,
    Stats,
    VisionRecord,
    default_draft,
    draft_from_record,
    validate_fields,
)
from habit_tool.scoring import compute_points
from habit_tool.stats import compute_stats, recent_entries
from habit_tool.storage import ENTRY_PREFIX, VISION_KEY, KeyValueStore, entry_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrackerSnapshot:
    """Everything loaded from storage at one point in time."""

    today: date
    entries: tuple[CheckInEntry, ...]
    vision: VisionRecord
    stats: Stats

    @property
    def today_entry(self) -> CheckInEntry | None:
        key = self.today.isoformat()
        for entry in self.entries:
            if entry.date == key:
                return entry
        return None


def load_snapshot(store: KeyValueStore, today: date) -> TrackerSnapshot:
    """Read all entries and the vision record; entries come newest first."""
    records = store.values_with_prefix(ENTRY_PREFIX)
    entries = [CheckInEntry.from_record(r) for r in records if isinstance(r, Mapping)]
    ordered = tuple(recent_entries(entries, limit=None))
    logger.debug("Cargados %d check-ins", len(ordered))
    return TrackerSnapshot(
        today=today,
        entries=ordered,
        vision=load_vision(store),
        stats=compute_stats(ordered, today),
    )


def load_vision(store: KeyValueStore) -> VisionRecord:
    raw = store.get(VISION_KEY)
    return VisionRecord.from_record(raw if isinstance(raw, Mapping) else None)


def open_draft(store: KeyValueStore, day: date | str) -> CheckInFields:
    """Draft for ``day``: the saved check-in if there is one, else defaults."""
    iso = day.isoformat() if isinstance(day, date) else day
    record = store.get(entry_key(iso))
    if isinstance(record, Mapping):
        return replace(draft_from_record(record), date=iso)
    return default_draft(iso)


def apply_edits(draft: CheckInFields, **changes: Any) -> CheckInFields:
    """Return ``draft`` with every non-None change applied.

    Raises:
        TypeError: If a change names an unknown field.
    """
    known = {f.name for f in fields(CheckInFields)}
    unknown = set(changes) - known
    if unknown:
        raise TypeError(f"Campos desconocidos: {sorted(unknown)}")
    return replace(draft, **{k: v for k, v in changes.items() if v is not None})


def build_entry(draft: CheckInFields) -> CheckInEntry:
    """Validate a draft and attach its points.

    Raises:
        CheckInValidationError: If the draft is incomplete or out of range.
    """
    validate_fields(draft)
    return CheckInEntry(fields=draft, points=compute_points(draft))


def save_draft(store: KeyValueStore, draft: CheckInFields) -> CheckInEntry:
    """Score and write a draft, replacing any entry for the same date.

    Raises:
        CheckInValidationError: If the draft cannot be saved.
        StorageError: If the write fails.
    """
    entry = build_entry(draft)
    store.set(entry_key(entry.date), entry.to_record())
    logger.info("Check-in %s guardado (%d puntos)", entry.date, entry.points)
    return entry


def save_vision(store: KeyValueStore, vision: VisionRecord) -> VisionRecord:
    """Overwrite the vision record.

    Raises:
        StorageError: If the write fails.
    """
    store.set(VISION_KEY, vision.to_record())
    logger.info("Visión guardada")
    return vision
