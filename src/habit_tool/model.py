"""Modelos tipados para check-ins diarios, visión y estadísticas."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import asdict, dataclass, replace
from datetime import date
from typing import Any

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")

RATING_FIELDS: tuple[str, ...] = (
    "sleep_quality",
    "stimulation_score",
    "diet_quality",
    "energy_level",
)
COUNT_FIELDS: tuple[str, ...] = ("deep_work_blocks", "distraction_count")
RITUAL_FIELDS: tuple[str, ...] = (
    "morning_mindset",
    "night_mindset",
    "affirmations_read",
)

# Persisted records keep the camelCase layout of the key-value store.
_RECORD_KEYS: dict[str, str] = {
    "date": "date",
    "sleep_time": "sleepTime",
    "wake_time": "wakeTime",
    "sleep_quality": "sleepQuality",
    "deep_work_blocks": "deepWorkBlocks",
    "distraction_count": "distractionCount",
    "stimulation_score": "stimulationScore",
    "diet_quality": "dietQuality",
    "energy_level": "energyLevel",
    "morning_mindset": "morningMindset",
    "night_mindset": "nightMindset",
    "affirmations_read": "affirmationsRead",
    "notes": "notes",
    "points": "points",
}


class CheckInValidationError(ValueError):
    """Raised when a draft cannot be saved as a check-in."""


@dataclass(frozen=True)
class CheckInFields:
    """One day's recorded values (everything except the derived points)."""

    date: str
    sleep_time: str = ""
    wake_time: str = ""
    sleep_quality: int = 7
    deep_work_blocks: int = 0
    distraction_count: int = 0
    stimulation_score: int = 5
    diet_quality: int = 7
    energy_level: int = 7
    morning_mindset: bool = False
    night_mindset: bool = False
    affirmations_read: bool = False
    notes: str = ""


@dataclass(frozen=True)
class CheckInEntry:
    """Saved check-in: fields plus the points derived from them."""

    fields: CheckInFields
    points: int

    @property
    def date(self) -> str:
        return self.fields.date

    def to_record(self) -> dict[str, Any]:
        """Serializable dict using the storage field names."""
        values = asdict(self.fields)
        values["points"] = self.points
        return {_RECORD_KEYS[k]: v for k, v in values.items()}

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> CheckInEntry:
        """Build an entry from a stored record.

        Missing or non-numeric numeric values become 0, missing flags
        become False and missing text becomes "".
        """
        fields = CheckInFields(
            date=_as_text(record.get("date")),
            sleep_time=_as_text(record.get("sleepTime")),
            wake_time=_as_text(record.get("wakeTime")),
            sleep_quality=as_int(record.get("sleepQuality")),
            deep_work_blocks=as_int(record.get("deepWorkBlocks")),
            distraction_count=as_int(record.get("distractionCount")),
            stimulation_score=as_int(record.get("stimulationScore")),
            diet_quality=as_int(record.get("dietQuality")),
            energy_level=as_int(record.get("energyLevel")),
            morning_mindset=_as_flag(record.get("morningMindset")),
            night_mindset=_as_flag(record.get("nightMindset")),
            affirmations_read=_as_flag(record.get("affirmationsRead")),
            notes=_as_text(record.get("notes")),
        )
        return cls(fields=fields, points=as_int(record.get("points")))


@dataclass(frozen=True)
class VisionRecord:
    """Singleton free-text goal statement."""

    business: str = ""
    fitness: str = ""
    life: str = ""

    def to_record(self) -> dict[str, str]:
        return asdict(self)

    @classmethod
    def from_record(cls, record: Mapping[str, Any] | None) -> VisionRecord:
        if not record:
            return cls()
        return cls(
            business=_as_text(record.get("business")),
            fitness=_as_text(record.get("fitness")),
            life=_as_text(record.get("life")),
        )


@dataclass(frozen=True)
class Stats:
    """Aggregate dashboard numbers."""

    total_points: int = 0
    current_streak: int = 0


def default_draft(day: date | str) -> CheckInFields:
    """Form defaults for a date with no saved check-in."""
    return CheckInFields(date=_iso(day))


def draft_from_record(record: Mapping[str, Any]) -> CheckInFields:
    """Pre-fill a draft from a raw record, using form defaults for gaps."""
    defaults = default_draft(_as_text(record.get("date")))
    values: dict[str, Any] = {}
    for name, key in _RECORD_KEYS.items():
        if name in ("date", "points"):
            continue
        raw = record.get(key)
        if raw is None or raw == "":
            continue
        default = getattr(defaults, name)
        if isinstance(default, bool):
            values[name] = _as_flag(raw)
        elif isinstance(default, int):
            values[name] = as_int(raw, default=default)
        else:
            values[name] = str(raw)
    return replace(defaults, **values)


def validate_fields(fields: CheckInFields) -> None:
    """Check that a draft is complete enough to be saved.

    Raises:
        CheckInValidationError: On a bad date, time, rating or count.
    """
    try:
        parsed = date.fromisoformat(fields.date)
    except (TypeError, ValueError) as exc:
        raise CheckInValidationError(f"Fecha inválida: {fields.date!r}") from exc
    # Storage keys are built from the date text, so only YYYY-MM-DD is allowed.
    if parsed.isoformat() != fields.date:
        raise CheckInValidationError(f"Fecha debe ser YYYY-MM-DD: {fields.date!r}")

    for name in ("sleep_time", "wake_time"):
        value = getattr(fields, name)
        if not value:
            raise CheckInValidationError(f"{name} es obligatorio")
        if not _TIME_RE.match(value):
            raise CheckInValidationError(f"{name} debe ser HH:MM, no {value!r}")

    for name in RATING_FIELDS:
        value = getattr(fields, name)
        if not 1 <= value <= 10:
            raise CheckInValidationError(f"{name} fuera de rango 1-10: {value}")

    for name in COUNT_FIELDS:
        value = getattr(fields, name)
        if value < 0:
            raise CheckInValidationError(f"{name} no puede ser negativo: {value}")


def as_int(value: object, default: int = 0) -> int:
    """Coerce a stored numeric value, falling back to ``default``."""
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(float(value))  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return default


def _as_flag(value: object) -> bool:
    return value is True


def _as_text(value: object) -> str:
    if value is None:
        return ""
    return str(value)


def _iso(day: date | str) -> str:
    return day.isoformat() if isinstance(day, date) else day
