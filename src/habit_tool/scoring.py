"""Reglas fijas de puntaje para un check-in diario."""

from __future__ import annotations

from habit_tool.model import CheckInFields

MAX_POINTS = 65

_IDEAL_SLEEP = ("22:00", "06:30")
_SLEEP_BAND = ("21:30", "22:30")
_WAKE_BAND = ("06:00", "07:00")


def compute_points(fields: CheckInFields) -> int:
    """Total points for one day's fields.

    Pure and deterministic. ``fields`` must already carry every value;
    default-filling happens before this call.
    """
    return sum(points_breakdown(fields).values())


def points_breakdown(fields: CheckInFields) -> dict[str, int]:
    """Per-rule contributions; the values sum to ``compute_points``."""
    return {
        "sleep": _sleep_points(fields.sleep_time, fields.wake_time),
        "deep_work": _deep_work_points(fields.deep_work_blocks),
        "distractions": _distraction_points(fields.distraction_count),
        "stimulation": _stimulation_points(fields.stimulation_score),
        "diet": _diet_points(fields.diet_quality),
        "morning_mindset": 5 if fields.morning_mindset else 0,
        "night_mindset": 5 if fields.night_mindset else 0,
        "affirmations": 5 if fields.affirmations_read else 0,
    }


def _sleep_points(sleep_time: str, wake_time: str) -> int:
    # Plain string comparison on zero-padded HH:MM, not minute arithmetic.
    if (sleep_time, wake_time) == _IDEAL_SLEEP:
        return 10
    if (
        _SLEEP_BAND[0] <= sleep_time <= _SLEEP_BAND[1]
        and _WAKE_BAND[0] <= wake_time <= _WAKE_BAND[1]
    ):
        return 7
    return 0


def _deep_work_points(blocks: int) -> int:
    if blocks >= 3:
        return 15
    return blocks * 4


def _distraction_points(count: int) -> int:
    if count < 5:
        return 10
    if count < 10:
        return 5
    return 0


def _stimulation_points(score: int) -> int:
    if score <= 4:
        return 10
    if score <= 6:
        return 5
    return 0


def _diet_points(quality: int) -> int:
    if quality >= 8:
        return 5
    if quality >= 6:
        return 3
    return 0
