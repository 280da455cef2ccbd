"""Estadísticas agregadas: puntos totales, racha y promedios semanales."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict
from datetime import date, timedelta

import pandas as pd

from habit_tool.model import CheckInEntry, Stats

WEEK_WINDOW = 7

OVERVIEW_FIELDS: dict[str, str] = {
    "deep_work_blocks": "Avg Deep Work",
    "distraction_count": "Avg Distractions",
    "diet_quality": "Avg Diet",
    "sleep_quality": "Avg Sleep",
}


def entries_to_frame(entries: Sequence[CheckInEntry]) -> pd.DataFrame:
    """Convert entries to a DataFrame ordered newest first.

    ``position`` keeps each row's index in ``entries``; ``day`` is the
    parsed calendar date (NaT when the stored date is unreadable).
    """
    rows = [
        {**asdict(e.fields), "points": e.points, "position": i}
        for i, e in enumerate(entries)
    ]
    df = pd.DataFrame(rows)
    if df.empty:
        return df
    df["day"] = pd.to_datetime(df["date"], format="%Y-%m-%d", errors="coerce")
    return df.sort_values(
        "day", ascending=False, na_position="last", kind="stable"
    ).reset_index(drop=True)


def compute_stats(entries: Sequence[CheckInEntry], today: date) -> Stats:
    """Total points plus the streak of consecutive days ending ``today``."""
    df = entries_to_frame(entries)
    if df.empty:
        return Stats()

    total = int(_numeric(df, "points").sum())

    streak = 0
    for i, day in enumerate(df["day"]):
        if pd.isna(day) or day.date() != today - timedelta(days=i):
            break
        streak += 1
    return Stats(total_points=total, current_streak=streak)


def recent_entries(
    entries: Sequence[CheckInEntry], limit: int | None = WEEK_WINDOW
) -> list[CheckInEntry]:
    """Entries sorted newest first, at most ``limit`` of them."""
    df = entries_to_frame(entries)
    if df.empty:
        return []
    positions = df["position"] if limit is None else df["position"].head(limit)
    return [entries[int(p)] for p in positions]


def weekly_average(entries: Sequence[CheckInEntry], field: str) -> float:
    """Mean of ``field`` over the 7 most recently dated entries.

    Zero entries give 0.0. Missing or non-numeric values count as 0.
    """
    df = entries_to_frame(entries).head(WEEK_WINDOW)
    if df.empty:
        return 0.0
    return float(_numeric(df, field).mean())


def weekly_overview(entries: Sequence[CheckInEntry]) -> dict[str, float]:
    """Dashboard averages for the last 7 entries, keyed by field name."""
    return {field: weekly_average(entries, field) for field in OVERVIEW_FIELDS}


def format_average(value: float) -> str:
    """Display an average with one decimal place."""
    return f"{value:.1f}"


def _numeric(df: pd.DataFrame, col: str) -> pd.Series:
    if col not in df.columns:
        return pd.Series(0, index=df.index, dtype="float64")
    return pd.to_numeric(df[col], errors="coerce").fillna(0)
