from __future__ import annotations

from datetime import date, timedelta

from habit_tool.model import CheckInEntry, CheckInFields, Stats
from habit_tool.stats import (
    compute_stats,
    entries_to_frame,
    format_average,
    recent_entries,
    weekly_average,
    weekly_overview,
)

TODAY = date(2025, 12, 15)


def _entry(day: date | str, points: int = 10, **kwargs: object) -> CheckInEntry:
    iso = day.isoformat() if isinstance(day, date) else day
    return CheckInEntry(fields=CheckInFields(date=iso, **kwargs), points=points)


def _days_ago(n: int) -> date:
    return TODAY - timedelta(days=n)


def test_compute_stats_empty() -> None:
    assert compute_stats([], TODAY) == Stats(total_points=0, current_streak=0)


def test_three_consecutive_days() -> None:
    entries = [_entry(_days_ago(2)), _entry(TODAY), _entry(_days_ago(1))]
    stats = compute_stats(entries, TODAY)
    assert stats.current_streak == 3
    assert stats.total_points == 30


def test_gap_stops_streak() -> None:
    entries = [_entry(TODAY, 5), _entry(_days_ago(3), 7)]
    stats = compute_stats(entries, TODAY)
    assert stats.current_streak == 1
    assert stats.total_points == 12


def test_no_entry_today_means_no_streak() -> None:
    stats = compute_stats([_entry(_days_ago(1)), _entry(_days_ago(2))], TODAY)
    assert stats.current_streak == 0
    assert stats.total_points == 20


def test_future_entry_breaks_streak() -> None:
    stats = compute_stats([_entry(TODAY + timedelta(days=1)), _entry(TODAY)], TODAY)
    assert stats.current_streak == 0


def test_streak_crosses_month_boundary() -> None:
    today = date(2026, 3, 1)
    entries = [_entry(today - timedelta(days=i)) for i in range(4)]
    assert compute_stats(entries, today).current_streak == 4


def test_unreadable_date_ends_streak() -> None:
    entries = [_entry(TODAY), _entry("not-a-date"), _entry(_days_ago(1))]
    stats = compute_stats(entries, TODAY)
    assert stats.current_streak == 2
    assert stats.total_points == 30


def test_weekly_average_last_seven() -> None:
    entries = [_entry(_days_ago(i), deep_work_blocks=6 - i) for i in range(7)]
    assert weekly_average(entries, "deep_work_blocks") == 3.0


def test_weekly_average_ignores_older_entries() -> None:
    entries = [_entry(_days_ago(i), diet_quality=8) for i in range(7)]
    entries.append(_entry(_days_ago(30), diet_quality=1))
    assert weekly_average(entries, "diet_quality") == 8.0


def test_weekly_average_fewer_than_seven() -> None:
    entries = [
        _entry(TODAY, distraction_count=3),
        _entry(_days_ago(1), distraction_count=4),
    ]
    assert weekly_average(entries, "distraction_count") == 3.5


def test_weekly_average_empty_and_unknown_field() -> None:
    assert weekly_average([], "deep_work_blocks") == 0.0
    assert weekly_average([_entry(TODAY)], "nope") == 0.0


def test_weekly_overview_and_format() -> None:
    entries = [
        _entry(TODAY, deep_work_blocks=2, sleep_quality=9),
        _entry(_days_ago(1), deep_work_blocks=1, sleep_quality=6),
    ]
    overview = weekly_overview(entries)
    assert list(overview) == [
        "deep_work_blocks",
        "distraction_count",
        "diet_quality",
        "sleep_quality",
    ]
    assert format_average(overview["deep_work_blocks"]) == "1.5"
    assert format_average(overview["sleep_quality"]) == "7.5"
    assert format_average(0.0) == "0.0"


def test_recent_entries_newest_first() -> None:
    entries = [_entry(_days_ago(i)) for i in (3, 0, 9, 1)]
    out = recent_entries(entries, limit=3)
    assert [e.date for e in out] == [
        TODAY.isoformat(),
        _days_ago(1).isoformat(),
        _days_ago(3).isoformat(),
    ]
    assert len(recent_entries(entries, limit=None)) == 4
    assert recent_entries([]) == []


def test_entries_to_frame_empty() -> None:
    assert entries_to_frame([]).empty
