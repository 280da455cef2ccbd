from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from habit_tool.model import (
    CheckInEntry,
    CheckInFields,
    CheckInValidationError,
    VisionRecord,
    as_int,
    default_draft,
    draft_from_record,
    validate_fields,
)


def _valid() -> CheckInFields:
    return CheckInFields(date="2025-12-15", sleep_time="22:00", wake_time="06:30")


def test_default_draft_uses_form_defaults() -> None:
    draft = default_draft(date(2025, 12, 15))
    assert draft.date == "2025-12-15"
    assert draft.sleep_time == ""
    assert draft.sleep_quality == 7
    assert draft.stimulation_score == 5
    assert draft.diet_quality == 7
    assert draft.energy_level == 7
    assert draft.deep_work_blocks == 0
    assert draft.morning_mindset is False


def test_entry_record_uses_storage_keys() -> None:
    entry = CheckInEntry(fields=replace(_valid(), notes="ok"), points=42)
    record = entry.to_record()
    assert record["sleepTime"] == "22:00"
    assert record["deepWorkBlocks"] == 0
    assert record["affirmationsRead"] is False
    assert record["points"] == 42
    assert CheckInEntry.from_record(record) == entry


def test_from_record_defaults_malformed_numbers_to_zero() -> None:
    entry = CheckInEntry.from_record(
        {"date": "2025-12-15", "deepWorkBlocks": "bad", "dietQuality": None}
    )
    assert entry.fields.deep_work_blocks == 0
    assert entry.fields.diet_quality == 0
    assert entry.fields.sleep_quality == 0
    assert entry.points == 0
    assert entry.fields.notes == ""


def test_from_record_only_true_marks_ritual_done() -> None:
    entry = CheckInEntry.from_record(
        {
            "date": "2025-12-15",
            "morningMindset": "false",
            "nightMindset": 1,
            "affirmationsRead": True,
        }
    )
    assert entry.fields.morning_mindset is False
    assert entry.fields.night_mindset is False
    assert entry.fields.affirmations_read is True

    draft = draft_from_record({"date": "2025-12-15", "nightMindset": "yes"})
    assert draft.night_mindset is False


def test_draft_from_record_falls_back_to_form_defaults() -> None:
    draft = draft_from_record(
        {"date": "2025-12-15", "sleepTime": "21:45", "deepWorkBlocks": 2}
    )
    assert draft.sleep_time == "21:45"
    assert draft.wake_time == ""
    assert draft.deep_work_blocks == 2
    assert draft.sleep_quality == 7
    assert draft.stimulation_score == 5


def test_as_int() -> None:
    assert as_int("3") == 3
    assert as_int(4.0) == 4
    assert as_int(None) == 0
    assert as_int(True) == 0
    assert as_int(float("nan"), default=7) == 7


def test_validate_accepts_complete_draft() -> None:
    validate_fields(_valid())


@pytest.mark.parametrize(
    "changes",
    [
        {"date": "15/12/2025"},
        {"date": "20251215"},
        {"date": "2025-W51-1"},
        {"sleep_time": ""},
        {"wake_time": "6:30"},
        {"wake_time": "24:00"},
        {"sleep_quality": 0},
        {"energy_level": 11},
        {"deep_work_blocks": -1},
        {"distraction_count": -3},
    ],
)
def test_validate_rejects(changes: dict[str, object]) -> None:
    with pytest.raises(CheckInValidationError):
        validate_fields(replace(_valid(), **changes))


def test_vision_record_round_trip_and_empty() -> None:
    assert VisionRecord.from_record(None) == VisionRecord()
    vision = VisionRecord(business="ship", fitness="", life="calm")
    assert VisionRecord.from_record(vision.to_record()) == vision
