"""Tests for MoodRecord and RecordMap."""

from datetime import date, datetime, timezone

import pytest

from mood.errors import InvalidMoodError
from mood.records import MoodRecord, RecordMap, parse_date


def test_store_form_round_trip():
    created = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)
    record = MoodRecord(date=date(2024, 3, 1), mood_value=4, note="walk", created_at=created)

    wire = record.to_store()
    assert wire == {"mood": 4, "note": "walk", "timestamp": int(created.timestamp() * 1000)}
    assert MoodRecord.from_store("2024-03-01", wire) == record


def test_from_store_missing_note_is_empty():
    record = MoodRecord.from_store("2024-03-01", {"mood": 2, "timestamp": 0})
    assert record.note == ""


def test_invalid_mood_rejected():
    with pytest.raises(InvalidMoodError):
        MoodRecord(date=date(2024, 3, 1), mood_value=7)


def test_bad_date_key_rejected():
    with pytest.raises(ValueError):
        MoodRecord.from_store("not-a-date", {"mood": 3})


def test_record_map_is_read_only(make_records):
    records = make_records({"2024-03-01": 3})
    with pytest.raises(TypeError):
        records["2024-03-02"] = records["2024-03-01"]
    assert isinstance(records, RecordMap)


def test_sorted_keys(make_records):
    records = make_records({"2024-03-02": 3, "2023-12-31": 1, "2024-01-15": 5})
    assert records.sorted_keys() == ["2023-12-31", "2024-01-15", "2024-03-02"]
    assert records.sorted_keys(reverse=True)[0] == "2024-03-02"


def test_parse_date_accepts_date_and_string():
    assert parse_date("2024-02-29") == date(2024, 2, 29)
    assert parse_date(date(2024, 2, 29)) == date(2024, 2, 29)
    assert parse_date(datetime(2024, 2, 29, 23, 59)) == date(2024, 2, 29)
