"""Shared test fixtures for MoodFlow."""

import sys
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

TODAY = date(2024, 3, 15)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "moodflow.db"


@pytest.fixture
def store(db_path):
    from mood.store import SQLiteRecordStore

    return SQLiteRecordStore(db_path)


@pytest.fixture
def adapter(store):
    from mood.adapter import RecordStoreAdapter

    adapter = RecordStoreAdapter(store)
    adapter.start("user-123")
    yield adapter
    adapter.stop()


@pytest.fixture
def editor(adapter, today):
    from mood.editor import EntryEditor

    return EntryEditor(adapter, today=lambda: today)


@pytest.fixture
def make_records():
    """Build a RecordMap from {date: mood} or {date: (mood, note)}."""
    from mood.records import MoodRecord, RecordMap

    def _make(entries: dict) -> RecordMap:
        records = []
        for i, (key, value) in enumerate(sorted(entries.items())):
            mood, note = value if isinstance(value, tuple) else (value, "")
            records.append(
                MoodRecord(
                    date=date.fromisoformat(key),
                    mood_value=mood,
                    note=note,
                    created_at=datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(minutes=i),
                )
            )
        return RecordMap.from_records(records)

    return _make


@pytest.fixture
def identity_backend(db_path):
    from mood.identity import IdentityBackend

    return IdentityBackend(db_path, "test-jwt-secret")
