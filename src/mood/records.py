"""MoodRecord model and the read-only record map."""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Optional

from .catalog import MoodLevel, lookup
from .errors import InvalidMoodError


def parse_date(value: str | date) -> date:
    """Parse a YYYY-MM-DD key into a date. Raises ValueError on bad input."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class MoodRecord:
    """One mood entry; `date` is the unique key within a user's journal."""

    date: date
    mood_value: int
    note: str = ""
    created_at: datetime = field(default_factory=_now_utc)

    def __post_init__(self):
        if lookup(self.mood_value) is None:
            raise InvalidMoodError(f"Unknown mood value: {self.mood_value!r}")

    @property
    def key(self) -> str:
        return self.date.isoformat()

    @property
    def level(self) -> MoodLevel:
        return lookup(self.mood_value)

    def to_store(self) -> dict[str, Any]:
        """Wire form kept by the record store."""
        return {
            "mood": self.mood_value,
            "note": self.note,
            "timestamp": int(self.created_at.timestamp() * 1000),
        }

    @classmethod
    def from_store(cls, key: str, data: Mapping[str, Any]) -> "MoodRecord":
        """Build from the store's wire form. Raises ValueError / InvalidMoodError."""
        ts = data.get("timestamp")
        created = (
            datetime.fromtimestamp(ts / 1000, tz=timezone.utc) if ts is not None else _now_utc()
        )
        return cls(
            date=parse_date(key),
            mood_value=data.get("mood"),
            note=data.get("note") or "",
            created_at=created,
        )

    def to_dict(self) -> dict[str, Any]:
        level = self.level
        return {
            "date": self.key,
            "mood": self.mood_value,
            "glyph": level.glyph,
            "label": level.label,
            "color": level.color,
            "note": self.note,
            "created_at": self.created_at.isoformat(),
        }


class RecordMap(Mapping):
    """Immutable mapping of ISO date string -> MoodRecord.

    Built once per store snapshot and never mutated afterwards.
    """

    __slots__ = ("_records",)

    def __init__(self, records: Optional[Mapping[str, MoodRecord]] = None):
        self._records = dict(records or {})

    @classmethod
    def from_records(cls, records) -> "RecordMap":
        return cls({r.key: r for r in records})

    def __getitem__(self, key: str) -> MoodRecord:
        return self._records[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"RecordMap({len(self._records)} records)"

    def get_date(self, day: date) -> Optional[MoodRecord]:
        return self._records.get(day.isoformat())

    def sorted_keys(self, reverse: bool = False) -> list[str]:
        """Date keys in lexicographic (= chronological) order."""
        return sorted(self._records, reverse=reverse)


EMPTY_RECORD_MAP = RecordMap()
