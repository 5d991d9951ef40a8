"""Entry Editor: pick a date, a mood and a note, then save or delete."""

from collections.abc import Callable
from datetime import date, datetime, timezone
from typing import Optional

import structlog

from shared_types import EditorView

from .adapter import RecordStoreAdapter, WriteResult
from .catalog import lookup
from .errors import FutureDateError, InvalidMoodError
from .records import MoodRecord, parse_date

logger = structlog.get_logger()

ConfirmGate = Callable[[date], bool]


class EntryEditor:
    """Editor state plus the submit/delete rules.

    Args:
        adapter: Record Store Adapter to send mutations through.
        today: Callable returning the local calendar date (injectable for tests).
        now: Callable returning the current UTC time used as the write timestamp.
    """

    def __init__(
        self,
        adapter: RecordStoreAdapter,
        today: Callable[[], date] = date.today,
        now: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.adapter = adapter
        self._today = today
        self._now = now
        self.target_date: date = today()
        self.selected_mood: Optional[int] = None
        self.note: str = ""
        self.view = EditorView.ENTRY

    def select_mood(self, value: Optional[int]) -> None:
        if value is not None and lookup(value) is None:
            raise InvalidMoodError(f"Unknown mood value: {value!r}")
        self.selected_mood = value

    def set_note(self, note: str) -> None:
        self.note = note or ""

    def set_date(self, day: date | str) -> None:
        self.target_date = parse_date(day)

    def open_entry(self, day: date | str | None = None) -> None:
        """Switch to the entry view, optionally for a specific date."""
        if day is not None:
            self.set_date(day)
        self.view = EditorView.ENTRY

    @property
    def can_submit(self) -> bool:
        return self.selected_mood is not None

    def reset(self) -> None:
        self.selected_mood = None
        self.note = ""
        self.target_date = self._today()

    def submit(
        self,
        day: date | str | None = None,
        mood_value: Optional[int] = None,
        note: Optional[str] = None,
    ) -> Optional[WriteResult]:
        """Create or overwrite the record for a date.

        Explicit arguments override the editor state. Returns None without
        writing when no mood is selected.

        Raises:
            FutureDateError: date is after today (local calendar day).
            InvalidMoodError: mood value outside the catalog.
        """
        target = parse_date(day) if day is not None else self.target_date
        value = mood_value if mood_value is not None else self.selected_mood
        text = note if note is not None else self.note

        if value is None:
            return None
        if lookup(value) is None:
            raise InvalidMoodError(f"Unknown mood value: {value!r}")

        today = self._today()
        if target > today:
            logger.info("editor.future_date_rejected", date=target.isoformat())
            raise FutureDateError(
                f"Cannot record a mood for {target.isoformat()}: date is after today ({today.isoformat()})"
            )

        record = MoodRecord(date=target, mood_value=value, note=text, created_at=self._now())
        result = self.adapter.write(record)
        if result.ok:
            self.reset()
            self.view = EditorView.CALENDAR
        return result

    def delete(self, day: date | str, confirm: ConfirmGate) -> Optional[WriteResult]:
        """Delete the record for ``day`` once ``confirm(day)`` says yes.

        Returns None when the user declines.
        """
        target = parse_date(day)
        if not confirm(target):
            return None
        return self.adapter.delete(target)
