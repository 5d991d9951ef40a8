"""Derived views computed from a record map.

Every function here is pure: the record map and a reference "today" go
in, view data comes out.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Optional

from .catalog import EMPTY_COLOR, MAX_MOOD, TREND_COLOR, TREND_FILL, all_moods
from .records import MoodRecord, RecordMap

CALENDAR_DAYS_BACK = 30
CALENDAR_DAYS_AHEAD = 4
CALENDAR_SIZE = CALENDAR_DAYS_BACK + 1 + CALENDAR_DAYS_AHEAD
TREND_LENGTH = 30
STREAK_LENGTH = 7


@dataclass(frozen=True)
class CalendarCell:
    date: date
    record: Optional[MoodRecord]
    is_today: bool
    is_future: bool

    @property
    def locked(self) -> bool:
        return self.is_future

    @property
    def color(self) -> str:
        return self.record.level.color if self.record else EMPTY_COLOR

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "day": self.date.day,
            "weekday": self.date.isoweekday(),
            "is_today": self.is_today,
            "is_future": self.is_future,
            "locked": self.locked,
            "color": self.color,
            "record": self.record.to_dict() if self.record else None,
        }


@dataclass(frozen=True)
class TrendPoint:
    date: str
    mood_value: int


def calendar_window(records: RecordMap, today: date) -> list[CalendarCell]:
    """35 cells from today-30 to today+4 inclusive."""
    start = today - timedelta(days=CALENDAR_DAYS_BACK)
    cells = []
    for i in range(CALENDAR_SIZE):
        day = start + timedelta(days=i)
        cells.append(
            CalendarCell(
                date=day,
                record=records.get_date(day),
                is_today=day == today,
                is_future=day > today,
            )
        )
    return cells


def distribution(records: RecordMap) -> list[int]:
    """All-time count per mood level, ascending by value."""
    counts = {m.value: 0 for m in all_moods()}
    for record in records.values():
        if record.mood_value in counts:
            counts[record.mood_value] += 1
    return [counts[m.value] for m in all_moods()]


def trend(records: RecordMap, limit: int = TREND_LENGTH) -> list[TrendPoint]:
    """The ``limit`` most recent dates present, sorted ascending."""
    keys = records.sorted_keys()[-limit:] if limit > 0 else []
    return [TrendPoint(date=k, mood_value=records[k].mood_value) for k in keys]


def streak_flag(records: RecordMap, today: Optional[date] = None, length: int = STREAK_LENGTH) -> bool:
    """True iff the ``length`` latest recorded dates are all at the top level.

    Dates need not be consecutive calendar days: only the most recent
    ``length`` keys by string order count. ``today`` is accepted for
    signature parity with the other views and does not affect the result.
    """
    latest = records.sorted_keys(reverse=True)[:length]
    if len(latest) < length:
        return False
    return all(records[k].mood_value == MAX_MOOD for k in latest)


def pie_chart_data(records: RecordMap) -> dict[str, Any]:
    """Distribution shaped as labels + one dataset for a pie chart."""
    moods = all_moods()
    return {
        "labels": [m.label for m in moods],
        "datasets": [
            {
                "data": distribution(records),
                "backgroundColor": [m.color for m in moods],
            }
        ],
    }


def line_chart_data(records: RecordMap, limit: int = TREND_LENGTH) -> dict[str, Any]:
    """Trend shaped as labels + one dataset for a line chart."""
    points = trend(records, limit)
    return {
        "labels": [p.date for p in points],
        "datasets": [
            {
                "label": "Mood",
                "data": [p.mood_value for p in points],
                "borderColor": TREND_COLOR,
                "backgroundColor": TREND_FILL,
                "tension": 0.4,
                "pointRadius": 6,
            }
        ],
    }


def display_name(email: Optional[str]) -> str:
    """Greeting name: the local part of the e-mail address."""
    if not email:
        return ""
    return email.split("@", 1)[0]


def today_summary(records: RecordMap, today: date, email: Optional[str] = None) -> dict[str, Any]:
    """Greeting plus today's record; the entry form is offered until today is saved."""
    record = records.get_date(today)
    return {
        "date": today.isoformat(),
        "name": display_name(email),
        "record": record.to_dict() if record else None,
        "show_entry_form": record is None,
    }


@dataclass(frozen=True)
class DerivedViews:
    """Snapshot of every derived view for one record map."""

    today: date
    calendar: list[CalendarCell]
    distribution: list[int]
    trend: list[TrendPoint]
    streak: bool
    today_record: Optional[MoodRecord]


def build_views(records: RecordMap, today: date, streak_length: int = STREAK_LENGTH) -> DerivedViews:
    return DerivedViews(
        today=today,
        calendar=calendar_window(records, today),
        distribution=distribution(records),
        trend=trend(records),
        streak=streak_flag(records, today, streak_length),
        today_record=records.get_date(today),
    )
