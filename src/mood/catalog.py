"""Fixed catalog of the five mood levels."""

from dataclasses import dataclass
from typing import Optional

EMPTY_COLOR = "#f3f4f6"
TREND_COLOR = "#8b5cf6"
TREND_FILL = "rgba(139, 92, 246, 0.1)"


@dataclass(frozen=True)
class MoodLevel:
    value: int
    glyph: str
    label: str
    color: str


_MOODS: tuple[MoodLevel, ...] = (
    MoodLevel(1, "\U0001F622", "Very bad", "#ef4444"),
    MoodLevel(2, "\U0001F61E", "Bad", "#f97316"),
    MoodLevel(3, "\U0001F610", "Okay", "#eab308"),
    MoodLevel(4, "\U0001F60A", "Good", "#22c55e"),
    MoodLevel(5, "\U0001F929", "Excellent!", "#3b82f6"),
)

_BY_VALUE = {m.value: m for m in _MOODS}

MAX_MOOD = _MOODS[-1].value


def lookup(value) -> Optional[MoodLevel]:
    """Return the level for a mood value, or None when it is unknown."""
    # bool is an int subclass; True must not resolve to "Very bad"
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return _BY_VALUE.get(value)


def all_moods() -> tuple[MoodLevel, ...]:
    """All levels, ascending by value."""
    return _MOODS


def is_valid(value) -> bool:
    return lookup(value) is not None
