"""Plain-text mood report and the streak celebration."""

from datetime import date, datetime, timezone
from pathlib import Path
from typing import Callable, Optional

import structlog

from .records import RecordMap

logger = structlog.get_logger()

REPORT_PREFIX = "MoodFlow-report"
CELEBRATION_SECONDS = 8.0


def report_filename(today: date) -> str:
    return f"{REPORT_PREFIX}-{today.isoformat()}.txt"


def average_mood(records: RecordMap) -> float:
    """Mean mood value rounded to one decimal; 0 for an empty map."""
    if not records:
        return 0
    total = sum(r.mood_value for r in records.values())
    return round(total / len(records), 1)


def plain_text_report(records: RecordMap, user: Optional[str] = None, today: Optional[date] = None) -> str:
    """Render the full journal as deterministic plain text.

    Args:
        records: Record map to render.
        user: Account label (e-mail) shown in the header.
        today: Generation date shown in the header; omitted when None.
    """
    keys = records.sorted_keys()
    lines = ["MoodFlow report"]
    if user:
        lines.append(f"User: {user}")
    if today:
        lines.append(f"Generated: {today.isoformat()}")
    lines.extend([
        "",
        f"Total records: {len(records)}",
        f"Average mood: {average_mood(records)}",
        f"Earliest date: {keys[0] if keys else 'none'}",
        f"Latest date: {keys[-1] if keys else 'none'}",
        "",
    ])

    if keys:
        lines.append("Entries (newest first):")
        for key in reversed(keys):
            record = records[key]
            level = record.level
            lines.append(f"{key}, {level.glyph}, {level.label}, {record.note or 'none'}")
    else:
        lines.append("No entries yet.")

    return "\n".join(lines) + "\n"


def write_report(
    records: RecordMap,
    output_dir: Path,
    user: Optional[str] = None,
    today: Optional[date] = None,
) -> Path:
    """Write the report as UTF-8 text under ``output_dir``.

    Returns:
        Path of the written file.
    """
    today = today or date.today()
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / report_filename(today)
    path.write_text(plain_text_report(records, user, today), encoding="utf-8")
    logger.info("report.written", path=str(path), records=len(records))
    return path


class Celebration:
    """Full-screen celebration that stays on for a fixed time after a streak."""

    def __init__(
        self,
        seconds: float = CELEBRATION_SECONDS,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.seconds = seconds
        self._clock = clock
        self.started_at: Optional[datetime] = None

    def trigger(self) -> None:
        self.started_at = self._clock()
        logger.info("celebration.triggered")

    def cancel(self) -> None:
        self.started_at = None

    @property
    def active(self) -> bool:
        if self.started_at is None:
            return False
        return (self._clock() - self.started_at).total_seconds() < self.seconds
