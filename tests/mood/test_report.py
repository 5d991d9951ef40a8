"""Tests for the plain-text report and celebration timer."""

from datetime import date, datetime, timedelta, timezone

from mood.records import RecordMap
from mood.report import Celebration, average_mood, plain_text_report, report_filename, write_report


def test_empty_report():
    text = plain_text_report(RecordMap())
    assert "Total records: 0" in text
    assert "Average mood: 0\n" in text
    assert "Earliest date: none" in text


def test_report_contents(make_records):
    records = make_records({
        "2024-03-01": (2, "rainy"),
        "2024-03-03": (5, ""),
        "2024-03-02": (4, "gym"),
    })
    text = plain_text_report(records, "me@example.com", date(2024, 3, 3))
    lines = text.splitlines()

    assert "User: me@example.com" in lines
    assert "Generated: 2024-03-03" in lines
    assert "Total records: 3" in lines
    assert "Average mood: 3.7" in lines
    assert "Earliest date: 2024-03-01" in lines
    assert "Latest date: 2024-03-03" in lines

    entries = lines[lines.index("Entries (newest first):") + 1:]
    assert [e.split(",")[0] for e in entries] == ["2024-03-03", "2024-03-02", "2024-03-01"]
    assert entries[0].endswith("Excellent!, none")
    assert entries[2].endswith("Bad, rainy")


def test_report_is_deterministic(make_records):
    records = make_records({"2024-03-01": 3})
    assert plain_text_report(records, "a@b.c", date(2024, 3, 1)) == plain_text_report(
        records, "a@b.c", date(2024, 3, 1)
    )


def test_average_rounding(make_records):
    assert average_mood(make_records({"2024-03-01": 1, "2024-03-02": 2, "2024-03-03": 2})) == 1.7


def test_write_report(tmp_path, make_records):
    out = tmp_path / "sub" / "reports"
    path = write_report(make_records({"2024-03-01": (3, "café")}), out, "a@b.c", date(2024, 3, 5))
    assert path.name == "MoodFlow-report-2024-03-05.txt"
    assert path.exists()
    assert "café" in path.read_text(encoding="utf-8")


def test_report_filename():
    assert report_filename(date(2024, 1, 9)) == "MoodFlow-report-2024-01-09.txt"


class TestCelebration:
    def test_active_for_eight_seconds(self):
        now = [datetime(2024, 3, 1, tzinfo=timezone.utc)]
        celebration = Celebration(clock=lambda: now[0])
        assert not celebration.active

        celebration.trigger()
        now[0] += timedelta(seconds=7.9)
        assert celebration.active
        now[0] += timedelta(seconds=0.2)
        assert not celebration.active

    def test_cancel(self):
        celebration = Celebration()
        celebration.trigger()
        celebration.cancel()
        assert not celebration.active
