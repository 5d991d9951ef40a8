"""Derived view routes: calendar, charts, streak, dashboard."""

from datetime import date

from fastapi import APIRouter, Depends

from core.config_models import MoodFlowConfig
from mood.identity import IdentityBackend
from mood.records import RecordMap
from mood.store import RecordStore
from mood.views import (
    calendar_window,
    distribution,
    line_chart_data,
    pie_chart_data,
    streak_flag,
    today_summary,
    trend,
)
from web.auth import get_current_user
from web.deps import get_config, get_identity_backend, get_record_store, get_today, open_journal
from web.models import StreakResponse

router = APIRouter(prefix="/api/views", tags=["views"])


def _records(store: RecordStore, user_id: str) -> RecordMap:
    with open_journal(store, user_id) as adapter:
        return adapter.records


@router.get("/calendar")
async def get_calendar(
    user: dict = Depends(get_current_user),
    store: RecordStore = Depends(get_record_store),
    today: date = Depends(get_today),
):
    """35 cells, today-30 through today+4; future cells are locked."""
    records = _records(store, user["id"])
    return [cell.to_dict() for cell in calendar_window(records, today)]


@router.get("/distribution")
async def get_distribution(
    user: dict = Depends(get_current_user),
    store: RecordStore = Depends(get_record_store),
):
    """All-time count per mood level."""
    records = _records(store, user["id"])
    counts = distribution(records)
    return {"counts": counts, "total": sum(counts), "chart": pie_chart_data(records)}


@router.get("/trend")
async def get_trend(
    user: dict = Depends(get_current_user),
    store: RecordStore = Depends(get_record_store),
):
    """Most recent 30 recorded dates, oldest first."""
    records = _records(store, user["id"])
    points = [{"date": p.date, "mood": p.mood_value} for p in trend(records)]
    return {"points": points, "chart": line_chart_data(records)}


@router.get("/streak", response_model=StreakResponse)
async def get_streak(
    user: dict = Depends(get_current_user),
    store: RecordStore = Depends(get_record_store),
    today: date = Depends(get_today),
    config: MoodFlowConfig = Depends(get_config),
):
    records = _records(store, user["id"])
    length = config.celebration.streak_length
    return StreakResponse(
        streak=streak_flag(records, today, length),
        length=length,
        celebration_seconds=config.celebration.seconds,
    )


@router.get("/dashboard")
async def get_dashboard(
    user: dict = Depends(get_current_user),
    store: RecordStore = Depends(get_record_store),
    today: date = Depends(get_today),
    config: MoodFlowConfig = Depends(get_config),
    backend: IdentityBackend = Depends(get_identity_backend),
):
    """Everything the main screen renders in one payload."""
    records = _records(store, user["id"])
    streak = streak_flag(records, today, config.celebration.streak_length)
    return {
        "today": today_summary(records, today, user.get("email")),
        "theme": backend.get_theme(user["id"]),
        "calendar": [cell.to_dict() for cell in calendar_window(records, today)],
        "pie": pie_chart_data(records),
        "line": line_chart_data(records),
        "streak": streak,
        "celebrate": streak,
        "celebration_seconds": config.celebration.seconds,
    }
