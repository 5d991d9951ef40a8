"""Mood entry CRUD routes (per-user)."""

from datetime import date

import structlog
from fastapi import APIRouter, Depends, HTTPException, Response, status

from mood.editor import EntryEditor
from mood.errors import FutureDateError, InvalidMoodError
from mood.store import RecordStore
from web.auth import get_current_user
from web.deps import get_record_store, get_today, open_journal
from web.models import MoodCreate, MoodEntry, MoodWrite

logger = structlog.get_logger()

router = APIRouter(prefix="/api/moods", tags=["moods"])


def _save(
    store: RecordStore,
    user_id: str,
    day: date,
    body: MoodWrite,
    today: date,
    response: Response,
) -> MoodEntry:
    with open_journal(store, user_id) as adapter:
        editor = EntryEditor(adapter, today=lambda: today)
        try:
            result = editor.submit(day, body.mood, body.note)
        except FutureDateError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except InvalidMoodError as e:
            raise HTTPException(status_code=422, detail=str(e))
        if not result.ok:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail=result.error or "Record store unavailable",
            )
        record = adapter.records.get_date(day)
    if record is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Write not confirmed")
    response.status_code = status.HTTP_201_CREATED if result.created else status.HTTP_200_OK
    return MoodEntry(**record.to_dict())


@router.get("", response_model=list[MoodEntry])
async def list_moods(
    limit: int | None = None,
    user: dict = Depends(get_current_user),
    store: RecordStore = Depends(get_record_store),
):
    """Entries newest first."""
    with open_journal(store, user["id"]) as adapter:
        records = adapter.records
    keys = records.sorted_keys(reverse=True)
    if limit is not None:
        keys = keys[: max(limit, 0)]
    return [MoodEntry(**records[k].to_dict()) for k in keys]


@router.get("/{day}", response_model=MoodEntry)
async def read_mood(
    day: date,
    user: dict = Depends(get_current_user),
    store: RecordStore = Depends(get_record_store),
):
    with open_journal(store, user["id"]) as adapter:
        record = adapter.records.get_date(day)
    if record is None:
        raise HTTPException(status_code=404, detail="Entry not found")
    return MoodEntry(**record.to_dict())


@router.put("/{day}", response_model=MoodEntry)
async def put_mood(
    day: date,
    body: MoodWrite,
    response: Response,
    user: dict = Depends(get_current_user),
    store: RecordStore = Depends(get_record_store),
    today: date = Depends(get_today),
):
    """Create (201) or overwrite (200) the entry for ``day``."""
    return _save(store, user["id"], day, body, today, response)


@router.post("", response_model=MoodEntry)
async def create_mood(
    body: MoodCreate,
    response: Response,
    user: dict = Depends(get_current_user),
    store: RecordStore = Depends(get_record_store),
    today: date = Depends(get_today),
):
    """Same as PUT, with the date in the body (defaults to today)."""
    return _save(store, user["id"], body.date or today, body, today, response)


@router.delete("/{day}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_mood(
    day: date,
    confirm: bool = False,
    user: dict = Depends(get_current_user),
    store: RecordStore = Depends(get_record_store),
):
    """Delete needs ``?confirm=true``; a date without an entry is a no-op."""
    if not confirm:
        raise HTTPException(status_code=400, detail="Deletion requires confirm=true")
    with open_journal(store, user["id"]) as adapter:
        editor = EntryEditor(adapter)
        result = editor.delete(day, confirm=lambda _: confirm)
    if result is not None and not result.ok:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=result.error or "Record store unavailable",
        )
