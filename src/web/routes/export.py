"""Plain-text report download."""

from datetime import date

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from mood.report import plain_text_report, report_filename
from mood.store import RecordStore
from web.auth import get_current_user
from web.deps import get_record_store, get_today, open_journal

logger = structlog.get_logger()

router = APIRouter(prefix="/api/export", tags=["export"])


@router.get("/report", response_class=PlainTextResponse)
async def download_report(
    user: dict = Depends(get_current_user),
    store: RecordStore = Depends(get_record_store),
    today: date = Depends(get_today),
):
    with open_journal(store, user["id"]) as adapter:
        records = adapter.records
    text = plain_text_report(records, user.get("email"), today)
    logger.info("export.report", user_id=user["id"], records=len(records))
    return PlainTextResponse(
        content=text,
        media_type="text/plain; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{report_filename(today)}"'},
    )
