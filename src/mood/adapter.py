"""Record Store Adapter: mirrors one user's records into a read-only map."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from typing import Optional

import structlog

from .errors import InvalidMoodError, RecordStoreError
from .records import EMPTY_RECORD_MAP, MoodRecord, RecordMap
from .store import RecordStore, Snapshot, Subscription

logger = structlog.get_logger()

RecordsListener = Callable[[RecordMap], None]


@dataclass(frozen=True)
class WriteResult:
    """Outcome of a write or delete request."""

    ok: bool
    date: str
    created: bool = False
    error: Optional[str] = None


class RecordStoreAdapter:
    """Subscribes to a user's collection and issues create/update/delete requests.

    The local map is only ever replaced by store callbacks, so writes become
    visible once the store echoes them back.
    """

    def __init__(self, store: RecordStore):
        self.store = store
        self.user_id: Optional[str] = None
        self._records: RecordMap = EMPTY_RECORD_MAP
        self._subscription: Optional[Subscription] = None
        self._listeners: list[RecordsListener] = []

    @property
    def records(self) -> RecordMap:
        return self._records

    @property
    def active(self) -> bool:
        return self._subscription is not None

    def add_listener(self, listener: RecordsListener) -> None:
        """Register a "record map changed" observer."""
        self._listeners.append(listener)

    def start(self, user_id: str) -> None:
        """Subscribe to ``user_id``'s records (replaces any previous subscription)."""
        if self._subscription is not None:
            self.stop()
        self.user_id = user_id
        self._subscription = self.store.subscribe(user_id, self._on_snapshot)
        logger.info("adapter.started", user_id=user_id, records=len(self._records))

    def stop(self) -> None:
        """Tear down the subscription and discard the map."""
        if self._subscription is not None:
            self._subscription.close()
            logger.info("adapter.stopped", user_id=self.user_id)
        self._subscription = None
        self.user_id = None
        self._replace(EMPTY_RECORD_MAP)

    def _on_snapshot(self, data: Snapshot) -> None:
        records = []
        for key, raw in data.items():
            try:
                records.append(MoodRecord.from_store(key, raw))
            except (ValueError, TypeError, InvalidMoodError) as e:
                logger.warning("adapter.bad_record", date=key, error=str(e))
        self._replace(RecordMap.from_records(records))

    def _replace(self, records: RecordMap) -> None:
        self._records = records
        for listener in list(self._listeners):
            listener(records)

    def _require_user(self) -> str:
        if self.user_id is None:
            raise RecordStoreError("No active subscription")
        return self.user_id

    def write(self, record: MoodRecord) -> WriteResult:
        """Upsert ``record`` under its date. Failures are logged and returned."""
        key = record.key
        created = key not in self._records
        try:
            user_id = self._require_user()
            self.store.write(user_id, key, record.to_store())
        except RecordStoreError as e:
            logger.error("record_store.write_failed", date=key, error=str(e))
            return WriteResult(ok=False, date=key, error=str(e))
        logger.info(
            "adapter.record_saved", user_id=user_id, date=key, created=created
        )
        return WriteResult(ok=True, date=key, created=created)

    def delete(self, day: date) -> WriteResult:
        """Remove the record for ``day``; a missing record is a no-op success."""
        key = day.isoformat()
        if key not in self._records:
            return WriteResult(ok=True, date=key)
        try:
            user_id = self._require_user()
            self.store.delete(user_id, key)
        except RecordStoreError as e:
            logger.error("record_store.delete_failed", date=key, error=str(e))
            return WriteResult(ok=False, date=key, error=str(e))
        logger.info("adapter.record_deleted", user_id=user_id, date=key)
        return WriteResult(ok=True, date=key)
