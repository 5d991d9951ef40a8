"""Per-user record store: abstract contract + SQLite implementation.

The store keeps wire-form records (``{"mood", "note", "timestamp"}``)
keyed by ``user_id/date``. Subscribers receive the full record set for
their user on subscribe and again after every change, in emission order.
"""

import sqlite3
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path
from typing import Any

import structlog

from db import wal_connect

from .errors import RecordStoreError

logger = structlog.get_logger()

Snapshot = dict[str, dict[str, Any]]
OnChange = Callable[[Snapshot], None]


class Subscription:
    """Handle returned by ``RecordStore.subscribe``; ``close()`` stops delivery."""

    def __init__(self, store: "RecordStore", user_id: str, callback: OnChange):
        self.store = store
        self.user_id = user_id
        self.callback = callback
        self.closed = False

    def close(self) -> None:
        if not self.closed:
            self.store._unsubscribe(self)
            self.closed = True


class RecordStore(ABC):
    """Real-time key-value store of mood records, one collection per user."""

    def __init__(self):
        self._subs: dict[str, list[Subscription]] = {}
        self._lock = threading.Lock()

    @abstractmethod
    def snapshot(self, user_id: str) -> Snapshot:
        """Current records for a user, keyed by date."""

    @abstractmethod
    def _put(self, user_id: str, date_key: str, record: dict[str, Any]) -> None: ...

    @abstractmethod
    def _remove(self, user_id: str, date_key: str) -> None: ...

    def write(self, user_id: str, date_key: str, record: dict[str, Any]) -> None:
        """Upsert one record and notify subscribers."""
        self._put(user_id, date_key, record)
        self._emit(user_id)

    def delete(self, user_id: str, date_key: str) -> None:
        """Remove one record (missing keys are fine) and notify subscribers."""
        self._remove(user_id, date_key)
        self._emit(user_id)

    def subscribe(self, user_id: str, on_change: OnChange) -> Subscription:
        """Register a callback; it is invoked immediately with the current set."""
        sub = Subscription(self, user_id, on_change)
        with self._lock:
            self._subs.setdefault(user_id, []).append(sub)
        on_change(self.snapshot(user_id))
        return sub

    def subscriber_count(self, user_id: str) -> int:
        with self._lock:
            return len(self._subs.get(user_id, []))

    def _unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            subs = self._subs.get(sub.user_id, [])
            if sub in subs:
                subs.remove(sub)
            if not subs:
                self._subs.pop(sub.user_id, None)

    def _emit(self, user_id: str) -> None:
        with self._lock:
            subs = list(self._subs.get(user_id, []))
        if not subs:
            return
        data = self.snapshot(user_id)
        for sub in subs:
            try:
                sub.callback(dict(data))
            except Exception as e:
                logger.error(
                    "record_store.callback_failed", user_id=user_id, error=str(e)
                )


class SQLiteRecordStore(RecordStore):
    """Record store backed by a single SQLite table."""

    def __init__(self, db_path: Path):
        super().__init__()
        self.db_path = Path(db_path)
        self._init_db()

    def _get_conn(self) -> sqlite3.Connection:
        try:
            return wal_connect(self.db_path, row_factory=True)
        except sqlite3.Error as e:
            raise RecordStoreError(f"Cannot open record store: {e}") from e

    def _init_db(self) -> None:
        conn = self._get_conn()
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS moods (
                    user_id TEXT NOT NULL,
                    date TEXT NOT NULL,
                    mood INTEGER NOT NULL CHECK(mood BETWEEN 1 AND 5),
                    note TEXT NOT NULL DEFAULT '',
                    timestamp INTEGER NOT NULL,
                    PRIMARY KEY (user_id, date)
                );
            """)
            conn.commit()
        finally:
            conn.close()

    def snapshot(self, user_id: str) -> Snapshot:
        conn = self._get_conn()
        try:
            rows = conn.execute(
                "SELECT date, mood, note, timestamp FROM moods WHERE user_id = ? ORDER BY date",
                (user_id,),
            ).fetchall()
        except sqlite3.Error as e:
            raise RecordStoreError(f"Read failed: {e}") from e
        finally:
            conn.close()
        return {
            r["date"]: {"mood": r["mood"], "note": r["note"], "timestamp": r["timestamp"]}
            for r in rows
        }

    def _put(self, user_id: str, date_key: str, record: dict[str, Any]) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                "INSERT INTO moods (user_id, date, mood, note, timestamp) VALUES (?, ?, ?, ?, ?) "
                "ON CONFLICT(user_id, date) DO UPDATE SET "
                "mood = excluded.mood, note = excluded.note, timestamp = excluded.timestamp",
                (user_id, date_key, record["mood"], record.get("note") or "", record["timestamp"]),
            )
            conn.commit()
        except sqlite3.Error as e:
            raise RecordStoreError(f"Write failed for {date_key}: {e}") from e
        finally:
            conn.close()
        logger.debug("record_store.written", user_id=user_id, date=date_key)

    def _remove(self, user_id: str, date_key: str) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                "DELETE FROM moods WHERE user_id = ? AND date = ?", (user_id, date_key)
            )
            conn.commit()
        except sqlite3.Error as e:
            raise RecordStoreError(f"Delete failed for {date_key}: {e}") from e
        finally:
            conn.close()
        logger.debug("record_store.deleted", user_id=user_id, date=date_key)
