from .adapter import RecordStoreAdapter, WriteResult
from .client import MoodFlowClient
from .editor import EntryEditor
from .records import MoodRecord, RecordMap
from .store import RecordStore, SQLiteRecordStore

__all__ = [
    "MoodFlowClient",
    "MoodRecord",
    "RecordMap",
    "RecordStore",
    "RecordStoreAdapter",
    "SQLiteRecordStore",
    "EntryEditor",
    "WriteResult",
]
