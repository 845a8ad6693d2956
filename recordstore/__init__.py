"""Record stores holding size-limited partition records."""

from recordstore.base import RecordStore
from recordstore.http_store import HttpRecordStore
from recordstore.memory import MemoryRecordStore
from recordstore.sqlite_store import SqliteRecordStore

__all__ = [
    "RecordStore",
    "HttpRecordStore",
    "MemoryRecordStore",
    "SqliteRecordStore",
]
