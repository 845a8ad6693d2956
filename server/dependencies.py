"""Shared record store instance for request handlers."""

from typing import Optional

from recordstore.sqlite_store import SqliteRecordStore
from server.config import DATABASE_PATH, MAX_RECORD_SIZE

_store: Optional[SqliteRecordStore] = None


def get_store() -> SqliteRecordStore:
    """Get or create the server's record store."""
    global _store
    if _store is None:
        _store = SqliteRecordStore(DATABASE_PATH, max_record_size=MAX_RECORD_SIZE)
    return _store
