"""SQLite-backed record store with per-partition checksums."""

import hashlib
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Generator, List, Optional

from common.constants import DEFAULT_MAX_RECORD_SIZE_BYTES
from common.exceptions import BackendError, ChecksumMismatchError, NotFoundError
from common.logging_config import get_logger
from common.types import Manifest
from recordstore.base import RecordStore

logger = get_logger(__name__)


def compute_checksum(data: bytes) -> str:
    """
    Compute SHA-256 checksum for given data.

    Args:
        data: Bytes to compute checksum for

    Returns:
        Hexadecimal string representation of SHA-256 hash
    """
    return hashlib.sha256(data).hexdigest()


class SqliteRecordStore(RecordStore):
    """
    Record store persisting partitions and manifests in a SQLite database.

    A connection is opened per operation, so one instance can be shared
    by the worker threads of the record server.
    """

    def __init__(self, database_path: str, max_record_size: int = DEFAULT_MAX_RECORD_SIZE_BYTES):
        """
        Initialize the store and create its tables if they don't exist.

        Args:
            database_path: Path to the SQLite database file ('~' is expanded)
            max_record_size: Per-record payload ceiling in bytes
        """
        super().__init__(max_record_size)
        self.database_path = Path(database_path).expanduser()
        self._init_database()

    @contextmanager
    def _connection(self) -> Generator[sqlite3.Connection, None, None]:
        """
        Context manager for database connections.

        sqlite3 errors raised inside the block surface as BackendError.
        """
        try:
            conn = sqlite3.connect(str(self.database_path))
        except sqlite3.Error as e:
            raise BackendError(f"Cannot open record database {self.database_path}: {e}") from e
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        except sqlite3.Error as e:
            logger.error(f"Record database error [path={self.database_path}]: {e}", exc_info=True)
            raise BackendError(f"Record database error: {e}") from e
        finally:
            conn.close()

    def _init_database(self) -> None:
        try:
            self.database_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise BackendError(f"Cannot create directory for {self.database_path}: {e}") from e

        with self._connection() as conn:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS partitions (
                    namespace TEXT NOT NULL,
                    blob_id TEXT NOT NULL,
                    idx INTEGER NOT NULL,
                    size INTEGER NOT NULL,
                    checksum TEXT NOT NULL,
                    data BLOB NOT NULL,
                    PRIMARY KEY(namespace, blob_id, idx)
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS manifests (
                    namespace TEXT NOT NULL,
                    blob_id TEXT NOT NULL,
                    partition_count INTEGER NOT NULL,
                    size INTEGER NOT NULL,
                    created_at TEXT NOT NULL,
                    PRIMARY KEY(namespace, blob_id)
                )
            """)

            conn.commit()

        logger.debug(f"Record database ready [path={self.database_path}]")

    def put(self, namespace: str, blob_id: str, index: int, data: bytes) -> None:
        self.check_record_size(data)
        with self._connection() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO partitions (namespace, blob_id, idx, size, checksum, data)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (namespace, blob_id, index, len(data), compute_checksum(data), sqlite3.Binary(data))
            )
            conn.commit()
        logger.debug(f"Stored partition [namespace={namespace}] [blob_id={blob_id}] [index={index}] size={len(data)}")

    def get(self, namespace: str, blob_id: str, index: int) -> bytes:
        with self._connection() as conn:
            row = conn.execute(
                "SELECT checksum, data FROM partitions WHERE namespace = ? AND blob_id = ? AND idx = ?",
                (namespace, blob_id, index)
            ).fetchone()

        if row is None:
            raise NotFoundError(
                f"No partition {index} for blob {blob_id} in namespace {namespace}"
            )

        data = bytes(row["data"])
        if compute_checksum(data) != row["checksum"]:
            raise ChecksumMismatchError(
                f"Checksum mismatch for partition {index} of blob {blob_id}"
            )
        return data

    def list_indices(self, namespace: str, blob_id: str) -> List[int]:
        with self._connection() as conn:
            rows = conn.execute(
                "SELECT idx FROM partitions WHERE namespace = ? AND blob_id = ? ORDER BY idx",
                (namespace, blob_id)
            ).fetchall()
        return [row["idx"] for row in rows]

    def put_manifest(self, namespace: str, manifest: Manifest) -> None:
        with self._connection() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO manifests (namespace, blob_id, partition_count, size, created_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    namespace,
                    manifest.blob_id,
                    manifest.partition_count,
                    manifest.size,
                    datetime.now(timezone.utc).isoformat(),
                )
            )
            conn.commit()

    def get_manifest(self, namespace: str, blob_id: str) -> Optional[Manifest]:
        with self._connection() as conn:
            row = conn.execute(
                "SELECT partition_count, size FROM manifests WHERE namespace = ? AND blob_id = ?",
                (namespace, blob_id)
            ).fetchone()

        if row is None:
            return None
        return Manifest(blob_id=blob_id, partition_count=row["partition_count"], size=row["size"])
