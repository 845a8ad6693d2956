"""Record store contract used by streams to persist partitions."""

from abc import ABC, abstractmethod
from typing import List, Optional

from common.constants import DEFAULT_MAX_RECORD_SIZE_BYTES
from common.exceptions import RecordTooLargeError
from common.types import Manifest


class RecordStore(ABC):
    """
    Size-limited key/value persistence addressed by (namespace, blob_id, index).

    Every payload accepted by put() is at most max_record_size bytes.
    Implementations wrap their own I/O errors in BackendError.
    """

    def __init__(self, max_record_size: int = DEFAULT_MAX_RECORD_SIZE_BYTES):
        self.max_record_size = max_record_size

    @abstractmethod
    def put(self, namespace: str, blob_id: str, index: int, data: bytes) -> None:
        """
        Store one partition record, replacing any record at the same key.

        Raises:
            RecordTooLargeError: If data exceeds max_record_size
            BackendError: If the write fails
        """

    @abstractmethod
    def get(self, namespace: str, blob_id: str, index: int) -> bytes:
        """
        Read one partition record.

        Raises:
            NotFoundError: If no record exists at the key
            BackendError: If the read fails
        """

    @abstractmethod
    def list_indices(self, namespace: str, blob_id: str) -> List[int]:
        """
        List the partition indices stored for a blob, ascending.

        Returns an empty list for an unknown blob.
        """

    @abstractmethod
    def put_manifest(self, namespace: str, manifest: Manifest) -> None:
        """Store the commit manifest for a blob."""

    @abstractmethod
    def get_manifest(self, namespace: str, blob_id: str) -> Optional[Manifest]:
        """Read the commit manifest for a blob, or None if it was never committed."""

    def check_record_size(self, data: bytes) -> None:
        if len(data) > self.max_record_size:
            raise RecordTooLargeError(
                f"Record of {len(data)} bytes exceeds the {self.max_record_size} byte limit"
            )

    def close(self) -> None:
        """Release any resources held by the store."""

    def __enter__(self) -> 'RecordStore':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
