"""Ordered read/write channel over the partitions of one blob."""

from typing import Iterator, List, Optional

from common.exceptions import BackendError
from common.logging_config import get_logger
from common.types import Manifest, Partition
from recordstore.base import RecordStore

logger = get_logger(__name__)


class Stream:
    """
    Partitions of the blob identified by (namespace, blob_id).

    Each write() appends one partition at the next sequence index and is
    an independent backend put; nothing is rolled back if a later write
    fails. Partitions are write-once, so reads are repeatable.
    """

    def __init__(self, store: RecordStore, namespace: str, blob_id: str):
        self.store = store
        self.namespace = namespace
        self.blob_id = blob_id
        self._next_index = 0

    def __repr__(self) -> str:
        return f"Stream(namespace={self.namespace!r}, blob_id={self.blob_id!r})"

    @property
    def written(self) -> int:
        """Number of partitions written through this stream."""
        return self._next_index

    def write(self, data: bytes) -> Partition:
        """
        Append one partition.

        Args:
            data: Partition payload

        Returns:
            The stored Partition

        Raises:
            BackendError: If the record store rejects or fails the put
        """
        partition = Partition(blob_id=self.blob_id, index=self._next_index, data=bytes(data))
        self.store.put(self.namespace, self.blob_id, partition.index, partition.data)
        self._next_index += 1
        logger.debug(
            f"Wrote partition [namespace={self.namespace}] [blob_id={self.blob_id}] "
            f"[index={partition.index}] size={partition.size}"
        )
        return partition

    def indices(self) -> List[int]:
        """
        Stored partition indices, checked to be exactly 0..n-1.

        Raises:
            BackendError: If indices are duplicated or have gaps
        """
        indices = self.store.list_indices(self.namespace, self.blob_id)
        for expected, actual in enumerate(indices):
            if actual != expected:
                raise BackendError(
                    f"Blob {self.blob_id} has a broken partition sequence: "
                    f"expected index {expected}, found {actual}"
                )
        return indices

    def committed_indices(self, manifest: Manifest) -> List[int]:
        """
        Indices 0..partition_count-1 named by a commit manifest.

        Stored indices past the manifest's count are left over from an
        earlier split of the same content with a smaller chunk size and
        are ignored.

        Raises:
            BackendError: If any committed index is missing
        """
        expected = list(range(manifest.partition_count))
        stored = self.store.list_indices(self.namespace, self.blob_id)
        committed = [index for index in stored if index < manifest.partition_count]
        if committed != expected:
            raise BackendError(
                f"Blob {self.blob_id} should have {manifest.partition_count} partitions, "
                f"found {len(committed)}"
            )
        if len(stored) > len(committed):
            logger.debug(
                f"Ignoring {len(stored) - len(committed)} stale partition(s) beyond the manifest "
                f"[namespace={self.namespace}] [blob_id={self.blob_id}]"
            )
        return committed

    def read_partition(self, index: int) -> Partition:
        """
        Read one stored partition.

        Raises:
            NotFoundError: If no partition exists at index
        """
        data = self.store.get(self.namespace, self.blob_id, index)
        return Partition(blob_id=self.blob_id, index=index, data=data)

    def __iter__(self) -> Iterator[Partition]:
        for index in self.indices():
            yield self.read_partition(index)

    def read(self) -> List[Partition]:
        """Read every stored partition in ascending sequence order."""
        return list(self)

    def commit(self, size: int) -> Manifest:
        """
        Record that the blob is complete.

        Args:
            size: Total blob size in bytes

        Returns:
            The stored Manifest
        """
        manifest = Manifest(blob_id=self.blob_id, partition_count=self._next_index, size=size)
        self.store.put_manifest(self.namespace, manifest)
        return manifest

    def manifest(self) -> Optional[Manifest]:
        """Stored commit manifest, or None if the blob was never committed."""
        return self.store.get_manifest(self.namespace, self.blob_id)
