"""Splits blobs into fixed-size partitions and joins them back."""

import io
from typing import BinaryIO

from common.exceptions import BackendError, ConfigurationError, NotFoundError
from common.logging_config import get_logger
from stash.stream import Stream

logger = get_logger(__name__)


class Partitioner:
    """
    Splits blobs into partitions of at most chunk_size bytes.

    Every partition except possibly the last is exactly chunk_size bytes.
    """

    def __init__(self, chunk_size: int):
        """
        Initialize the partitioner.

        Args:
            chunk_size: Partition size in bytes, must be positive

        Raises:
            ConfigurationError: If chunk_size is not a positive integer
        """
        if isinstance(chunk_size, bool) or not isinstance(chunk_size, int) or chunk_size <= 0:
            raise ConfigurationError(f"Chunk size must be a positive integer, got {chunk_size!r}")
        self._chunk_size = chunk_size

    def __repr__(self) -> str:
        return f"Partitioner(chunk_size={self._chunk_size})"

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    def count_partitions(self, length: int) -> int:
        """Number of partitions a blob of the given length splits into."""
        return -(-length // self._chunk_size)

    def split(self, data: bytes, sink: Stream) -> None:
        """
        Write data to sink as ordered partitions, then commit the blob.

        The first failed write aborts the split. Partitions already written
        stay in the store and no manifest is written for the blob.

        Args:
            data: Blob content (may be empty)
            sink: Stream to write partitions to

        Raises:
            BackendError: If a partition or manifest write fails
        """
        view = memoryview(data)
        logger.info(
            f"Splitting blob [blob_id={sink.blob_id}] size={len(view)} "
            f"partitions={self.count_partitions(len(view))} chunk_size={self._chunk_size}"
        )
        for offset in range(0, len(view), self._chunk_size):
            sink.write(view[offset:offset + self._chunk_size])
        sink.commit(len(view))

    def join(self, source: Stream) -> bytes:
        """
        Read every partition from source and concatenate them.

        Args:
            source: Stream to read partitions from

        Returns:
            The reassembled blob

        Raises:
            NotFoundError: If the blob has no partitions and was never committed
            BackendError: If a read fails or the partitions disagree with the manifest
        """
        buffer = io.BytesIO()
        self.join_into(buffer, source)
        return buffer.getvalue()

    def join_into(self, out: BinaryIO, source: Stream) -> int:
        """
        Write every partition from source to a binary file object, in order.

        Args:
            out: Writable binary file object
            source: Stream to read partitions from

        Returns:
            Number of bytes written

        Raises:
            NotFoundError: If the blob has no partitions and was never committed
            BackendError: If a read fails or the partitions disagree with the manifest
        """
        manifest = source.manifest()

        if manifest is None:
            indices = source.indices()
            if not indices:
                raise NotFoundError(f"No blob stored with id {source.blob_id}")
            logger.warning(
                f"Blob has no commit manifest and may be incomplete "
                f"[blob_id={source.blob_id}] partitions={len(indices)}"
            )
        else:
            indices = source.committed_indices(manifest)

        written = 0
        for index in indices:
            try:
                partition = source.read_partition(index)
            except NotFoundError as e:
                raise BackendError(
                    f"Partition {index} of blob {source.blob_id} disappeared during read"
                ) from e
            out.write(partition.data)
            written += partition.size

        if manifest is not None and manifest.size != written:
            raise BackendError(
                f"Blob {source.blob_id} should be {manifest.size} bytes, read {written}"
            )

        logger.info(f"Joined blob [blob_id={source.blob_id}] size={written} partitions={len(indices)}")
        return written
