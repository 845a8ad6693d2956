"""Shared data type definitions (Partition, Manifest)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Partition:
    """
    One bounded-size slice of a blob.
    """
    blob_id: str
    index: int
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class Manifest:
    """
    Commit record written once every partition of a blob is stored.
    """
    blob_id: str
    partition_count: int
    size: int
