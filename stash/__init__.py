"""Content-addressed blob storage over size-limited records."""

from stash.hasher import Hasher, hash_blob, is_valid_blob_id
from stash.partitioner import Partitioner
from stash.stream import Stream

__all__ = [
    "Hasher",
    "Partitioner",
    "Stream",
    "hash_blob",
    "is_valid_blob_id",
]
