"""Content addressing: derives backend-safe blob ids from blob bytes.

Ids are a 64-bit FNV-1a digest rendered in base 27 over the alphabet
Kubernetes uses for generated names (no vowels, no ambiguous digits), so
an id is always a valid record key. FNV-1a is fast but not collision
resistant: two different blobs that share an id also share storage, and
the later stash overwrites the earlier one's partitions.
"""

FNV64_OFFSET_BASIS = 0xCBF29CE484222325
FNV64_PRIME = 0x100000001B3
_MASK64 = 0xFFFFFFFFFFFFFFFF

SAFE_ALPHABET = "bcdfghjklmnpqrstvwxz2456789"
BLOB_ID_LENGTH = 14  # 27**14 > 2**64


class Hasher:
    """
    Incremental FNV-1a (64-bit) hasher producing blob ids.

    Usage:
        hasher = Hasher()
        hasher.update(piece1)
        hasher.update(piece2)
        blob_id = hasher.blob_id()
    """

    def __init__(self):
        self._state = FNV64_OFFSET_BASIS

    def update(self, data: bytes) -> None:
        state = self._state
        for byte in data:
            state ^= byte
            state = (state * FNV64_PRIME) & _MASK64
        self._state = state

    def digest(self) -> int:
        """Current 64-bit digest value."""
        return self._state

    def blob_id(self) -> str:
        """Current digest encoded as a blob id."""
        return encode_digest(self._state)


def encode_digest(value: int) -> str:
    """
    Encode a 64-bit digest as a fixed-width string over SAFE_ALPHABET.

    Args:
        value: Unsigned 64-bit integer

    Returns:
        BLOB_ID_LENGTH characters, most significant digit first
    """
    base = len(SAFE_ALPHABET)
    digits = []
    for _ in range(BLOB_ID_LENGTH):
        value, remainder = divmod(value, base)
        digits.append(SAFE_ALPHABET[remainder])
    return "".join(reversed(digits))


def hash_blob(data: bytes) -> str:
    """
    Compute the blob id for the given bytes.

    Args:
        data: Blob content (may be empty)

    Returns:
        Deterministic blob id
    """
    hasher = Hasher()
    hasher.update(data)
    return hasher.blob_id()


def is_valid_blob_id(value: str) -> bool:
    """Check that a string has the shape of a blob id."""
    return len(value) == BLOB_ID_LENGTH and all(c in SAFE_ALPHABET for c in value)
