"""Tests for content addressing."""

import os

from stash.hasher import (
    BLOB_ID_LENGTH,
    FNV64_OFFSET_BASIS,
    SAFE_ALPHABET,
    Hasher,
    encode_digest,
    hash_blob,
    is_valid_blob_id,
)


def test_fnv1a_known_vectors():
    """Digest matches published 64-bit FNV-1a test vectors."""
    for data, expected in [
        (b"", 0xCBF29CE484222325),
        (b"a", 0xAF63DC4C8601EC8C),
        (b"foobar", 0x85944171F73967E8),
    ]:
        hasher = Hasher()
        hasher.update(data)
        assert hasher.digest() == expected


def test_empty_input_hashes():
    blob_id = hash_blob(b"")
    assert blob_id == encode_digest(FNV64_OFFSET_BASIS)
    assert is_valid_blob_id(blob_id)


def test_hash_is_deterministic():
    data = os.urandom(4096)
    assert hash_blob(data) == hash_blob(data)
    assert hash_blob(data) == hash_blob(bytes(bytearray(data)))


def test_hash_is_order_sensitive():
    assert hash_blob(b"ab") != hash_blob(b"ba")


def test_incremental_matches_one_shot():
    data = b"partitioned " * 1000
    hasher = Hasher()
    for offset in range(0, len(data), 333):
        hasher.update(data[offset:offset + 333])
    assert hasher.blob_id() == hash_blob(data)


def test_blob_id_alphabet_and_length():
    for data in (b"", b"\x00", b"\x00" * 64, os.urandom(100), "doge 🐕".encode()):
        blob_id = hash_blob(data)
        assert len(blob_id) == BLOB_ID_LENGTH
        assert set(blob_id) <= set(SAFE_ALPHABET)
        assert "\x00" not in blob_id
        assert blob_id.isprintable()


def test_encode_digest_boundaries():
    assert encode_digest(0) == "b" * BLOB_ID_LENGTH
    assert encode_digest(26) == "b" * (BLOB_ID_LENGTH - 1) + "9"
    assert encode_digest(27) == "b" * (BLOB_ID_LENGTH - 2) + "cb"
    assert len(encode_digest(2 ** 64 - 1)) == BLOB_ID_LENGTH


def test_encode_digest_is_injective_on_neighbours():
    ids = {encode_digest(value) for value in range(2 ** 64 - 100, 2 ** 64)}
    assert len(ids) == 100


def test_is_valid_blob_id_rejects_bad_shapes():
    assert not is_valid_blob_id("")
    assert not is_valid_blob_id("b" * (BLOB_ID_LENGTH - 1))
    assert not is_valid_blob_id("b" * (BLOB_ID_LENGTH + 1))
    assert not is_valid_blob_id("a" * BLOB_ID_LENGTH)
    assert not is_valid_blob_id("B" * BLOB_ID_LENGTH)
    assert not is_valid_blob_id("../" + "b" * (BLOB_ID_LENGTH - 3))
