"""Tests for the ordered partition stream."""

import pytest

from common.exceptions import BackendError, NotFoundError
from common.types import Manifest, Partition
from stash.stream import Stream

BLOB_ID = "bcdfghjklmnpqr"


def test_write_appends_at_next_index(memory_store):
    stream = Stream(memory_store, "default", BLOB_ID)

    first = stream.write(b"alpha")
    second = stream.write(b"beta")

    assert first == Partition(blob_id=BLOB_ID, index=0, data=b"alpha")
    assert second.index == 1
    assert stream.written == 2
    assert memory_store.list_indices("default", BLOB_ID) == [0, 1]


def test_write_accepts_memoryview(memory_store):
    stream = Stream(memory_store, "default", BLOB_ID)

    partition = stream.write(memoryview(b"abcdef")[2:4])

    assert partition.data == b"cd"
    assert memory_store.get("default", BLOB_ID, 0) == b"cd"


def test_read_returns_partitions_in_order(memory_store):
    for index, payload in [(2, b"c"), (0, b"a"), (1, b"b")]:
        memory_store.put("default", BLOB_ID, index, payload)

    partitions = Stream(memory_store, "default", BLOB_ID).read()

    assert [p.index for p in partitions] == [0, 1, 2]
    assert b"".join(p.data for p in partitions) == b"abc"


def test_read_is_repeatable(memory_store):
    stream = Stream(memory_store, "default", BLOB_ID)
    stream.write(b"one")
    stream.write(b"two")

    assert stream.read() == stream.read()


def test_read_of_unknown_blob_is_empty(memory_store):
    assert Stream(memory_store, "default", BLOB_ID).read() == []


def test_read_rejects_missing_first_partition(memory_store):
    memory_store.put("default", BLOB_ID, 1, b"b")

    with pytest.raises(BackendError, match="expected index 0"):
        Stream(memory_store, "default", BLOB_ID).read()


def test_read_partition_missing_raises_not_found(memory_store):
    with pytest.raises(NotFoundError):
        Stream(memory_store, "default", BLOB_ID).read_partition(0)


def test_iteration_is_lazy(memory_store):
    stream = Stream(memory_store, "default", BLOB_ID)
    stream.write(b"x")
    stream.write(b"y")

    iterator = iter(stream)
    assert next(iterator).data == b"x"
    assert next(iterator).data == b"y"
    with pytest.raises(StopIteration):
        next(iterator)


def test_commit_records_partition_count(memory_store):
    stream = Stream(memory_store, "default", BLOB_ID)
    stream.write(b"1234")
    stream.write(b"56")

    manifest = stream.commit(6)

    assert manifest == Manifest(blob_id=BLOB_ID, partition_count=2, size=6)
    assert Stream(memory_store, "default", BLOB_ID).manifest() == manifest


def test_manifest_absent_before_commit(memory_store):
    stream = Stream(memory_store, "default", BLOB_ID)
    stream.write(b"data")

    assert stream.manifest() is None


def test_streams_with_same_id_share_partitions(memory_store):
    Stream(memory_store, "default", BLOB_ID).write(b"shared")

    assert Stream(memory_store, "default", BLOB_ID).read()[0].data == b"shared"
    assert Stream(memory_store, "other", BLOB_ID).read() == []


def test_committed_indices_stop_at_manifest_count(memory_store):
    for index in range(5):
        memory_store.put("default", BLOB_ID, index, b"p")
    manifest = Manifest(blob_id=BLOB_ID, partition_count=2, size=2)

    assert Stream(memory_store, "default", BLOB_ID).committed_indices(manifest) == [0, 1]


def test_committed_indices_require_every_committed_partition(memory_store):
    memory_store.put("default", BLOB_ID, 0, b"a")
    memory_store.put("default", BLOB_ID, 2, b"c")
    manifest = Manifest(blob_id=BLOB_ID, partition_count=2, size=2)

    with pytest.raises(BackendError, match="should have 2 partitions, found 1"):
        Stream(memory_store, "default", BLOB_ID).committed_indices(manifest)


def test_committed_indices_of_empty_blob(memory_store):
    manifest = Manifest(blob_id=BLOB_ID, partition_count=0, size=0)

    assert Stream(memory_store, "default", BLOB_ID).committed_indices(manifest) == []
