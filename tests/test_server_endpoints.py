"""Tests for record server API endpoints."""

import pytest
from fastapi.testclient import TestClient

from recordstore.sqlite_store import SqliteRecordStore
from server.dependencies import get_store
from server.main import app

BLOB = "/namespaces/default/blobs/bcdfghjklmnpqr"


@pytest.fixture
def store(tmp_path):
    """Small-ceiling SQLite store backing the app."""
    return SqliteRecordStore(str(tmp_path / 'server.db'), max_record_size=64)


@pytest.fixture
def client(store):
    """Create FastAPI test client bound to a temporary store."""
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_root_endpoint(client):
    response = client.get('/')
    assert response.status_code == 200
    assert response.json() == {'status': 'running', 'max_record_size': 64}


def test_put_and_get_partition(client):
    response = client.put(f'{BLOB}/partitions/0', content=b'\x00raw\xffbytes')
    assert response.status_code == 204

    response = client.get(f'{BLOB}/partitions/0')
    assert response.status_code == 200
    assert response.content == b'\x00raw\xffbytes'
    assert response.headers['content-type'] == 'application/octet-stream'


def test_get_missing_partition_returns_404(client):
    response = client.get(f'{BLOB}/partitions/0')
    assert response.status_code == 404
    assert response.json()['code'] == 'NOT_FOUND'


def test_oversized_partition_returns_413(client):
    response = client.put(f'{BLOB}/partitions/0', content=b'x' * 65)
    assert response.status_code == 413
    assert response.json()['code'] == 'RECORD_TOO_LARGE'


def test_negative_index_is_rejected(client):
    response = client.put(f'{BLOB}/partitions/-1', content=b'x')
    assert response.status_code == 422


def test_list_partitions(client):
    for index in (1, 0, 2):
        client.put(f'{BLOB}/partitions/{index}', content=b'x')

    response = client.get(f'{BLOB}/partitions')
    assert response.status_code == 200
    assert response.json() == {'indices': [0, 1, 2]}


def test_list_partitions_unknown_blob_is_empty(client):
    response = client.get(f'{BLOB}/partitions')
    assert response.status_code == 200
    assert response.json() == {'indices': []}


def test_manifest_round_trip(client):
    response = client.put(f'{BLOB}/manifest', json={'partition_count': 2, 'size': 100})
    assert response.status_code == 204

    response = client.get(f'{BLOB}/manifest')
    assert response.status_code == 200
    assert response.json() == {'blob_id': 'bcdfghjklmnpqr', 'partition_count': 2, 'size': 100}


def test_missing_manifest_returns_404(client):
    response = client.get(f'{BLOB}/manifest')
    assert response.status_code == 404


def test_manifest_validation(client):
    response = client.put(f'{BLOB}/manifest', json={'partition_count': -1, 'size': 0})
    assert response.status_code == 422


def test_request_id_is_echoed(client):
    response = client.get('/', headers={'X-Request-ID': 'req-123'})
    assert response.headers['X-Request-ID'] == 'req-123'

    response = client.get('/')
    assert response.headers['X-Request-ID']
