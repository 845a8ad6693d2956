"""Shared pytest fixtures for all tests."""

import pytest

from cli.config import Config
from recordstore.memory import MemoryRecordStore
from recordstore.sqlite_store import SqliteRecordStore


@pytest.fixture
def memory_store():
    """
    Create an empty in-memory record store.

    Returns:
        MemoryRecordStore instance
    """
    return MemoryRecordStore()


@pytest.fixture
def sqlite_store(tmp_path):
    """
    Create a SQLite record store in a temporary directory.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        SqliteRecordStore instance
    """
    return SqliteRecordStore(str(tmp_path / 'records.db'))


@pytest.fixture
def temp_config_dir(tmp_path):
    """
    Create temporary config directory.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Path to temporary .stash directory
    """
    config_dir = tmp_path / '.stash'
    config_dir.mkdir()
    return config_dir


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """
    Clear STASH_* variables so host settings never leak into tests.

    Args:
        monkeypatch: pytest monkeypatch fixture
    """
    for name in ('STASH_BACKEND', 'STASH_DATABASE_PATH', 'STASH_SERVER_HOST',
                 'STASH_SERVER_PORT', 'STASH_NAMESPACE', 'STASH_CHUNK_SIZE'):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_config(temp_config_dir, monkeypatch):
    """
    Create temporary config instance using a temporary database path.

    Args:
        temp_config_dir: Temporary config directory fixture
        monkeypatch: pytest monkeypatch fixture

    Returns:
        Config instance with temp config file
    """
    monkeypatch.setenv('STASH_DATABASE_PATH', str(temp_config_dir / 'records.db'))
    return Config(temp_config_dir / 'config.json')


@pytest.fixture
def settings(temp_config):
    """
    Resolved settings pointing at a temporary SQLite database.

    Returns:
        StashSettings instance
    """
    return temp_config.to_settings()


@pytest.fixture
def doge_svg(tmp_path):
    """
    Create an SVG file larger than several default-size partitions.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Path to doge.svg
    """
    body = "".join(
        f'<circle cx="{i % 640}" cy="{(i * 7) % 480}" r="{i % 13 + 1}" fill="#{i * 2654435761 % 0xFFFFFF:06x}"/>\n'
        for i in range(900)
    )
    content = (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<svg xmlns="http://www.w3.org/2000/svg" width="640" height="480">\n'
        f'{body}</svg>\n'
    ).encode('utf-8')
    file_path = tmp_path / 'doge.svg'
    file_path.write_bytes(content)
    return file_path
