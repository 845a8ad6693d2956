"""Command handler functions for CLI operations."""

from pathlib import Path
from typing import BinaryIO, Optional

from common.exceptions import ConfigurationError, StashError
from common.logging_config import get_logger
from cli.config import StashSettings
from cli.models import GetCommand, StashCommand
from recordstore.base import RecordStore
from recordstore.http_store import HttpRecordStore
from recordstore.sqlite_store import SqliteRecordStore
from stash.hasher import hash_blob
from stash.partitioner import Partitioner
from stash.stream import Stream

logger = get_logger(__name__)


def create_record_store(settings: StashSettings) -> RecordStore:
    """
    Build the record store named by settings.backend.

    Args:
        settings: Resolved CLI settings

    Returns:
        RecordStore instance

    Raises:
        ConfigurationError: If the backend is unknown
    """
    if settings.backend == "sqlite":
        logger.debug(f"Using SQLite record store [path={settings.database_path}]")
        return SqliteRecordStore(settings.database_path, max_record_size=settings.max_record_size)
    if settings.backend == "http":
        logger.debug(f"Using HTTP record store [base_url={settings.base_url}]")
        return HttpRecordStore(
            settings.base_url,
            timeout=settings.timeout,
            max_retries=settings.max_retries,
            retry_backoff_multiplier=settings.retry_backoff_multiplier,
            max_record_size=settings.max_record_size,
        )
    raise ConfigurationError(f"Unknown backend: {settings.backend!r} (expected 'sqlite' or 'http')")


def create_partitioner(settings: StashSettings, store: RecordStore) -> Partitioner:
    """
    Build a partitioner whose partitions fit in the store's records.

    Raises:
        ConfigurationError: If the chunk size is invalid or above the store's record ceiling
    """
    partitioner = Partitioner(settings.chunk_size)
    if partitioner.chunk_size > store.max_record_size:
        raise ConfigurationError(
            f"Chunk size {partitioner.chunk_size} exceeds the record store limit of "
            f"{store.max_record_size} bytes"
        )
    return partitioner


def handle_stash(
    cmd: StashCommand,
    settings: StashSettings,
    store: RecordStore,
    stdin: Optional[BinaryIO] = None
) -> str:
    """
    Handle 'stash [file]' command.

    Args:
        cmd: StashCommand with optional file path
        settings: Resolved CLI settings
        store: Record store to write partitions to
        stdin: Binary input used when cmd.path is None

    Returns:
        The blob id
    """
    if cmd.path is not None:
        data = Path(cmd.path).read_bytes()
    elif stdin is not None:
        data = stdin.read()
    else:
        raise ConfigurationError("No input stream available to stash from")

    partitioner = create_partitioner(settings, store)
    blob_id = hash_blob(data)
    stream = Stream(store, settings.namespace, blob_id)

    logger.info(f"Executing stash command: source={cmd.path or 'stdin'} size={len(data)} [blob_id={blob_id}]")
    try:
        partitioner.split(data, stream)
    except StashError:
        if stream.written:
            logger.warning(
                f"Stash failed; {stream.written} partition(s) were left in the record store "
                f"[namespace={settings.namespace}] [blob_id={blob_id}]"
            )
        raise

    logger.debug("Stash command completed")
    return blob_id


def handle_get(
    cmd: GetCommand,
    settings: StashSettings,
    store: RecordStore,
    stdout: Optional[BinaryIO] = None
) -> int:
    """
    Handle 'get <id> [-o file]' command.

    Args:
        cmd: GetCommand with blob id and optional output path
        settings: Resolved CLI settings
        store: Record store to read partitions from
        stdout: Binary output used when cmd.output_path is None

    Returns:
        Number of bytes written
    """
    logger.info(f"Executing get command: output={cmd.output_path or 'stdout'} [blob_id={cmd.blob_id}]")
    partitioner = create_partitioner(settings, store)
    stream = Stream(store, settings.namespace, cmd.blob_id)

    if cmd.output_path is not None:
        data = partitioner.join(stream)
        output_file = Path(cmd.output_path)
        output_file.write_bytes(data)
        written = len(data)
    elif stdout is not None:
        written = partitioner.join_into(stdout, stream)
        stdout.flush()
    else:
        raise ConfigurationError("No output stream available to write the blob to")

    logger.debug(f"Get command completed: {written} bytes")
    return written
