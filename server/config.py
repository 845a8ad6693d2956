"""Configuration settings for the record server."""

import os

from common.constants import (
    DEFAULT_DATABASE_PATH,
    DEFAULT_MAX_RECORD_SIZE_BYTES,
    DEFAULT_SERVER_PORT,
)


DATABASE_PATH = os.environ.get("STASH_DATABASE_PATH", DEFAULT_DATABASE_PATH)

SERVER_HOST = os.environ.get("STASH_SERVER_HOST", "0.0.0.0")

SERVER_PORT = int(os.environ.get("STASH_SERVER_PORT", str(DEFAULT_SERVER_PORT)))

MAX_RECORD_SIZE = int(os.environ.get("STASH_MAX_RECORD_SIZE", str(DEFAULT_MAX_RECORD_SIZE_BYTES)))
