"""Configuration management for the stash CLI."""

import json
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from common.constants import (
    DEFAULT_CHUNK_SIZE_BYTES,
    DEFAULT_DATABASE_PATH,
    DEFAULT_MAX_RECORD_SIZE_BYTES,
    DEFAULT_NAMESPACE,
    DEFAULT_SERVER_HOST,
    DEFAULT_SERVER_PORT,
)
from common.exceptions import ConfigurationError
from common.logging_config import get_logger

logger = get_logger(__name__)


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from None


@dataclass(frozen=True)
class StashSettings:
    """Resolved settings for one CLI invocation."""

    backend: str
    namespace: str
    chunk_size: int
    database_path: str
    base_url: str
    timeout: float
    max_retries: int
    retry_backoff_multiplier: float
    max_record_size: int


class Config:
    """Manages CLI configuration stored in JSON file."""

    @staticmethod
    def default_config() -> dict:
        """
        Build default configuration, honoring STASH_* environment variables.

        Returns:
            Configuration dictionary
        """
        return {
            "backend": os.environ.get("STASH_BACKEND", "sqlite"),
            "database_path": os.environ.get("STASH_DATABASE_PATH", DEFAULT_DATABASE_PATH),
            "server_host": os.environ.get("STASH_SERVER_HOST", DEFAULT_SERVER_HOST),
            "server_port": _env_int("STASH_SERVER_PORT", DEFAULT_SERVER_PORT),
            "namespace": os.environ.get("STASH_NAMESPACE", DEFAULT_NAMESPACE),
            "chunk_size": _env_int("STASH_CHUNK_SIZE", DEFAULT_CHUNK_SIZE_BYTES),
            "max_record_size": DEFAULT_MAX_RECORD_SIZE_BYTES,
            "timeout": 30,
            "max_retries": 3,
            "retry_backoff_multiplier": 2,
        }

    def __init__(self, config_path: Path):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to config JSON file (typically ~/.stash/config.json)
        """
        self.config_path = config_path
        self.data = self._load()

    def _load(self) -> dict:
        """
        Load configuration from file, creating defaults if necessary.

        Returns:
            Configuration dictionary
        """
        defaults = self.default_config()

        if self.config_path.exists():
            try:
                with open(self.config_path, 'r') as f:
                    data = json.load(f)
                if not isinstance(data, dict):
                    raise ValueError("config root must be an object")
                defaults.update(data)
                return defaults
            except (ValueError, OSError) as e:
                logger.warning(f"Unreadable config file, using defaults [path={self.config_path}]: {e}")
                backup_path = self.config_path.with_suffix('.json.bak')
                try:
                    shutil.copy(self.config_path, backup_path)
                except OSError as copy_error:
                    logger.warning(f"Could not back up config file [path={backup_path}]: {copy_error}")
                return defaults

        self.data = defaults
        self.save()
        return defaults

    def save(self) -> None:
        """Save current configuration to file."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, 'w') as f:
                json.dump(self.data, f, indent=2)
        except OSError as e:
            logger.debug(f"Could not write config file [path={self.config_path}]: {e}")

    def get_backend(self) -> str:
        return self.data.get('backend', 'sqlite')

    def get_namespace(self) -> str:
        return self.data.get('namespace', DEFAULT_NAMESPACE)

    def get_chunk_size(self) -> int:
        return self.data.get('chunk_size', DEFAULT_CHUNK_SIZE_BYTES)

    def get_max_record_size(self) -> int:
        return self.data.get('max_record_size', DEFAULT_MAX_RECORD_SIZE_BYTES)

    def get_database_path(self) -> str:
        return self.data.get('database_path', DEFAULT_DATABASE_PATH)

    def get_base_url(self) -> str:
        """
        Get record server base URL.

        Returns:
            Base URL string (e.g., "http://localhost:8000")
        """
        host = self.data.get('server_host', DEFAULT_SERVER_HOST)
        port = self.data.get('server_port', DEFAULT_SERVER_PORT)
        return f"http://{host}:{port}"

    def get_timeout(self) -> float:
        """
        Get request timeout in seconds.

        Returns:
            Timeout value in seconds
        """
        return self.data.get('timeout', 30)

    def get_retry_config(self) -> dict:
        """
        Get retry configuration.

        Returns:
            Dictionary with 'max_retries' and 'retry_backoff_multiplier'
        """
        return {
            'max_retries': self.data.get('max_retries', 3),
            'retry_backoff_multiplier': self.data.get('retry_backoff_multiplier', 2),
        }

    def to_settings(
        self,
        namespace: Optional[str] = None,
        chunk_size: Optional[int] = None
    ) -> StashSettings:
        """
        Resolve settings, letting command line values override the file.

        Args:
            namespace: Namespace override
            chunk_size: Chunk size override

        Returns:
            StashSettings for this invocation
        """
        retry_config = self.get_retry_config()
        return StashSettings(
            backend=self.get_backend(),
            namespace=namespace if namespace is not None else self.get_namespace(),
            chunk_size=chunk_size if chunk_size is not None else self.get_chunk_size(),
            database_path=self.get_database_path(),
            base_url=self.get_base_url(),
            timeout=self.get_timeout(),
            max_retries=retry_config['max_retries'],
            retry_backoff_multiplier=retry_config['retry_backoff_multiplier'],
            max_record_size=self.get_max_record_size(),
        )
