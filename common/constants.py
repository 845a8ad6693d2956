"""Project-wide constants (chunk sizes, record limits, namespaces)."""

DEFAULT_CHUNK_SIZE_BYTES: int = 10 * 1024  # 10 KiB per partition
DEFAULT_MAX_RECORD_SIZE_BYTES: int = 1024 * 1024  # 1 MiB, same ceiling as a ConfigMap
DEFAULT_NAMESPACE: str = "default"
DEFAULT_DATABASE_PATH: str = "~/.stash/records.db"
DEFAULT_SERVER_HOST: str = "localhost"
DEFAULT_SERVER_PORT: int = 8000
