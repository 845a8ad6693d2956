"""Error taxonomy shared by the core, the record stores and the CLI."""


class StashError(Exception):
    """
    Base exception class for all stash errors.
    """
    pass


class ConfigurationError(StashError):
    """
    Raised when a component is constructed with invalid settings
    (e.g., a non-positive chunk size).
    """
    pass


class NotFoundError(StashError):
    """
    Raised when no partitions or record exist for a requested blob id.
    """
    pass


class BackendError(StashError):
    """
    Raised when an operation against the record store fails.
    """
    pass


class RecordTooLargeError(BackendError):
    """
    Raised when a record payload exceeds the store's per-record ceiling.
    """
    pass


class ChecksumMismatchError(BackendError):
    """
    Raised when a stored partition fails checksum verification on read.
    """
    pass


class ValidationError(StashError):
    """
    Raised when a command line invocation or blob id is malformed.
    """
    pass
