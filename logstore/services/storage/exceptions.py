"""
Custom exceptions for execution log storage.
"""


class LogStorageError(Exception):
    """Base exception for log storage errors."""
    pass


class ConfigurationError(LogStorageError):
    """Configuration-related errors (missing or invalid bucket/path settings)."""
    pass


class AdapterError(LogStorageError):
    """Failure talking to the blob store or moving bytes through the adapter."""

    def __init__(self, message: str, cause: BaseException = None, key: str = None):
        super().__init__(message)
        self.cause = cause
        self.key = key
