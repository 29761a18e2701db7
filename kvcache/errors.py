"""
kvcache — Core Error Types

Defines the exception hierarchy and the closed cache error taxonomy.
All exceptions inherit from KVCacheError for consistent error handling.

The taxonomy is backend-agnostic. The in-memory backend only raises
OPERATION_FAILED, INVALID_KEY and INVALID_VALUE; the remaining kinds are
reserved for networked backends.
"""

from enum import Enum
from typing import Any


class CacheErrorType(str, Enum):
    """
    Closed set of cache failure kinds.

    Each kind carries a human-readable description.
    """

    CONNECTION_FAILED = "CONNECTION_FAILED"
    OPERATION_FAILED = "OPERATION_FAILED"
    SERIALIZATION_ERROR = "SERIALIZATION_ERROR"
    INVALID_KEY = "INVALID_KEY"
    INVALID_VALUE = "INVALID_VALUE"
    TIMEOUT = "TIMEOUT"
    MEMORY_FULL = "MEMORY_FULL"
    UNKNOWN = "UNKNOWN"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS: dict[CacheErrorType, str] = {
    CacheErrorType.CONNECTION_FAILED: "Cache connection failed",
    CacheErrorType.OPERATION_FAILED: "Cache operation failed",
    CacheErrorType.SERIALIZATION_ERROR: "Failed to serialize/deserialize data",
    CacheErrorType.INVALID_KEY: "Invalid cache key provided",
    CacheErrorType.INVALID_VALUE: "Invalid cache value provided",
    CacheErrorType.TIMEOUT: "Cache operation timed out",
    CacheErrorType.MEMORY_FULL: "Cache memory is full",
    CacheErrorType.UNKNOWN: "Unknown cache error",
}


class KVCacheError(Exception):
    """Base exception for all kvcache errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for structured logging and API responses."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(KVCacheError):
    """Raised when configuration is invalid or a backend is unavailable."""

    pass


class CacheError(KVCacheError):
    """
    Raised by every cache operation that fails.

    Carries exactly one CacheErrorType plus an optional wrapped cause.
    The cause is also chained as ``__cause__`` so tracebacks show it.
    """

    def __init__(
        self,
        message: str,
        error_type: CacheErrorType = CacheErrorType.UNKNOWN,
        cause: BaseException | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.error_type = error_type
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    @property
    def error_description(self) -> str:
        """User-friendly description of the error kind."""
        return self.error_type.description

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["error_type"] = self.error_type.value
        data["description"] = self.error_description
        if self.cause is not None:
            data["cause"] = repr(self.cause)
        return data

    def __repr__(self) -> str:
        return f"CacheError({self.error_type.value}: {self.message!r})"


def operation_failed(message: str, cause: BaseException | None = None, **details: Any) -> CacheError:
    """Build an OPERATION_FAILED error wrapping ``cause``."""
    return CacheError(message, CacheErrorType.OPERATION_FAILED, cause=cause, details=details or None)


def is_validation_error(error: BaseException) -> bool:
    """
    Check if an error is an input validation failure.

    Args:
        error: Exception to check

    Returns:
        True for INVALID_KEY / INVALID_VALUE cache errors
    """
    return isinstance(error, CacheError) and error.error_type in (
        CacheErrorType.INVALID_KEY,
        CacheErrorType.INVALID_VALUE,
    )
