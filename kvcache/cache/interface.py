"""
kvcache — Cache Interface

Defines the abstract contract that all cache backends must implement.
"""

import logging
import math
from abc import ABC, abstractmethod
from collections.abc import Hashable, Iterable, Mapping
from datetime import timedelta
from types import TracebackType
from typing import Generic, Optional, TypeVar, Union

from ..errors import CacheError, CacheErrorType, is_validation_error, operation_failed

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

TTL = Union[timedelta, int, float, None]


def ttl_to_seconds(ttl: TTL, default: timedelta) -> float:
    """
    Normalize a TTL argument to seconds.

    Args:
        ttl: timedelta, number of seconds, or None for the default
        default: TTL used when ``ttl`` is None

    Returns:
        TTL in seconds (may be zero or negative)

    Raises:
        TypeError: If ``ttl`` is not a timedelta, int, float or None
        ValueError: If ``ttl`` is NaN or infinite
    """
    if ttl is None:
        seconds = default.total_seconds()
    elif isinstance(ttl, timedelta):
        seconds = ttl.total_seconds()
    elif isinstance(ttl, (int, float)) and not isinstance(ttl, bool):
        seconds = float(ttl)
    else:
        raise TypeError(f"TTL must be a timedelta or a number of seconds, got {type(ttl).__name__}")

    if not math.isfinite(seconds):
        raise ValueError(f"TTL must be finite, got {seconds}")
    return seconds


class CacheInterface(ABC, Generic[K, V]):
    """
    Abstract base class for cache backends.

    All cache implementations must implement this interface to ensure
    consistent behavior across different backends. Every operation is
    synchronous. Every operation except ``is_healthy`` and ``close`` raises
    ``CacheError(OPERATION_FAILED)`` once the cache has been closed.
    """

    @abstractmethod
    def get(self, key: K) -> Optional[V]:
        """
        Retrieve a value from the cache.

        Args:
            key: Cache key

        Returns:
            Cached value if found and not expired, None otherwise

        Raises:
            CacheError: INVALID_KEY for a null key, OPERATION_FAILED otherwise
        """

    @abstractmethod
    def set(self, key: K, value: V, ttl: TTL = None) -> None:
        """
        Store a value in the cache, overwriting any existing entry.

        Args:
            key: Cache key
            value: Value to cache (never None)
            ttl: Time-to-live as timedelta or seconds (None = configured default).
                A zero or negative TTL stores an already-expired entry.

        Raises:
            CacheError: INVALID_KEY, INVALID_VALUE or OPERATION_FAILED
        """

    @abstractmethod
    def delete(self, key: K) -> bool:
        """
        Delete a key from the cache.

        Args:
            key: Cache key to delete

        Returns:
            True if key was deleted, False if key didn't exist
        """

    @abstractmethod
    def exists(self, key: K) -> bool:
        """
        Check if a key exists in the cache.

        Args:
            key: Cache key to check

        Returns:
            True if key exists and is not expired, False otherwise
        """

    @abstractmethod
    def clear(self) -> None:
        """Remove all entries from the cache."""

    @abstractmethod
    def size(self) -> int:
        """
        Count live entries.

        Expired entries are purged before counting.
        """

    @abstractmethod
    def is_healthy(self) -> bool:
        """
        Check if the cache is operational.

        Never raises, so callers can probe liveness safely.
        """

    @abstractmethod
    def close(self) -> None:
        """
        Close the cache backend and release resources.

        Repeated calls are safe.
        """

    def _ensure_open(self) -> None:
        if not self.is_healthy():
            raise CacheError("Cache is closed", CacheErrorType.OPERATION_FAILED)

    def get_many(self, keys: Optional[Iterable[K]]) -> dict[K, V]:
        """
        Retrieve multiple values from the cache.

        Default implementation calls get() for each key.
        Backends can override for better performance.

        Args:
            keys: Cache keys (None or empty yields an empty dict)

        Returns:
            Dictionary mapping keys to values (missing, expired and invalid keys are omitted)
        """
        self._ensure_open()
        if not keys:
            return {}

        result: dict[K, V] = {}
        try:
            for key in keys:
                try:
                    value = self.get(key)
                except CacheError as e:
                    if not is_validation_error(e):
                        raise
                    continue
                if value is not None:
                    result[key] = value
        except CacheError:
            raise
        except Exception as e:
            raise operation_failed("Failed to get multiple values", cause=e) from e
        return result

    def set_many(self, entries: Optional[Mapping[K, V]], ttl: TTL = None) -> int:
        """
        Store multiple values in the cache.

        Entries that fail validation are skipped and logged; the rest are
        stored. The write is not all-or-nothing.

        Args:
            entries: Mapping of keys to values (None or empty is a no-op)
            ttl: Time-to-live applied to every entry

        Returns:
            Number of entries stored
        """
        self._ensure_open()
        if not entries:
            return 0

        count = 0
        try:
            for key, value in entries.items():
                try:
                    self.set(key, value, ttl)
                except CacheError as e:
                    if not is_validation_error(e):
                        raise
                    logger.warning(
                        "Failed to set entry for key %r: %s",
                        key,
                        e.message,
                        extra={"key": repr(key), "error_type": e.error_type.value},
                    )
                    continue
                count += 1
        except CacheError:
            raise
        except Exception as e:
            raise operation_failed("Failed to set multiple values", cause=e) from e
        return count

    def delete_many(self, keys: Optional[Iterable[K]]) -> int:
        """
        Delete multiple keys from the cache.

        Default implementation calls delete() for each key.

        Args:
            keys: Cache keys to delete (None or empty yields 0)

        Returns:
            Number of keys actually removed
        """
        self._ensure_open()
        if not keys:
            return 0

        try:
            return sum(1 for key in keys if self.delete(key))
        except Exception as e:
            raise operation_failed("Failed to delete multiple keys", cause=e) from e

    def __enter__(self) -> "CacheInterface[K, V]":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "open" if self.is_healthy() else "closed"
        return f"<{self.__class__.__name__} {state}>"


__all__ = ["CacheInterface", "TTL", "ttl_to_seconds", "K", "V"]
