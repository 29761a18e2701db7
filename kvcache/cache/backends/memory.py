"""
kvcache — Memory Cache Backend

In-memory cache implementation with per-key TTL and lazy expiration.
Thread-safe and suitable for single-process deployments.
"""

import logging
import threading
import time
from collections.abc import Iterable, Mapping
from typing import Any, Optional

from ...config import CacheConfig
from ...errors import CacheError, CacheErrorType, operation_failed
from ..interface import TTL, CacheInterface, K, V, ttl_to_seconds
from .store import Clock, TTLStore

logger = logging.getLogger(__name__)


class MemoryCacheBackend(CacheInterface[K, V]):
    """
    In-memory cache backend.

    Features:
    - Per-key TTL with lazy expiration (no sweeper thread)
    - Thread-safe operations on a store owned by this instance
    - Key/value size limits checked against len(str(obj))
    - Terminal close: the store is cleared and every later call fails fast
    """

    def __init__(
        self,
        config: CacheConfig | None = None,
        clock: Clock = time.monotonic,
    ):
        """
        Initialize memory cache backend.

        Args:
            config: Cache configuration (defaults to CacheConfig.default())
            clock: Monotonic time source in seconds, injectable for tests
        """
        self.config = config if config is not None else CacheConfig.default()
        self._store: TTLStore[K, V] = TTLStore(clock=clock)
        self._closed = threading.Event()

    # Validation

    def _check_not_closed(self) -> None:
        if self._closed.is_set():
            raise CacheError("Cache is closed", CacheErrorType.OPERATION_FAILED)

    def _validate_key(self, key: Any) -> None:
        if key is None:
            raise CacheError("Cache key cannot be null", CacheErrorType.INVALID_KEY)

        try:
            hash(key)
            key_length = len(str(key))
        except Exception as e:
            raise CacheError(
                f"Cache key is not usable: {e}",
                CacheErrorType.INVALID_KEY,
                cause=e,
            ) from e

        if key_length > self.config.max_key_size:
            raise CacheError(
                "Cache key size exceeds maximum allowed size",
                CacheErrorType.INVALID_KEY,
                details={"size": key_length, "max_key_size": self.config.max_key_size},
            )

    def _validate_value(self, value: Any) -> None:
        if value is None:
            raise CacheError("Cache value cannot be null", CacheErrorType.INVALID_VALUE)

        # Approximation of the serialized size
        try:
            value_length = len(str(value))
        except Exception as e:
            raise CacheError(
                f"Cache value is not usable: {e}",
                CacheErrorType.INVALID_VALUE,
                cause=e,
            ) from e

        if value_length > self.config.max_value_size:
            raise CacheError(
                "Cache value size exceeds maximum allowed size",
                CacheErrorType.INVALID_VALUE,
                details={"size": value_length, "max_value_size": self.config.max_value_size},
            )

    # Single-key operations

    def get(self, key: K) -> Optional[V]:
        """Retrieve value from cache."""
        self._check_not_closed()
        self._validate_key(key)

        try:
            found, value = self._store.fetch_live(key)
        except Exception as e:
            logger.error(
                f"Unexpected error getting key {key!r} from memory cache: {e}",
                extra={"key": repr(key), "error": str(e)},
                exc_info=True,
            )
            raise operation_failed(f"Failed to get value for key: {key!r}", cause=e) from e

        return value if found else None

    def set(self, key: K, value: V, ttl: TTL = None) -> None:
        """Store value in cache."""
        self._check_not_closed()
        self._validate_key(key)
        self._validate_value(value)

        try:
            self._store.put(key, value, ttl_to_seconds(ttl, self.config.default_ttl))
        except Exception as e:
            logger.error(
                f"Unexpected error setting key {key!r} in memory cache: {e}",
                extra={"key": repr(key), "ttl": str(ttl), "error": str(e)},
                exc_info=True,
            )
            raise operation_failed(f"Failed to set value for key: {key!r}", cause=e) from e

    def delete(self, key: K) -> bool:
        """Delete key from cache."""
        self._check_not_closed()
        self._validate_key(key)

        try:
            return self._store.remove(key)
        except Exception as e:
            logger.error(
                f"Unexpected error deleting key {key!r} from memory cache: {e}",
                extra={"key": repr(key), "error": str(e)},
                exc_info=True,
            )
            raise operation_failed(f"Failed to delete key: {key!r}", cause=e) from e

    def exists(self, key: K) -> bool:
        """Check if key exists and is not expired."""
        self._check_not_closed()
        self._validate_key(key)

        try:
            return self._store.contains_live(key)
        except Exception as e:
            logger.error(
                f"Unexpected error checking existence of key {key!r} in memory cache: {e}",
                extra={"key": repr(key), "error": str(e)},
                exc_info=True,
            )
            raise operation_failed(f"Failed to check existence for key: {key!r}", cause=e) from e

    # Bulk operations

    def get_many(self, keys: Optional[Iterable[K]]) -> dict[K, V]:
        """Retrieve multiple values with one atomic lookup per key."""
        self._check_not_closed()
        if not keys:
            return {}

        try:
            result: dict[K, V] = {}
            for key in keys:
                try:
                    self._validate_key(key)
                except CacheError:
                    continue

                found, value = self._store.fetch_live(key)
                if found:
                    result[key] = value  # type: ignore[assignment]
            return result
        except Exception as e:
            logger.error(
                f"Unexpected error getting multiple keys from memory cache: {e}",
                extra={"error": str(e)},
                exc_info=True,
            )
            raise operation_failed("Failed to get multiple values", cause=e) from e

    def set_many(self, entries: Optional[Mapping[K, V]], ttl: TTL = None) -> int:
        """Store multiple values, skipping entries that fail validation."""
        self._check_not_closed()
        if not entries:
            return 0

        try:
            ttl_seconds = ttl_to_seconds(ttl, self.config.default_ttl)
            count = 0
            for key, value in entries.items():
                try:
                    self._validate_key(key)
                    self._validate_value(value)
                except CacheError as e:
                    logger.warning(
                        "Failed to set entry for key %r: %s",
                        key,
                        e.message,
                        extra={"key": repr(key), "error_type": e.error_type.value},
                    )
                    continue

                self._store.put(key, value, ttl_seconds)
                count += 1

            if count < len(entries):
                logger.warning(
                    "Stored %d of %d entries in bulk write",
                    count,
                    len(entries),
                    extra={"stored": count, "requested": len(entries)},
                )
            return count
        except Exception as e:
            logger.error(
                f"Unexpected error setting multiple keys in memory cache: {e}",
                extra={"key_count": len(entries), "ttl": str(ttl), "error": str(e)},
                exc_info=True,
            )
            raise operation_failed("Failed to set multiple values", cause=e) from e

    # Whole-cache operations

    def clear(self) -> None:
        """Clear all entries from cache."""
        self._check_not_closed()

        try:
            size = self._store.clear()
            logger.info("Cleared %d entries from memory cache", size)
        except Exception as e:
            logger.error(
                f"Unexpected error clearing memory cache: {e}",
                extra={"error": str(e)},
                exc_info=True,
            )
            raise operation_failed("Failed to clear cache", cause=e) from e

    def size(self) -> int:
        """Purge expired entries and count the rest."""
        self._check_not_closed()

        try:
            return self._store.live_count()
        except Exception as e:
            logger.error(
                f"Unexpected error sizing memory cache: {e}",
                extra={"error": str(e)},
                exc_info=True,
            )
            raise operation_failed("Failed to get cache size", cause=e) from e

    def is_healthy(self) -> bool:
        return not self._closed.is_set()

    def close(self) -> None:
        """Close cache and release resources."""
        if self._closed.is_set():
            logger.debug("Memory cache backend already closed")
            return

        self._closed.set()
        try:
            size = self._store.clear()
        except Exception as e:
            logger.error(
                f"Unexpected error closing memory cache: {e}",
                extra={"error": str(e)},
                exc_info=True,
            )
            raise operation_failed("Failed to close cache", cause=e) from e

        logger.debug("Memory cache backend closed, released %d entries", size)
