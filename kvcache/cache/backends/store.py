"""
kvcache — Concurrent TTL Store

Thread-safe mapping from key to (value, expiry) with lazy expiration.

There is no background sweep. An expired entry is discovered and removed
only when something reads it (fetch_live / contains_live) or when
purge_expired() runs. Each primitive below is atomic under the store lock,
so a read never observes a half-written entry and the fetch-if-live-else-evict
check happens in one step.
"""

import threading
import time
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from typing import Generic, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

Clock = Callable[[], float]


@dataclass(frozen=True, slots=True)
class CacheEntry(Generic[V]):
    """
    Stored value plus the absolute instant it expires.

    ``expires_at`` is on the store's clock. An entry is expired once the clock
    reaches ``expires_at``, so a zero or negative TTL is expired immediately.
    """

    value: V
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class TTLStore(Generic[K, V]):
    """
    Lock-guarded dict of CacheEntry objects.

    Entries never leave the store; callers only ever see values.
    """

    def __init__(self, clock: Clock = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[K, CacheEntry[V]] = {}
        self._lock = threading.Lock()

    def put(self, key: K, value: V, ttl_seconds: float) -> None:
        """Insert or overwrite ``key``, expiring ``ttl_seconds`` from now."""
        entry = CacheEntry(value, self._clock() + ttl_seconds)
        with self._lock:
            self._entries[key] = entry

    def fetch_live(self, key: K) -> tuple[bool, V | None]:
        """
        Fetch a live value, evicting it if expired.

        Returns:
            (True, value) for a live entry, (False, None) otherwise
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return False, None
            if entry.is_expired(self._clock()):
                del self._entries[key]
                return False, None
            return True, entry.value

    def contains_live(self, key: K) -> bool:
        found, _ = self.fetch_live(key)
        return found

    def remove(self, key: K) -> bool:
        """Remove ``key``. Returns whether an entry was present."""
        with self._lock:
            return self._entries.pop(key, None) is not None

    def _purge_locked(self) -> int:
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def purge_expired(self) -> int:
        """Drop every expired entry. Returns the number dropped."""
        with self._lock:
            return self._purge_locked()

    def live_count(self) -> int:
        """Purge expired entries, then count what remains."""
        with self._lock:
            self._purge_locked()
            return len(self._entries)

    def clear(self) -> int:
        """Drop everything. Returns the number of entries dropped."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            return count

    def __len__(self) -> int:
        # Includes expired-but-unread entries; call purge_expired() first for a live count.
        with self._lock:
            return len(self._entries)
