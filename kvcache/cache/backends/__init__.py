"""
kvcache — Cache Backends

Exports available cache backend implementations.
"""

from .memory import MemoryCacheBackend
from .store import CacheEntry, TTLStore

__all__ = [
    "MemoryCacheBackend",
    "CacheEntry",
    "TTLStore",
]
