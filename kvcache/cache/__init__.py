"""
kvcache — Cache Module

Provides the cache contract and its pluggable backends.

- interface.py: Abstract cache contract all backends must implement
- factory.py: Builds backends from a CacheConfig
- backends/: Backend implementations (in-memory TTL store)

Usage:
    from kvcache.cache import create_cache

    cache = create_cache()
    cache.set("key", "value", ttl=3600)
    value = cache.get("key")
"""

from .backends import MemoryCacheBackend
from .factory import create_cache
from .interface import TTL, CacheInterface

__all__ = [
    "create_cache",
    "CacheInterface",
    "MemoryCacheBackend",
    "TTL",
]
