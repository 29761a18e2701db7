"""
kvcache — In-process Key-Value Cache

A pluggable cache contract backed by a concurrent, TTL-aware in-memory store,
with an immutable configuration surface and a categorized error taxonomy.
"""

__version__ = "1.0.0"

from .cache import CacheInterface, MemoryCacheBackend, create_cache
from .config import CacheBackend, CacheConfig, CacheConfigBuilder, load_config
from .errors import CacheError, CacheErrorType, ConfigurationError, KVCacheError
from .logging_config import setup_logging

__all__ = [
    "CacheInterface",
    "MemoryCacheBackend",
    "create_cache",
    "CacheBackend",
    "CacheConfig",
    "CacheConfigBuilder",
    "load_config",
    "CacheError",
    "CacheErrorType",
    "ConfigurationError",
    "KVCacheError",
    "setup_logging",
]
