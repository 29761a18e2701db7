"""
kvcache — Cache Factory

Creates cache instances based on configuration.

Every call returns a new, independently owned instance: the factory keeps no
registry, so each cache can be closed without affecting any other.

Examples:
    from kvcache.cache.factory import create_cache

    # Uses env-configured settings (memory backend by default)
    cache = create_cache()

    # Or explicitly supply a CacheConfig (e.g., for tests)
    from kvcache.config import CacheConfig
    cfg = CacheConfig.builder().default_ttl(600).build()
    mem_cache = create_cache(cfg)
"""

from __future__ import annotations

import logging

from ..config import CacheBackend, CacheConfig, get_config
from ..errors import ConfigurationError
from .backends.memory import MemoryCacheBackend
from .backends.store import Clock
from .interface import CacheInterface

logger = logging.getLogger(__name__)


def _create_memory_cache(config: CacheConfig, clock: Clock | None) -> CacheInterface:
    """Internal helper to construct a memory cache backend."""
    if clock is None:
        return MemoryCacheBackend(config)
    return MemoryCacheBackend(config, clock=clock)


def create_cache(
    config: CacheConfig | None = None,
    clock: Clock | None = None,
) -> CacheInterface:
    """
    Create a cache backend instance based on configuration.

    Args:
        config: Cache configuration (uses loaded config if not provided)
        clock: Optional time source passed to in-memory backends

    Returns:
        Configured cache backend instance

    Raises:
        ConfigurationError: If the selected backend is unavailable
    """
    if config is None:
        config = get_config()

    logger.info(
        "Creating cache instance with backend: %s",
        config.backend.value,
        extra={"backend": config.backend.value},
    )

    if config.backend == CacheBackend.MEMORY:
        return _create_memory_cache(config, clock)

    if config.backend == CacheBackend.REDIS:
        logger.error(
            "Redis backend selected but no networked backend is available",
            extra={"backend": config.backend.value},
        )
        raise ConfigurationError(
            "Cache backend 'redis' is reserved and not available in this build",
            details={"backend": config.backend.value, "supported": [CacheBackend.MEMORY.value]},
        )

    raise ConfigurationError(
        f"Unknown cache backend: {config.backend}",
        details={"backend": str(config.backend), "supported": [CacheBackend.MEMORY.value]},
    )
