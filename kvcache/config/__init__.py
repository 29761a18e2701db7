"""
kvcache — Configuration Module

Provides typed configuration building, loading and validation.
"""

from .loader import get_config, load_config, reload_config, reset_config
from .schemas import CacheBackend, CacheConfig, CacheConfigBuilder

__all__ = [
    # Loader functions
    "load_config",
    "get_config",
    "reload_config",
    "reset_config",
    # Config
    "CacheConfig",
    "CacheConfigBuilder",
    # Enums
    "CacheBackend",
]
