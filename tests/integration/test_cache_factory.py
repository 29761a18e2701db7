"""
kvcache — Cache Factory Integration Tests

Tests backend selection, configuration plumbing and instance independence.
"""

import pytest

from kvcache.cache.backends.memory import MemoryCacheBackend
from kvcache.cache.factory import create_cache
from kvcache.cache.interface import CacheInterface
from kvcache.config import CacheBackend, CacheConfig
from kvcache.errors import ConfigurationError


class TestCacheFactory:
    """Test suite for cache factory functionality."""

    @pytest.mark.usefixtures("clean_env")
    def test_create_memory_cache_default(self) -> None:
        """Test creating a memory cache from the loaded configuration."""
        cache = create_cache()

        assert isinstance(cache, CacheInterface)
        assert isinstance(cache, MemoryCacheBackend)

        cache.set("test_key", "test_value")
        assert cache.get("test_key") == "test_value"
        cache.close()

    @pytest.mark.usefixtures("clean_env")
    def test_create_uses_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CACHE_MAX_KEY_SIZE", "4")

        cache = create_cache()

        assert isinstance(cache, MemoryCacheBackend)
        assert cache.config.max_key_size == 4

    def test_create_memory_cache_explicit_config(self) -> None:
        """Test creating a memory cache with explicit configuration."""
        config = CacheConfig.builder().default_ttl(1800).max_key_size(50).build()

        cache = create_cache(config)

        assert isinstance(cache, MemoryCacheBackend)
        assert cache.config is config
        cache.set("key1", "value1")
        assert cache.get("key1") == "value1"

    def test_clock_is_forwarded(self, clock) -> None:  # type: ignore[no-untyped-def]
        cache = create_cache(CacheConfig.default(), clock=clock)

        cache.set("k", "v", ttl=10)
        clock.advance(10)
        assert cache.get("k") is None

    def test_each_call_creates_new_instance(self) -> None:
        """The factory keeps no registry; instances are independent."""
        first = create_cache(CacheConfig.default())
        second = create_cache(CacheConfig.default())

        assert first is not second
        first.set("k", "v")
        first.close()

        assert second.is_healthy() is True
        assert second.get("k") is None

    def test_redis_backend_is_reserved(self) -> None:
        config = CacheConfig.builder().backend(CacheBackend.REDIS).build()

        with pytest.raises(ConfigurationError) as exc_info:
            create_cache(config)

        assert exc_info.value.details["backend"] == "redis"
        assert exc_info.value.details["supported"] == ["memory"]
