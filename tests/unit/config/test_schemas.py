"""
kvcache — Configuration Schema Tests

Tests CacheConfig defaults, immutability and the fluent builder.
"""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from kvcache.config import CacheBackend, CacheConfig, CacheConfigBuilder


class TestCacheConfigDefaults:
    """Documented defaults."""

    def test_defaults(self) -> None:
        config = CacheConfig()

        assert config.default_ttl == timedelta(minutes=30)
        assert config.max_retries == 3
        assert config.connection_timeout == timedelta(seconds=5)
        assert config.operation_timeout == timedelta(seconds=10)
        assert config.enable_metrics is True
        assert config.enable_compression is False
        assert config.max_key_size == 1024
        assert config.max_value_size == 1024 * 1024
        assert config.backend == CacheBackend.MEMORY

    def test_default_factory_matches_builder(self) -> None:
        assert CacheConfig.default() == CacheConfig.builder().build() == CacheConfig()

    def test_default_ttl_seconds(self) -> None:
        assert CacheConfig.default().default_ttl_seconds == 1800.0


class TestCacheConfigImmutability:
    """Config is frozen after construction."""

    def test_assignment_rejected(self) -> None:
        config = CacheConfig.default()

        with pytest.raises(ValidationError):
            config.max_key_size = 1  # type: ignore[misc]

    def test_hashable(self) -> None:
        assert hash(CacheConfig.default()) == hash(CacheConfig.default())


class TestCacheConfigBuilder:
    """Fluent builder."""

    def test_builder_type(self) -> None:
        assert isinstance(CacheConfig.builder(), CacheConfigBuilder)

    def test_all_setters(self) -> None:
        config = (
            CacheConfig.builder()
            .default_ttl(timedelta(minutes=5))
            .max_retries(7)
            .connection_timeout(timedelta(seconds=2))
            .operation_timeout(timedelta(seconds=4))
            .enable_metrics(False)
            .enable_compression(True)
            .max_key_size(64)
            .max_value_size(128)
            .backend("redis")
            .build()
        )

        assert config.default_ttl == timedelta(minutes=5)
        assert config.max_retries == 7
        assert config.connection_timeout == timedelta(seconds=2)
        assert config.operation_timeout == timedelta(seconds=4)
        assert config.enable_metrics is False
        assert config.enable_compression is True
        assert config.max_key_size == 64
        assert config.max_value_size == 128
        assert config.backend == CacheBackend.REDIS

    def test_numeric_durations_are_seconds(self) -> None:
        config = CacheConfig.builder().default_ttl(90).connection_timeout(0.5).build()

        assert config.default_ttl == timedelta(seconds=90)
        assert config.connection_timeout == timedelta(milliseconds=500)

    def test_unset_fields_keep_defaults(self) -> None:
        config = CacheConfig.builder().max_retries(1).build()

        assert config.max_retries == 1
        assert config.default_ttl == timedelta(minutes=30)
        assert config.max_value_size == 1024 * 1024

    def test_no_range_validation(self) -> None:
        """Negative TTLs and zero sizes are accepted as given."""
        config = CacheConfig.builder().default_ttl(-10).max_key_size(0).max_value_size(0).build()

        assert config.default_ttl == timedelta(seconds=-10)
        assert config.max_key_size == 0
        assert config.max_value_size == 0

    def test_builds_independent_instances(self) -> None:
        builder = CacheConfig.builder().max_retries(2)
        first = builder.build()
        second = builder.max_retries(5).build()

        assert first.max_retries == 2
        assert second.max_retries == 5

    def test_unknown_backend_rejected(self) -> None:
        with pytest.raises(ValueError):
            CacheConfig.builder().backend("memcached")
