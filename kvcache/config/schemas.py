"""
kvcache — Configuration Schemas

Defines the typed, immutable cache configuration using Pydantic.

A CacheConfig is built once (directly, through CacheConfigBuilder, or by the
environment loader) and shared by value with every operation of a cache
instance. Only the default TTL and the key/value size limits are honored by
the in-memory backend; the remaining tunables are reserved for networked
backends.
"""

from datetime import timedelta
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_TTL = timedelta(minutes=30)
DEFAULT_MAX_RETRIES = 3
DEFAULT_CONNECTION_TIMEOUT = timedelta(seconds=5)
DEFAULT_OPERATION_TIMEOUT = timedelta(seconds=10)
DEFAULT_MAX_KEY_SIZE = 1024  # 1 KiB
DEFAULT_MAX_VALUE_SIZE = 1024 * 1024  # 1 MiB


class CacheBackend(str, Enum):
    """Supported cache backends."""

    MEMORY = "memory"
    REDIS = "redis"  # Reserved, no implementation in core


class CacheConfig(BaseModel):
    """
    Immutable cache configuration.

    No cross-field or range validation is performed: a negative TTL or a zero
    max size is accepted as given.
    """

    model_config = ConfigDict(frozen=True)

    default_ttl: timedelta = Field(default=DEFAULT_TTL, description="TTL applied when none is given")
    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, description="Retry attempts (reserved)")
    connection_timeout: timedelta = Field(
        default=DEFAULT_CONNECTION_TIMEOUT, description="Backend connection timeout (reserved)"
    )
    operation_timeout: timedelta = Field(
        default=DEFAULT_OPERATION_TIMEOUT, description="Per-operation timeout (reserved)"
    )
    enable_metrics: bool = Field(default=True, description="Metrics collection (reserved)")
    enable_compression: bool = Field(default=False, description="Value compression (reserved)")
    max_key_size: int = Field(default=DEFAULT_MAX_KEY_SIZE, description="Max length of str(key)")
    max_value_size: int = Field(default=DEFAULT_MAX_VALUE_SIZE, description="Max length of str(value)")
    backend: CacheBackend = Field(default=CacheBackend.MEMORY, description="Cache backend to use")

    @property
    def default_ttl_seconds(self) -> float:
        return self.default_ttl.total_seconds()

    @classmethod
    def builder(cls) -> "CacheConfigBuilder":
        """Create a new builder seeded with the defaults."""
        return CacheConfigBuilder()

    @classmethod
    def default(cls) -> "CacheConfig":
        """Create a configuration with every tunable at its default."""
        return cls.builder().build()


def _as_timedelta(value: timedelta | int | float) -> timedelta:
    if isinstance(value, timedelta):
        return value
    return timedelta(seconds=value)


class CacheConfigBuilder:
    """
    Fluent builder for CacheConfig.

    Example:
        config = (
            CacheConfig.builder()
            .default_ttl(timedelta(minutes=5))
            .max_retries(3)
            .enable_metrics(True)
            .build()
        )
    """

    def __init__(self) -> None:
        self._values: dict[str, object] = {}

    def default_ttl(self, ttl: timedelta | int | float) -> "CacheConfigBuilder":
        self._values["default_ttl"] = _as_timedelta(ttl)
        return self

    def max_retries(self, max_retries: int) -> "CacheConfigBuilder":
        self._values["max_retries"] = max_retries
        return self

    def connection_timeout(self, timeout: timedelta | int | float) -> "CacheConfigBuilder":
        self._values["connection_timeout"] = _as_timedelta(timeout)
        return self

    def operation_timeout(self, timeout: timedelta | int | float) -> "CacheConfigBuilder":
        self._values["operation_timeout"] = _as_timedelta(timeout)
        return self

    def enable_metrics(self, enable: bool) -> "CacheConfigBuilder":
        self._values["enable_metrics"] = enable
        return self

    def enable_compression(self, enable: bool) -> "CacheConfigBuilder":
        self._values["enable_compression"] = enable
        return self

    def max_key_size(self, max_key_size: int) -> "CacheConfigBuilder":
        self._values["max_key_size"] = max_key_size
        return self

    def max_value_size(self, max_value_size: int) -> "CacheConfigBuilder":
        self._values["max_value_size"] = max_value_size
        return self

    def backend(self, backend: CacheBackend | str) -> "CacheConfigBuilder":
        self._values["backend"] = CacheBackend(backend)
        return self

    def build(self) -> CacheConfig:
        """Freeze the collected values into a CacheConfig."""
        return CacheConfig(**self._values)  # type: ignore[arg-type]
