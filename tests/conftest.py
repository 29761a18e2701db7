"""
kvcache — Test Configuration and Shared Fixtures

Provides pytest configuration and shared fixtures for unit and integration tests.
"""

from collections.abc import Generator
from typing import Any

import pytest

from kvcache.cache.backends.memory import MemoryCacheBackend
from kvcache.config import CacheConfig, reset_config

_CACHE_ENV_VARS = (
    "CACHE_BACKEND",
    "CACHE_DEFAULT_TTL_SECONDS",
    "CACHE_MAX_RETRIES",
    "CACHE_CONNECTION_TIMEOUT_SECONDS",
    "CACHE_OPERATION_TIMEOUT_SECONDS",
    "CACHE_ENABLE_METRICS",
    "CACHE_ENABLE_COMPRESSION",
    "CACHE_MAX_KEY_SIZE",
    "CACHE_MAX_VALUE_SIZE",
)


class FakeClock:
    """Manually advanced time source for deterministic TTL tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Fake clock starting at an arbitrary instant."""
    return FakeClock()


@pytest.fixture
def small_config() -> CacheConfig:
    """Config with tight size limits for validation tests."""
    return CacheConfig.builder().default_ttl(60).max_key_size(8).max_value_size(16).build()


@pytest.fixture
def cache(clock: FakeClock) -> Generator[MemoryCacheBackend[Any, Any], None, None]:
    """Fresh memory cache on a fake clock, closed after the test."""
    backend: MemoryCacheBackend[Any, Any] = MemoryCacheBackend(CacheConfig.default(), clock=clock)
    yield backend
    backend.close()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Any) -> None:
    """Remove cache environment variables and run from an empty directory."""
    for name in _CACHE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def reset_loaded_config() -> Generator[None, None, None]:
    """Reset the loaded configuration after each test to prevent state leakage."""
    yield
    reset_config()


@pytest.fixture
def sample_cache_data() -> dict[str, Any]:
    """Sample data for cache testing."""
    return {
        "simple_string": "hello",
        "simple_int": 42,
        "simple_float": 3.14,
        "simple_bool": False,
        "empty_string": "",
        "complex_dict": {
            "nested": {
                "key": "value",
                "number": 123,
                "list": [1, 2, 3],
            }
        },
        "complex_list": [
            {"id": 1, "name": "Alice"},
            {"id": 2, "name": "Bob"},
        ],
    }
