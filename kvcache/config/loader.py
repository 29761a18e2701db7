"""
kvcache — Configuration Loader

Loads and validates cache configuration from environment variables and .env files.
Keeps the last loaded CacheConfig so callers can share it by value. Only the
immutable configuration is remembered here, never a cache instance.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from ..errors import ConfigurationError
from .schemas import (
    DEFAULT_CONNECTION_TIMEOUT,
    DEFAULT_MAX_KEY_SIZE,
    DEFAULT_MAX_RETRIES,
    DEFAULT_MAX_VALUE_SIZE,
    DEFAULT_OPERATION_TIMEOUT,
    DEFAULT_TTL,
    CacheConfig,
)

logger = logging.getLogger(__name__)

_config_instance: CacheConfig | None = None

_TRUE_WORDS = frozenset(("1", "true", "yes", "on"))
_FALSE_WORDS = frozenset(("0", "false", "no", "off"))


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_WORDS:
        return True
    if value in _FALSE_WORDS:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def load_config(
    env_file: str | None = None,
    reload: bool = False,
) -> CacheConfig:
    """
    Load cache configuration from environment variables and .env file.

    Args:
        env_file: Path to .env file (default: .env in current directory)
        reload: Force reload even if config already loaded

    Returns:
        Validated CacheConfig instance

    Raises:
        ConfigurationError: If configuration is invalid
    """
    global _config_instance

    if _config_instance is not None and not reload:
        return _config_instance

    if env_file:
        env_path = Path(env_file)
    else:
        env_path = Path.cwd() / ".env"

    if env_path.exists():
        logger.info("Loading environment from %s", env_path)
        try:
            load_dotenv(env_path, override=True)
        except Exception as e:
            logger.error(
                f"Failed to load .env file from {env_path}: {e}",
                extra={"path": str(env_path), "error": str(e)},
                exc_info=True,
            )
            raise ConfigurationError(
                f"Failed to load environment file: {e}",
                details={"path": str(env_path), "error": str(e)},
            ) from e
    else:
        logger.debug("No .env file found, using environment variables only")

    try:
        config_dict = {
            "backend": os.getenv("CACHE_BACKEND", "memory"),
            "default_ttl": float(os.getenv("CACHE_DEFAULT_TTL_SECONDS", str(DEFAULT_TTL.total_seconds()))),
            "max_retries": int(os.getenv("CACHE_MAX_RETRIES", str(DEFAULT_MAX_RETRIES))),
            "connection_timeout": float(
                os.getenv("CACHE_CONNECTION_TIMEOUT_SECONDS", str(DEFAULT_CONNECTION_TIMEOUT.total_seconds()))
            ),
            "operation_timeout": float(
                os.getenv("CACHE_OPERATION_TIMEOUT_SECONDS", str(DEFAULT_OPERATION_TIMEOUT.total_seconds()))
            ),
            "enable_metrics": _env_bool("CACHE_ENABLE_METRICS", True),
            "enable_compression": _env_bool("CACHE_ENABLE_COMPRESSION", False),
            "max_key_size": int(os.getenv("CACHE_MAX_KEY_SIZE", str(DEFAULT_MAX_KEY_SIZE))),
            "max_value_size": int(os.getenv("CACHE_MAX_VALUE_SIZE", str(DEFAULT_MAX_VALUE_SIZE))),
        }
    except ValueError as e:
        logger.error(
            f"Malformed cache environment variable: {e}",
            extra={"error": str(e)},
        )
        raise ConfigurationError(
            f"Malformed cache environment variable: {e}",
            details={"error": str(e)},
        ) from e

    try:
        _config_instance = CacheConfig(**config_dict)  # type: ignore[arg-type]
        logger.info(
            "Cache configuration loaded (backend: %s)",
            _config_instance.backend.value,
            extra={"backend": _config_instance.backend.value},
        )
        return _config_instance
    except ValidationError as e:
        logger.error(
            f"Configuration validation failed: {e}",
            extra={"validation_errors": e.errors()},
        )
        raise ConfigurationError(
            "Configuration validation failed. Check your environment variables and configuration.",
            details={"validation_errors": e.errors()},
        ) from e


def get_config() -> CacheConfig:
    """
    Get the current configuration, loading it on first access.

    Returns:
        Current CacheConfig instance
    """
    if _config_instance is None:
        return load_config()

    return _config_instance


def reload_config(env_file: str | None = None) -> CacheConfig:
    """
    Force reload configuration.

    Args:
        env_file: Optional path to .env file

    Returns:
        Reloaded CacheConfig instance
    """
    return load_config(env_file=env_file, reload=True)


def reset_config() -> None:
    """
    Forget the loaded configuration so the next access reloads it.

    Warning: Only use this in testing contexts.
    """
    global _config_instance
    _config_instance = None
