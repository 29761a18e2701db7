"""
Cache Usage Example

Demonstrates how to use the kvcache in-memory cache.

This example shows:
- Building a configuration
- Basic get/set/exists
- Custom TTLs
- Bulk operations
- Size, health checks and shutdown
"""

import logging
from datetime import timedelta

from kvcache import CacheConfig, CacheError, MemoryCacheBackend, setup_logging

logger = logging.getLogger("kvcache.example")


def main() -> None:
    setup_logging("INFO")

    config = (
        CacheConfig.builder()
        .default_ttl(timedelta(minutes=5))
        .max_retries(3)
        .connection_timeout(timedelta(seconds=2))
        .operation_timeout(timedelta(seconds=5))
        .enable_metrics(True)
        .build()
    )

    cache: MemoryCacheBackend[str, str] = MemoryCacheBackend(config)

    try:
        logger.info("=== Basic Cache Operations ===")
        cache.set("user:1", "John Doe")
        logger.info("Set user:1 = John Doe")

        user = cache.get("user:1")
        if user is not None:
            logger.info(f"Retrieved user:1 = {user}")

        logger.info(f"Key 'user:1' exists: {cache.exists('user:1')}")

        cache.set("temp:data", "Temporary data", ttl=timedelta(seconds=10))
        logger.info("Set temp:data with 10 second TTL")

        logger.info("=== Bulk Operations ===")
        cache.set_many(
            {
                "user:2": "Jane Smith",
                "user:3": "Bob Johnson",
                "user:4": "Alice Brown",
            }
        )
        logger.info("Set multiple users")

        retrieved = cache.get_many(["user:1", "user:2", "user:3"])
        logger.info(f"Retrieved users: {retrieved}")

        logger.info("=== Delete Operations ===")
        logger.info(f"Deleted user:1: {cache.delete('user:1')}")
        deleted_count = cache.delete_many(["user:2", "user:3", "user:4"])
        logger.info(f"Deleted {deleted_count} users")

        logger.info("=== Cache Statistics ===")
        logger.info(f"Cache size: {cache.size()}")
        logger.info(f"Cache healthy: {cache.is_healthy()}")

        cache.clear()
        logger.info("Cache cleared")
        logger.info(f"Cache size after clear: {cache.size()}")

    except CacheError as e:
        logger.error(f"Cache error: {e.message}")
        logger.error(f"Error type: {e.error_type.value}")
    finally:
        try:
            cache.close()
            logger.info("Cache closed")
        except CacheError as e:
            logger.error(f"Error closing cache: {e.message}")


if __name__ == "__main__":
    main()
