"""Redis client configuration and cache helpers."""

import json
from typing import Any, cast

import redis
import structlog

from app.config import settings

logger = structlog.get_logger(__name__)

# Global Redis client instance
_redis_client: redis.Redis | None = None


def get_redis_client() -> redis.Redis:
    """
    Get or create Redis client instance.

    Returns:
        Redis client instance
    """
    global _redis_client

    if _redis_client is None:
        _redis_client = redis.Redis(
            host=settings.redis_host,
            port=settings.redis_port,
            username=settings.redis_username,
            password=settings.redis_password,
            decode_responses=settings.redis_decode_responses,
            socket_connect_timeout=5,
            socket_keepalive=True,
            health_check_interval=30,
        )

    return _redis_client


async def check_redis_connection() -> bool:
    """Check if Redis connection is healthy."""
    try:
        get_redis_client().ping()
        return True
    except Exception:
        return False


def close_redis_connection() -> None:
    """Close Redis connection."""
    global _redis_client

    if _redis_client is not None:
        _redis_client.close()
        _redis_client = None


class CacheManager:
    """
    JSON cache on top of Redis.

    Cache failures never break a request: reads miss and writes report False.
    """

    def __init__(self, redis_client: redis.Redis):
        """Initialize cache manager with Redis client."""
        self.redis = redis_client

    def get_json(self, key: str) -> Any | None:
        """Get and deserialize a cached JSON value, or None on miss or error."""
        try:
            value = cast(str | None, self.redis.get(key))
            return json.loads(value) if value else None
        except (redis.RedisError, ValueError) as e:
            logger.warning("cache_read_failed", key=key, error=str(e))
            return None

    def set_json(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """
        Serialize and cache a value.

        Args:
            key: Cache key
            value: JSON-serializable value; datetimes and ids are stringified
            ttl: Time to live in seconds

        Returns:
            True if successful, False otherwise
        """
        try:
            json_value = json.dumps(value, default=str)
            if ttl:
                self.redis.setex(key, ttl, json_value)
            else:
                self.redis.set(key, json_value)
            return True
        except (redis.RedisError, TypeError, ValueError) as e:
            logger.warning("cache_write_failed", key=key, error=str(e))
            return False

    def delete(self, *keys: str) -> bool:
        """Delete keys from cache."""
        try:
            self.redis.delete(*keys)
            return True
        except redis.RedisError as e:
            logger.warning("cache_delete_failed", keys=keys, error=str(e))
            return False

