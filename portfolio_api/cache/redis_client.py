"""
Redis client - response caching and rate-limit counters.
Fails gracefully when Redis is down: a cache error is a cache miss.
"""

import json
import logging
from typing import Any

from redis.asyncio import Redis

from portfolio_api.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

# Shared async Redis client (connection pool managed by redis-py)
_redis: Redis | None = None


async def get_redis() -> Redis:
    global _redis
    if _redis is None:
        _redis = Redis.from_url(
            settings.redis_url,
            encoding="utf-8",
            decode_responses=True,
        )
    return _redis


async def close_redis() -> None:
    global _redis
    if _redis is not None:
        await _redis.aclose()
        _redis = None


async def cache_get(key: str) -> str | None:
    """Get value from cache. Returns None on miss, error, or when caching is off."""
    if not settings.cache_enabled:
        return None
    try:
        client = await get_redis()
        return await client.get(key)
    except Exception as e:
        logger.warning("cache_get failed for %s: %s", key, e)
        return None


async def cache_set(key: str, value: str | dict[str, Any], ttl_seconds: int | None = None) -> bool:
    """Set value with TTL. Dicts are JSON-serialized."""
    if not settings.cache_enabled:
        return False
    try:
        client = await get_redis()
        if isinstance(value, dict):
            value = json.dumps(value)
        await client.setex(key, ttl_seconds or settings.cache_ttl_seconds, value)
        return True
    except Exception as e:
        logger.warning("cache_set failed for %s: %s", key, e)
        return False


async def cache_delete(*keys: str) -> bool:
    """Invalidate one or more keys (after update/delete)."""
    if not settings.cache_enabled or not keys:
        return False
    try:
        client = await get_redis()
        await client.delete(*keys)
        return True
    except Exception as e:
        logger.warning("cache_delete failed for %s: %s", keys, e)
        return False
