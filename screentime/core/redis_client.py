"""Async Redis client singleton with graceful fallback.

If Redis is unavailable (e.g. in development or tests), the cache helpers
below become no-ops and callers fall through to the database.
"""

import json
import logging

import redis.asyncio as aioredis

from screentime.config import settings

logger = logging.getLogger(__name__)

_redis: aioredis.Redis | None = None


async def get_redis() -> aioredis.Redis | None:
    """Return the shared Redis client, or None if Redis is unavailable."""
    global _redis
    if _redis is None:
        try:
            client = aioredis.from_url(settings.REDIS_URL, decode_responses=True)
            await client.ping()
            _redis = client
            logger.info("Redis connected at %s", settings.REDIS_URL)
        except Exception:
            logger.warning("Redis unavailable – caching disabled (%s)", settings.REDIS_URL)
            _redis = None
    return _redis


async def cache_get_json(key: str) -> dict | None:
    redis = await get_redis()
    if redis is None:
        return None
    cached = await redis.get(key)
    return json.loads(cached) if cached else None


async def cache_set_json(key: str, value: dict, ttl: int) -> None:
    redis = await get_redis()
    if redis is not None:
        await redis.setex(key, ttl, json.dumps(value, default=str))


async def cache_delete(key: str) -> None:
    redis = await get_redis()
    if redis is not None:
        await redis.delete(key)


async def close_redis() -> None:
    """Close the Redis connection on application shutdown."""
    global _redis
    if _redis is not None:
        await _redis.aclose()
        _redis = None
        logger.info("Redis connection closed")
