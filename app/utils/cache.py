"""
People Profile — Redis directory cache

Optional: when ``REDIS_URL`` is empty no client is created and every helper
is a no-op.  Redis failures are logged and treated as cache misses.
"""

from __future__ import annotations

import json
from typing import Any, Optional

import redis.asyncio as aioredis
import structlog
from redis.exceptions import RedisError

from app.config import get_settings

logger = structlog.get_logger("people_profile.cache")

PROFILE_LIST_PREFIX = "people_profile:profiles:list:"

_redis_client: Optional[aioredis.Redis] = None


async def connect_redis() -> None:
    global _redis_client

    settings = get_settings()
    if not settings.REDIS_URL:
        logger.info("redis_skip", reason="REDIS_URL not configured")
        return

    client = aioredis.from_url(
        settings.REDIS_URL,
        decode_responses=True,
        socket_connect_timeout=5,
    )
    try:
        await client.ping()
    except (RedisError, OSError) as exc:
        logger.warning("redis_unavailable", error=str(exc))
        await client.aclose()
        return

    _redis_client = client
    logger.info("redis_connected")


async def close_redis() -> None:
    global _redis_client
    if _redis_client is not None:
        await _redis_client.aclose()
        _redis_client = None
        logger.info("redis_closed")


def get_redis() -> Optional[aioredis.Redis]:
    """Return the shared Redis client, or ``None`` when caching is off."""
    return _redis_client


def set_redis(client: Optional[aioredis.Redis]) -> None:
    global _redis_client
    _redis_client = client


def profile_list_key(page: int, limit: int, q: Optional[str]) -> str:
    return f"{PROFILE_LIST_PREFIX}{page}:{limit}:{(q or '').strip().lower()}"


async def get_json(key: str) -> Optional[Any]:
    client = get_redis()
    if client is None:
        return None
    try:
        raw = await client.get(key)
    except (RedisError, OSError) as exc:
        logger.warning("cache_get_failed", key=key, error=str(exc))
        return None
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        logger.warning("cache_payload_corrupt", key=key)
        return None


async def set_json(key: str, value: Any, ttl_seconds: int) -> None:
    client = get_redis()
    if client is None:
        return
    try:
        await client.set(key, json.dumps(value), ex=ttl_seconds)
    except (RedisError, OSError) as exc:
        logger.warning("cache_set_failed", key=key, error=str(exc))


async def invalidate_profiles() -> None:
    """Drop every cached directory page."""
    client = get_redis()
    if client is None:
        return
    try:
        keys = [key async for key in client.scan_iter(match=f"{PROFILE_LIST_PREFIX}*")]
        if keys:
            await client.delete(*keys)
        logger.debug("cache_invalidated", keys=len(keys))
    except (RedisError, OSError) as exc:
        logger.warning("cache_invalidate_failed", error=str(exc))
