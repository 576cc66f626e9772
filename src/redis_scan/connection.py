"""
Redis client construction from environment-backed settings.

The scan helpers never open or close connections themselves; callers build a
client here (or bring their own) and own its lifetime.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import redis.asyncio

from .config import RedisSettings, get_redis_settings

logger = logging.getLogger(__name__)


def build_connection_kwargs(settings: RedisSettings) -> Dict[str, Any]:
    kwargs: Dict[str, Any] = {
        "host": settings.host,
        "port": settings.port,
        "db": settings.db,
        "decode_responses": True,
    }
    if settings.password:
        kwargs["password"] = settings.password
    if settings.ssl:
        kwargs["ssl"] = True
    if settings.socket_timeout is not None:
        kwargs["socket_timeout"] = settings.socket_timeout
    if settings.socket_connect_timeout is not None:
        kwargs["socket_connect_timeout"] = settings.socket_connect_timeout
    return kwargs


def create_redis_client(settings: Optional[RedisSettings] = None) -> redis.asyncio.Redis:
    """Create a ``redis.asyncio.Redis`` client with string replies."""
    resolved = settings if settings is not None else get_redis_settings()
    logger.debug("Creating Redis client for %s:%s/%s (ssl=%s)", resolved.host, resolved.port, resolved.db, resolved.ssl)
    return redis.asyncio.Redis(**build_connection_kwargs(resolved))


async def close_redis_client(client: Optional[redis.asyncio.Redis]) -> None:
    if client is None:
        return
    await client.aclose()


__all__ = ["build_connection_kwargs", "close_redis_client", "create_redis_client"]
