"""Scan client wrapper with automatic operation-level retry."""

from __future__ import annotations

from typing import Any, Optional

from .config import ScanSettings
from .retry import RedisRetryPolicy, with_redis_retry
from .typing import ensure_awaitable


class RetryScanClient:
    """
    Wraps a ``redis.asyncio.Redis`` (or compatible) client so each scan call is
    retried on transient failures. A failed call is re-issued at the same cursor.
    """

    def __init__(self, redis_client: Any, *, policy: Optional[RedisRetryPolicy] = None) -> None:
        self._client = redis_client
        self._policy = policy

    @classmethod
    def from_settings(cls, redis_client: Any, settings: ScanSettings) -> "RetryScanClient":
        return cls(redis_client, policy=RedisRetryPolicy(max_attempts=settings.retry_max_attempts))

    async def scan(
        self,
        cursor: Any = 0,
        match: Optional[str] = None,
        count: Optional[int] = None,
        _type: Optional[str] = None,
        *,
        context: str = "scan",
    ) -> Any:
        kwargs: dict[str, Any] = {}
        if match is not None:
            kwargs["match"] = match
        if count is not None:
            kwargs["count"] = count
        if _type is not None:
            kwargs["_type"] = _type
        return await with_redis_retry(
            lambda: ensure_awaitable(self._client.scan(cursor, **kwargs)),
            context=context,
            policy=self._policy,
        )

    async def hscan(
        self, name: str, cursor: Any = 0, match: Optional[str] = None, count: Optional[int] = None, *, context: str = "hscan"
    ) -> Any:
        return await self._container_scan("hscan", name, cursor, match, count, context)

    async def sscan(
        self, name: str, cursor: Any = 0, match: Optional[str] = None, count: Optional[int] = None, *, context: str = "sscan"
    ) -> Any:
        return await self._container_scan("sscan", name, cursor, match, count, context)

    async def zscan(
        self, name: str, cursor: Any = 0, match: Optional[str] = None, count: Optional[int] = None, *, context: str = "zscan"
    ) -> Any:
        return await self._container_scan("zscan", name, cursor, match, count, context)

    async def _container_scan(
        self, method: str, name: str, cursor: Any, match: Optional[str], count: Optional[int], context: str
    ) -> Any:
        kwargs: dict[str, Any] = {}
        if match is not None:
            kwargs["match"] = match
        if count is not None:
            kwargs["count"] = count
        command = getattr(self._client, method)
        return await with_redis_retry(
            lambda: ensure_awaitable(command(name, cursor, **kwargs)),
            context=f"{context} {name}",
            policy=self._policy,
        )

    async def aclose(self) -> None:
        await self._client.aclose()


__all__ = ["RetryScanClient"]
