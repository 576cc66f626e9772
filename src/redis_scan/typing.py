from __future__ import annotations

"""
Typing helpers for redis.asyncio usage.

redis-py exposes unified sync/async command signatures that confuse static type
checkers. ``ScanClient`` narrows the surface the orchestrator depends on to the
four scan commands, so any object with matching coroutines can be injected.
"""


from typing import TYPE_CHECKING, Any, Awaitable, Optional, Protocol, TypeVar, cast

from redis import asyncio as redis_asyncio

if TYPE_CHECKING:
    from redis.asyncio import Redis as RedisClient
else:  # pragma: no cover - runtime alias for typing-only import
    RedisClient = redis_asyncio.Redis

T = TypeVar("T")


class ScanClient(Protocol):
    """Store client exposing the incremental scan family."""

    def scan(
        self, cursor: Any = 0, match: Optional[str] = None, count: Optional[int] = None, _type: Optional[str] = None
    ) -> Awaitable[Any]:  # pragma: no cover - protocol
        ...

    def hscan(
        self, name: str, cursor: Any = 0, match: Optional[str] = None, count: Optional[int] = None
    ) -> Awaitable[Any]:  # pragma: no cover - protocol
        ...

    def sscan(
        self, name: str, cursor: Any = 0, match: Optional[str] = None, count: Optional[int] = None
    ) -> Awaitable[Any]:  # pragma: no cover - protocol
        ...

    def zscan(
        self, name: str, cursor: Any = 0, match: Optional[str] = None, count: Optional[int] = None
    ) -> Awaitable[Any]:  # pragma: no cover - protocol
        ...


def ensure_awaitable(result: "Awaitable[T] | T") -> Awaitable[T]:
    """
    Coerce redis command results into awaitables for typing purposes.

    The redis.asyncio client always returns awaitables at runtime, but redis-py's
    type hints use a sync/async union to support both variants.
    """

    return cast(Awaitable[T], result)


__all__ = ["RedisClient", "ScanClient", "ensure_awaitable"]
