"""Fixed-variant entry points: ``HSCAN``, ``SSCAN`` and ``ZSCAN`` over a named container."""

from __future__ import annotations

from typing import Any, List, Optional

from .collector import scan
from .options import ScanVariant
from .orchestrator import BatchSink, DoneCallback, each_scan
from .typing import ScanClient


async def each_hscan(
    client: ScanClient,
    key: str,
    pattern: str,
    on_batch: BatchSink,
    *,
    on_done: Optional[DoneCallback] = None,
    **options: Any,
) -> Optional[int]:
    """Stream interleaved field/value slots of hash ``key`` whose fields match ``pattern``."""
    return await each_scan(client, pattern, on_batch, on_done=on_done, variant=ScanVariant.HASH, container_key=key, **options)


async def hscan(
    client: ScanClient, key: str, pattern: str, *, on_done: Optional[DoneCallback] = None, **options: Any
) -> Optional[List[Any]]:
    return await scan(client, pattern, on_done=on_done, variant=ScanVariant.HASH, container_key=key, **options)


async def each_sscan(
    client: ScanClient,
    key: str,
    pattern: str,
    on_batch: BatchSink,
    *,
    on_done: Optional[DoneCallback] = None,
    **options: Any,
) -> Optional[int]:
    """Stream members of set ``key`` matching ``pattern``."""
    return await each_scan(client, pattern, on_batch, on_done=on_done, variant=ScanVariant.SET, container_key=key, **options)


async def sscan(
    client: ScanClient, key: str, pattern: str, *, on_done: Optional[DoneCallback] = None, **options: Any
) -> Optional[List[Any]]:
    return await scan(client, pattern, on_done=on_done, variant=ScanVariant.SET, container_key=key, **options)


async def each_zscan(
    client: ScanClient,
    key: str,
    pattern: str,
    on_batch: BatchSink,
    *,
    on_done: Optional[DoneCallback] = None,
    **options: Any,
) -> Optional[int]:
    """Stream interleaved member/score slots of sorted set ``key`` whose members match ``pattern``."""
    return await each_scan(
        client, pattern, on_batch, on_done=on_done, variant=ScanVariant.SORTED_SET, container_key=key, **options
    )


async def zscan(
    client: ScanClient, key: str, pattern: str, *, on_done: Optional[DoneCallback] = None, **options: Any
) -> Optional[List[Any]]:
    return await scan(client, pattern, on_done=on_done, variant=ScanVariant.SORTED_SET, container_key=key, **options)


__all__ = ["each_hscan", "each_sscan", "each_zscan", "hscan", "sscan", "zscan"]
