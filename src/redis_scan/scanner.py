"""Scanner bound to one store client."""

from __future__ import annotations

from typing import Any, AsyncIterator, List, Optional

from . import collector, orchestrator, variants
from .config import ScanSettings, get_scan_settings
from .options import ScanOptions
from .orchestrator import Batch, BatchSink, DoneCallback, OptionsLike
from .typing import ScanClient


class RedisScanner:
    """
    Scans the keyspace, hashes, sets and sorted sets of one Redis client.

    Every method delegates to the module-level helpers with this scanner's client.
    Scans that do not set ``batch_size_hint`` use ``settings.default_batch_size_hint``.
    """

    def __init__(self, client: ScanClient, *, settings: Optional[ScanSettings] = None) -> None:
        self._client = client
        self._settings = settings if settings is not None else get_scan_settings()

    @property
    def client(self) -> ScanClient:
        return self._client

    @property
    def settings(self) -> ScanSettings:
        return self._settings

    def _options(self, options: OptionsLike = None, **overrides: Any) -> ScanOptions:
        return orchestrator.resolve_options(options, **overrides).with_defaults(self._settings)

    async def each_scan(
        self,
        pattern: str,
        on_batch: BatchSink,
        options: OptionsLike = None,
        *,
        on_done: Optional[DoneCallback] = None,
        **overrides: Any,
    ) -> Optional[int]:
        return await orchestrator.each_scan(
            self._client, pattern, on_batch, self._options(options, **overrides), on_done=on_done
        )

    async def scan(
        self,
        pattern: str,
        options: OptionsLike = None,
        *,
        on_done: Optional[DoneCallback] = None,
        **overrides: Any,
    ) -> Optional[List[Any]]:
        return await collector.scan(self._client, pattern, self._options(options, **overrides), on_done=on_done)

    def iter_scan(self, pattern: str, options: OptionsLike = None, **overrides: Any) -> AsyncIterator[Batch]:
        return orchestrator.iter_scan(self._client, pattern, self._options(options, **overrides))

    async def each_hscan(
        self, key: str, pattern: str, on_batch: BatchSink, *, on_done: Optional[DoneCallback] = None, **options: Any
    ) -> Optional[int]:
        return await variants.each_hscan(self._client, key, pattern, on_batch, on_done=on_done, **self._hint(options))

    async def hscan(self, key: str, pattern: str, *, on_done: Optional[DoneCallback] = None, **options: Any) -> Optional[List[Any]]:
        return await variants.hscan(self._client, key, pattern, on_done=on_done, **self._hint(options))

    async def each_sscan(
        self, key: str, pattern: str, on_batch: BatchSink, *, on_done: Optional[DoneCallback] = None, **options: Any
    ) -> Optional[int]:
        return await variants.each_sscan(self._client, key, pattern, on_batch, on_done=on_done, **self._hint(options))

    async def sscan(self, key: str, pattern: str, *, on_done: Optional[DoneCallback] = None, **options: Any) -> Optional[List[Any]]:
        return await variants.sscan(self._client, key, pattern, on_done=on_done, **self._hint(options))

    async def each_zscan(
        self, key: str, pattern: str, on_batch: BatchSink, *, on_done: Optional[DoneCallback] = None, **options: Any
    ) -> Optional[int]:
        return await variants.each_zscan(self._client, key, pattern, on_batch, on_done=on_done, **self._hint(options))

    async def zscan(self, key: str, pattern: str, *, on_done: Optional[DoneCallback] = None, **options: Any) -> Optional[List[Any]]:
        return await variants.zscan(self._client, key, pattern, on_done=on_done, **self._hint(options))

    def _hint(self, options: dict[str, Any]) -> dict[str, Any]:
        default_hint = self._settings.default_batch_size_hint
        if default_hint and options.get("batch_size_hint") is None and options.get("count") is None:
            return {**options, "batch_size_hint": default_hint}
        return options

__all__ = ["RedisScanner"]
