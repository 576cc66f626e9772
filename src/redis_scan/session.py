"""Per-call scan session state and the cursor loop."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, List

from .commands import build_scan_call, normalize_reply
from .options import SCAN_SENTINEL, ScanOptions
from .typing import ScanClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanResult:
    """Outcome of a finished session."""

    total: int
    round_trips: int
    cancelled: bool
    exhausted: bool
    limit_reached: bool


@dataclass
class ScanSession:
    """
    Mutable state of one orchestrated scan.

    The cursor starts at the ``"0"`` sentinel. ``batches()`` issues one round trip
    at a time and stops when the server returns the sentinel again, when the
    running total reaches ``options.limit``, or when the consumer stops iterating.
    """

    pattern: str
    options: ScanOptions = field(default_factory=ScanOptions)
    cursor: str = SCAN_SENTINEL
    total: int = 0
    round_trips: int = 0
    cancelled: bool = False
    exhausted: bool = False
    limit_reached: bool = False

    @property
    def finished(self) -> bool:
        return self.cancelled or self.exhausted or self.limit_reached

    async def batches(self, client: ScanClient) -> AsyncIterator[List[Any]]:
        if self.finished:
            raise RuntimeError("Scan session already finished; start a new session")

        while True:
            call = build_scan_call(self.pattern, self.cursor, self.options)
            try:
                reply = await call.invoke(client)
            except Exception as exc:
                logger.warning(
                    "%s failed after %d round trip(s), %d match(es) delivered: %s",
                    call.describe(),
                    self.round_trips,
                    self.total,
                    exc,
                )
                raise

            self.round_trips += 1
            next_cursor, batch = normalize_reply(reply, self.options.variant)
            self.total += len(batch)

            yield batch

            limit = self.options.limit
            if limit is not None and self.total >= limit:
                self.limit_reached = True
                return
            if next_cursor == SCAN_SENTINEL:
                self.exhausted = True
                return
            self.cursor = next_cursor

    def result(self) -> ScanResult:
        return ScanResult(
            total=self.total,
            round_trips=self.round_trips,
            cancelled=self.cancelled,
            exhausted=self.exhausted,
            limit_reached=self.limit_reached,
        )

    def stop_reason(self) -> str:
        if self.cancelled:
            return "cancelled"
        if self.limit_reached:
            return "limit"
        if self.exhausted:
            return "exhausted"
        return "unfinished"


__all__ = ["ScanResult", "ScanSession"]
