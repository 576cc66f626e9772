"""Collect-all wrapper over ``each_scan``."""

from __future__ import annotations

from typing import Any, List, Optional

from .orchestrator import Batch, DoneCallback, OptionsLike, check_pattern, maybe_await, resolve_options, run_scan
from .typing import ScanClient


async def scan(
    client: ScanClient,
    pattern: str,
    options: OptionsLike = None,
    *,
    on_done: Optional[DoneCallback] = None,
    **overrides: Any,
) -> Optional[List[Any]]:
    """
    Scan for ``pattern`` and return every match in delivery order.

    Batches are concatenated in arrival order without de-duplication; Redis may
    return an element more than once during a scan. On failure the partial list is
    dropped and only the error surfaces, raised or passed to ``on_done``.
    """
    session_options = resolve_options(options, **overrides)
    check_pattern(pattern)
    matches: List[Any] = []

    def _collect(batch: Batch) -> None:
        matches.extend(batch)

    if on_done is None:
        await run_scan(client, pattern, _collect, session_options)
        return matches

    try:
        await run_scan(client, pattern, _collect, session_options)
    except Exception as exc:
        await maybe_await(on_done(exc, None))
        return None
    await maybe_await(on_done(None, matches))
    return matches


__all__ = ["scan"]
