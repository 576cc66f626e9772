"""
Cursor-driven orchestration of the Redis scan family.

``each_scan`` drives ``SCAN``/``HSCAN``/``SSCAN``/``ZSCAN`` from cursor ``"0"`` until
the server hands the sentinel back, delivering every batch to ``on_batch`` as it
arrives. Round trips are strictly sequential. The sink may return a truthy value
to stop the session; no further call is issued after that.

Completion is reported by the coroutine itself (the total, or the raised store
error). Callers that prefer the callback protocol pass ``on_done``, which is
invoked exactly once with ``(None, total)`` or ``(error, None)``.
"""

from __future__ import annotations

import inspect
import logging
from contextlib import aclosing
from typing import Any, AsyncIterator, Awaitable, Callable, List, Mapping, Optional, Union

from .config import ScanConfigurationError
from .options import ScanOptions
from .session import ScanResult, ScanSession
from .typing import ScanClient

logger = logging.getLogger(__name__)

Batch = List[Any]
BatchSink = Callable[[Batch], Union[Any, Awaitable[Any]]]
DoneCallback = Callable[[Optional[BaseException], Any], Union[None, Awaitable[None]]]
OptionsLike = Union[ScanOptions, Mapping[str, Any], None]


async def maybe_await(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result


def resolve_options(options: OptionsLike = None, **overrides: Any) -> ScanOptions:
    """Validate options once, before a session is created."""
    return ScanOptions.coerce(options, **overrides)


def check_pattern(pattern: Any) -> None:
    if not isinstance(pattern, (str, bytes)) or not pattern:
        raise ScanConfigurationError.invalid_value("pattern", pattern, "Expected a non-empty glob string")


def open_session(pattern: str, options: OptionsLike = None, **overrides: Any) -> ScanSession:
    check_pattern(pattern)
    return ScanSession(pattern=pattern, options=resolve_options(options, **overrides))


def iter_scan(client: ScanClient, pattern: str, options: OptionsLike = None, **overrides: Any) -> AsyncIterator[Batch]:
    """
    Stream batches as an async iterator.

    Leaving the ``async for`` early cancels the scan; the next round trip is never
    issued. Options are validated when this function is called, not on first
    iteration.
    """
    session = open_session(pattern, options, **overrides)
    return session.batches(client)


async def run_scan(
    client: ScanClient,
    pattern: str,
    on_batch: BatchSink,
    options: OptionsLike = None,
    **overrides: Any,
) -> ScanResult:
    """Drive one session to completion and return its ``ScanResult``. Store errors propagate."""
    session = open_session(pattern, options, **overrides)
    logger.debug("Starting %s session for pattern %r", session.options.variant.value.upper(), pattern)

    async with aclosing(session.batches(client)) as batches:
        async for batch in batches:
            if await maybe_await(on_batch(batch)):
                session.cancelled = True
                break

    result = session.result()
    logger.debug(
        "%s session for %r finished (%s): %d match(es) in %d round trip(s)",
        session.options.variant.value.upper(),
        pattern,
        session.stop_reason(),
        result.total,
        result.round_trips,
    )
    return result


async def each_scan(
    client: ScanClient,
    pattern: str,
    on_batch: BatchSink,
    options: OptionsLike = None,
    *,
    on_done: Optional[DoneCallback] = None,
    **overrides: Any,
) -> Optional[int]:
    """
    Scan for ``pattern`` and hand each round trip's matches to ``on_batch``.

    Args:
        client: Store client exposing the scan family (``redis.asyncio.Redis`` or compatible).
        pattern: Glob pattern passed verbatim as ``MATCH``.
        on_batch: Sync or async callable invoked once per round trip, possibly with an
            empty list. A truthy return value stops the scan.
        options: ``ScanOptions`` or a mapping of option names.
        on_done: Optional completion callback, invoked exactly once.
        **overrides: Individual option fields applied on top of ``options``.

    Returns:
        The number of delivered slots, or ``None`` when an error was reported through ``on_done``.

    Raises:
        ScanConfigurationError: Options are inconsistent; raised before any round trip.
        Exception: Any store error, unchanged, when ``on_done`` is not supplied.
    """
    session_options = resolve_options(options, **overrides)
    check_pattern(pattern)

    if on_done is None:
        result = await run_scan(client, pattern, on_batch, session_options)
        return result.total

    try:
        result = await run_scan(client, pattern, on_batch, session_options)
    except Exception as exc:
        await maybe_await(on_done(exc, None))
        return None
    await maybe_await(on_done(None, result.total))
    return result.total


__all__ = [
    "Batch",
    "BatchSink",
    "check_pattern",
    "DoneCallback",
    "OptionsLike",
    "each_scan",
    "iter_scan",
    "maybe_await",
    "open_session",
    "resolve_options",
    "run_scan",
]
