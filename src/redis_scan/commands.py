"""Build scan-family calls and normalize their replies."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Awaitable, Dict, List, Tuple

from .options import ScanOptions, ScanVariant
from .typing import ScanClient, ensure_awaitable


@dataclass(frozen=True)
class ScanCall:
    """One scan command invocation: client method, positional and keyword arguments."""

    method: str
    args: Tuple[Any, ...]
    kwargs: Dict[str, Any] = field(default_factory=dict)

    def invoke(self, client: ScanClient) -> Awaitable[Any]:
        return ensure_awaitable(getattr(client, self.method)(*self.args, **self.kwargs))

    def describe(self) -> str:
        parts = [self.method.upper(), *(str(arg) for arg in self.args)]
        if "match" in self.kwargs:
            parts += ["MATCH", str(self.kwargs["match"])]
        if "count" in self.kwargs:
            parts += ["COUNT", str(self.kwargs["count"])]
        if "_type" in self.kwargs:
            parts += ["TYPE", str(self.kwargs["_type"])]
        return " ".join(parts)


def build_scan_call(pattern: str, cursor: str, options: ScanOptions) -> ScanCall:
    """Assemble the call for ``options.variant`` at ``cursor``."""
    args: Tuple[Any, ...] = (cursor,)
    if options.variant.requires_container:
        args = (options.container_key, cursor)

    kwargs: Dict[str, Any] = {"match": pattern}
    count = options.count
    if count is not None:
        kwargs["count"] = count
    if options.variant is ScanVariant.GENERIC and options.type_filter:
        kwargs["_type"] = options.type_filter

    return ScanCall(method=options.variant.value, args=args, kwargs=kwargs)


def normalize_cursor(raw: Any) -> str:
    """Cursors come back as int from redis-py parsers and as bytes/str from raw replies."""
    if isinstance(raw, bytes):
        return raw.decode()
    return str(raw)


def flatten_pairs(matches: Any) -> List[Any]:
    """Flatten HSCAN dict replies and ZSCAN ``(member, score)`` lists into interleaved slots."""
    if isinstance(matches, dict):
        items = matches.items()
    else:
        items = matches
    flat: List[Any] = []
    for item in items:
        if isinstance(item, (tuple, list)):
            flat.extend(item)
        else:
            flat.append(item)
    return flat


def normalize_reply(reply: Any, variant: ScanVariant) -> Tuple[str, List[Any]]:
    """Split a scan reply into ``(next_cursor, batch)``."""
    try:
        raw_cursor, matches = reply
    except (TypeError, ValueError) as exc:
        raise TypeError(f"{variant.value.upper()} reply must be a (cursor, matches) pair, got {reply!r}") from exc

    if matches is None:
        batch: List[Any] = []
    elif variant.yields_pairs:
        batch = flatten_pairs(matches)
    else:
        batch = list(matches)
    return normalize_cursor(raw_cursor), batch


def iter_pairs(batch: List[Any]) -> List[Tuple[Any, Any]]:
    """Regroup an interleaved HSCAN/ZSCAN batch into ``(field, value)`` tuples."""
    if len(batch) % 2:
        raise ValueError(f"Interleaved batch must have an even number of slots, got {len(batch)}")
    return list(zip(batch[0::2], batch[1::2]))


__all__ = ["ScanCall", "build_scan_call", "flatten_pairs", "iter_pairs", "normalize_cursor", "normalize_reply"]
