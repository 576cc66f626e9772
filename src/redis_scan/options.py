"""Scan variants and per-session scan options."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Mapping, Optional

from .config import ScanConfigurationError, ScanSettings

SCAN_SENTINEL = "0"

# Option names accepted by ``ScanOptions.from_mapping`` in addition to the field names.
_OPTION_ALIASES = {
    "method": "variant",
    "key": "container_key",
    "count": "batch_size_hint",
    "type": "type_filter",
}


class ScanVariant(str, Enum):
    """Redis construct being scanned; values are the command names."""

    GENERIC = "scan"
    HASH = "hscan"
    SET = "sscan"
    SORTED_SET = "zscan"

    @property
    def requires_container(self) -> bool:
        return self is not ScanVariant.GENERIC

    @property
    def yields_pairs(self) -> bool:
        """Whether batches interleave field/value (or member/score) slots."""
        return self in (ScanVariant.HASH, ScanVariant.SORTED_SET)

    @classmethod
    def coerce(cls, value: "ScanVariant | str | None") -> "ScanVariant":
        if value is None or value == "":
            return cls.GENERIC
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError as exc:
            raise ScanConfigurationError.unknown_variant(value) from exc


def _validate_optional_count(name: str, value: Optional[int]) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise ScanConfigurationError.invalid_value(name, value, "Expected an integer")
    if value < 0:
        raise ScanConfigurationError.invalid_value(name, value, "Must be non-negative")


@dataclass(frozen=True)
class ScanOptions:
    """
    Options for one orchestrated scan.

    Attributes:
        variant: Which scan command to drive. Defaults to a keyspace ``SCAN``.
        container_key: Name of the hash, set or sorted set being scanned. Required
            for ``HSCAN``/``SSCAN``/``ZSCAN`` and rejected for ``SCAN``.
        batch_size_hint: ``COUNT`` sent with every call. ``None`` or ``0`` leaves the
            server default in place.
        type_filter: ``TYPE`` sent with keyspace scans.
        limit: Stop issuing calls once this many slots have been delivered. The
            batch that crosses the threshold is still delivered in full.
    """

    variant: ScanVariant = ScanVariant.GENERIC
    container_key: Optional[str] = None
    batch_size_hint: Optional[int] = None
    type_filter: Optional[str] = None
    limit: Optional[int] = None

    def __post_init__(self) -> None:
        variant = ScanVariant.coerce(self.variant)
        object.__setattr__(self, "variant", variant)

        if variant.requires_container:
            if not self.container_key:
                raise ScanConfigurationError.missing_container_key(variant.value.upper())
            if self.type_filter:
                raise ScanConfigurationError.type_filter_not_supported(variant.value.upper())
        elif self.container_key:
            raise ScanConfigurationError.unexpected_container_key(self.container_key)

        _validate_optional_count("batch_size_hint", self.batch_size_hint)
        _validate_optional_count("limit", self.limit)

    @property
    def count(self) -> Optional[int]:
        """``COUNT`` value to send, or ``None`` to omit the clause."""
        if self.batch_size_hint:
            return self.batch_size_hint
        return None

    @classmethod
    def from_mapping(cls, mapping: Optional[Mapping[str, Any]]) -> "ScanOptions":
        """Build options from a plain mapping, accepting ``method``/``key``/``count``/``type`` aliases."""
        if not mapping:
            return cls()
        values: dict[str, Any] = {}
        for name, value in mapping.items():
            field_name = _OPTION_ALIASES.get(name, name)
            if field_name not in _FIELD_NAMES:
                raise ScanConfigurationError.unknown_option(name)
            if value is None or value == "":
                continue
            values[field_name] = value
        return cls(**values)

    @classmethod
    def coerce(cls, options: "ScanOptions | Mapping[str, Any] | None" = None, **overrides: Any) -> "ScanOptions":
        """Normalize ``None``, a mapping, or an instance into ``ScanOptions`` and apply overrides."""
        if options is None or isinstance(options, Mapping):
            base = cls.from_mapping(options)
        elif isinstance(options, cls):
            base = options
        else:
            raise ScanConfigurationError(f"Scan options must be ScanOptions or a mapping, not {type(options).__name__}")
        if not overrides:
            return base
        return cls.from_mapping({**_as_dict(base), **overrides})

    def with_defaults(self, settings: ScanSettings) -> "ScanOptions":
        if self.batch_size_hint is None and settings.default_batch_size_hint:
            return replace(self, batch_size_hint=settings.default_batch_size_hint)
        return self


_FIELD_NAMES = frozenset({"variant", "container_key", "batch_size_hint", "type_filter", "limit"})


def _as_dict(options: ScanOptions) -> dict[str, Any]:
    return {name: getattr(options, name) for name in _FIELD_NAMES}


__all__ = ["SCAN_SENTINEL", "ScanOptions", "ScanVariant"]
