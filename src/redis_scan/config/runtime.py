from __future__ import annotations

"""Runtime helpers for working with environment-backed configuration."""


import os
from typing import Callable, TypeVar

from .errors import ConfigurationError

T = TypeVar("T")

_TRUE_VALUES = {"1", "true", "t", "yes", "y", "on"}
_FALSE_VALUES = {"0", "false", "f", "no", "n", "off"}


def _normalize(value: str | None, *, strip: bool) -> str | None:
    if value is None:
        return None
    return value.strip() if strip else value


def _coerce(name: str, raw_value: str, *, cast: Callable[[str], T], kind: str) -> T:
    try:
        return cast(raw_value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Environment variable {name!r} must be {kind} (got {raw_value!r})") from exc


def env_str(
    name: str,
    or_value: str | None = None,
    *,
    required: bool = False,
    strip: bool = True,
    allow_blank: bool = False,
) -> str | None:
    """Fetch an environment variable as a string with validation."""

    value = _normalize(os.getenv(name), strip=strip)

    if value is None or (not allow_blank and value == ""):
        if required:
            raise ConfigurationError(f"Required environment variable {name!r} is not set")
        return or_value
    return value


def env_int(name: str, or_value: int | None = None, *, required: bool = False) -> int | None:
    """Fetch an environment variable and coerce it to ``int``."""

    raw = env_str(name, strip=True, allow_blank=False)
    if raw is None:
        if required and or_value is None:
            raise ConfigurationError(f"Required environment variable {name!r} is not set")
        return or_value
    return _coerce(name, raw, cast=int, kind="an integer")


def env_float(name: str, or_value: float | None = None, *, required: bool = False) -> float | None:
    """Fetch an environment variable and coerce it to ``float``."""

    raw = env_str(name, strip=True, allow_blank=False)
    if raw is None:
        if required and or_value is None:
            raise ConfigurationError(f"Required environment variable {name!r} is not set")
        return or_value
    return _coerce(name, raw, cast=float, kind="a float")


def env_bool(name: str, or_value: bool | None = None, *, required: bool = False) -> bool | None:
    """Fetch an environment variable and coerce it to ``bool``."""

    raw = env_str(name, strip=True, allow_blank=False)
    if raw is None:
        if required and or_value is None:
            raise ConfigurationError(f"Required environment variable {name!r} is not set")
        return or_value

    lowered = raw.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Environment variable {name!r} must be a boolean (allowed: {_TRUE_VALUES | _FALSE_VALUES}, got {raw!r})")


def env_non_negative_int(name: str, or_value: int | None = None) -> int | None:
    """Fetch an integer that must not be negative (counts, attempts)."""

    value = env_int(name, or_value=or_value)
    if value is None:
        return None
    if value < 0:
        raise ConfigurationError(f"Environment variable {name!r} must be non-negative (got {value})")
    return value


__all__ = ["env_bool", "env_float", "env_int", "env_non_negative_int", "env_str"]
