from __future__ import annotations

"""Settings dataclasses for the Redis connection and scan defaults."""


from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from .errors import ConfigurationError
from .runtime import env_bool, env_float, env_int, env_non_negative_int, env_str

DEFAULT_REDIS_HOST = "localhost"
DEFAULT_REDIS_PORT = 6379
DEFAULT_RETRY_MAX_ATTEMPTS = 3


@dataclass(frozen=True)
class RedisSettings:
    host: str
    port: int
    db: int
    password: str | None
    ssl: bool
    socket_timeout: float | None
    socket_connect_timeout: float | None


@dataclass(frozen=True)
class ScanSettings:
    """Defaults applied to scans that do not set their own values."""

    default_batch_size_hint: Optional[int] = None
    retry_max_attempts: int = DEFAULT_RETRY_MAX_ATTEMPTS


@lru_cache(maxsize=1)
def get_redis_settings() -> RedisSettings:
    host = env_str("REDIS_HOST", or_value=DEFAULT_REDIS_HOST)
    port = env_int("REDIS_PORT", or_value=DEFAULT_REDIS_PORT)
    db = env_int("REDIS_DB", or_value=0)
    if db is None or db < 0:
        raise ConfigurationError.invalid_value("REDIS_DB", db, "Database index must be non-negative")

    password = env_str("REDIS_PASSWORD", allow_blank=True)
    return RedisSettings(
        host=str(host),
        port=int(port),
        db=db,
        password=password if password else None,
        ssl=bool(env_bool("REDIS_SSL", or_value=False)),
        socket_timeout=env_float("REDIS_SOCKET_TIMEOUT"),
        socket_connect_timeout=env_float("REDIS_SOCKET_CONNECT_TIMEOUT"),
    )


@lru_cache(maxsize=1)
def get_scan_settings() -> ScanSettings:
    batch_size_hint = env_non_negative_int("REDIS_SCAN_COUNT")
    attempts = env_non_negative_int("REDIS_SCAN_RETRY_ATTEMPTS", or_value=DEFAULT_RETRY_MAX_ATTEMPTS)
    if not attempts:
        raise ConfigurationError.invalid_value("REDIS_SCAN_RETRY_ATTEMPTS", attempts, "At least one attempt is required")
    return ScanSettings(
        default_batch_size_hint=batch_size_hint or None,
        retry_max_attempts=attempts,
    )


__all__ = [
    "DEFAULT_REDIS_HOST",
    "DEFAULT_REDIS_PORT",
    "DEFAULT_RETRY_MAX_ATTEMPTS",
    "RedisSettings",
    "ScanSettings",
    "get_redis_settings",
    "get_scan_settings",
]
