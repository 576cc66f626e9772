"""Shared configuration helpers and dataclasses."""

from .errors import ConfigurationError, ScanConfigurationError
from .runtime import env_bool, env_float, env_int, env_non_negative_int, env_str
from .shared import RedisSettings, ScanSettings, get_redis_settings, get_scan_settings

__all__ = [
    "ConfigurationError",
    "RedisSettings",
    "ScanConfigurationError",
    "ScanSettings",
    "env_bool",
    "env_float",
    "env_int",
    "env_non_negative_int",
    "env_str",
    "get_redis_settings",
    "get_scan_settings",
]
