"""
Cursor-driven iteration over the Redis SCAN family.
"""

from .collector import scan
from .commands import iter_pairs
from .config import ConfigurationError, RedisSettings, ScanConfigurationError, ScanSettings
from .connection import close_redis_client, create_redis_client
from .options import SCAN_SENTINEL, ScanOptions, ScanVariant
from .orchestrator import each_scan, iter_scan, run_scan
from .retry import RedisRetryError, RedisRetryPolicy
from .retry_client import RetryScanClient
from .scanner import RedisScanner
from .session import ScanResult, ScanSession
from .variants import each_hscan, each_sscan, each_zscan, hscan, sscan, zscan

__all__ = [
    "ConfigurationError",
    "RedisRetryError",
    "RedisRetryPolicy",
    "RedisScanner",
    "RedisSettings",
    "RetryScanClient",
    "SCAN_SENTINEL",
    "ScanConfigurationError",
    "ScanOptions",
    "ScanResult",
    "ScanSession",
    "ScanSettings",
    "ScanVariant",
    "close_redis_client",
    "create_redis_client",
    "each_hscan",
    "each_scan",
    "each_sscan",
    "each_zscan",
    "hscan",
    "iter_pairs",
    "iter_scan",
    "run_scan",
    "scan",
    "sscan",
    "zscan",
]
