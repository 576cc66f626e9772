"""
Logging configuration for applications embedding the scan helpers.

The library itself only creates module loggers; ``setup_logging`` is a
convenience for scripts that want console output in the house format.
"""

import logging
import sys
import threading
from typing import Optional, Union

from .config import ConfigurationError, env_str

_config_lock = threading.Lock()
_HANDLER_NAME = "redis_scan.console"
_DEFAULT_FORMAT = "%(asctime)s.%(msecs)03d - %(name)s - %(levelname)s - %(message)s"
_DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(level: Optional[Union[int, str]]) -> int:
    if level is None:
        level = env_str("LOG_LEVEL", or_value="INFO")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ConfigurationError.invalid_value("LOG_LEVEL", level, "Expected a logging level name")
    return resolved


def _build_console_handler() -> logging.Handler:
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.set_name(_HANDLER_NAME)
    console_handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT, _DEFAULT_DATE_FORMAT))
    return console_handler


def setup_logging(level: Optional[Union[int, str]] = None, *, logger_name: str = "redis_scan") -> logging.Logger:
    """
    Attach a stdout handler to ``logger_name`` and set its level.

    Calling this repeatedly only updates the level; the handler is added once.
    """
    resolved_level = _resolve_level(level)
    with _config_lock:
        target = logging.getLogger(logger_name)
        target.setLevel(resolved_level)
        if not any(handler.get_name() == _HANDLER_NAME for handler in target.handlers):
            target.addHandler(_build_console_handler())
    return target


__all__ = ["setup_logging"]
