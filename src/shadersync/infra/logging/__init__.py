from __future__ import annotations

from .config import LoggingConfig
from .core import (
    _QUEUE_LISTENER_ATTR,
    configure_logging,
    get_logger,
    shutdown_logging,
)
from .handlers import _HANDLER_TAG_ATTR, ColorFormatter

__all__ = [
    "ColorFormatter",
    "LoggingConfig",
    "configure_logging",
    "get_logger",
    "shutdown_logging",
]
