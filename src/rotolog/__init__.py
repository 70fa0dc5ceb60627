"""
rotolog: leveled logging with per-level sinks, file rotation and profiling timers.

Usage:
    from rotolog import Logger, LogLevel, Policy

    log = Logger()
    log.set_level_sink(LogLevel.DEBUG, "debug.log", Policy.DAILY)
    log.set_level_sink(LogLevel.INFO, "app.log", Policy.MAX_SIZE, max_archive_count=4, max_size_bytes=500)
    log.info("started")
    print("value", 42, file=log.debug_stream(), end="")
"""

from __future__ import annotations

import atexit
import threading
from typing import Optional

from .exceptions import RotologError, SinkConflictError, SinkOpenError
from .levels import LogLevel, Policy
from .logger import Logger
from .sinks import BaseSink, FileSink, StreamSink

_default: Optional[Logger] = None
_default_lock = threading.Lock()


def default_logger() -> Logger:
    """Process-wide logger built from ``ROTOLOG_*`` settings on first use."""
    global _default
    with _default_lock:
        if _default is None or _default.closed:
            _default = Logger.from_settings()
            atexit.register(_default.close)
        return _default


__all__ = [
    "BaseSink",
    "FileSink",
    "LogLevel",
    "Logger",
    "Policy",
    "RotologError",
    "SinkConflictError",
    "SinkOpenError",
    "StreamSink",
    "default_logger",
]
