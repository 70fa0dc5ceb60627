"""
Core diagnostics configuration and initialization logic.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Literal

import orjson
import structlog
from structlog.typing import EventDict, WrappedLogger

from .formatters import ConsoleFormatter

DiagnosticsFormat = Literal["console", "json"]

# =============================================================================
# Global State
# =============================================================================


@dataclass
class _DiagnosticsState:
    level: int = logging.WARNING
    fmt: DiagnosticsFormat = "console"


_state = _DiagnosticsState()


def orjson_dumps(v: Any, *, default: Any = None) -> str:
    """Fast JSON serialization using orjson."""
    return orjson.dumps(v, default=default, option=orjson.OPT_UTC_Z | orjson.OPT_NAIVE_UTC).decode()


# =============================================================================
# Structlog Processors
# =============================================================================


def filter_by_level(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Drop events below the configured diagnostics level."""
    level = logging.getLevelName(method_name.upper())
    if isinstance(level, int) and level < _state.level:
        raise structlog.DropEvent
    return event_dict


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add ISO 8601 timestamp to log event."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def add_logger_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add logger name to log event."""
    event_dict["logger"] = event_dict.pop("_name", "rotolog")
    return event_dict


def rename_event_key(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


def render(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
    """Render the event with the configured output format."""
    if _state.fmt == "json":
        return orjson_dumps(event_dict, default=str)
    use_color = bool(getattr(sys.stderr, "isatty", lambda: False)())
    return ConsoleFormatter.format(event_dict, use_color=use_color)


_PROCESSORS = [
    filter_by_level,
    structlog.stdlib.add_log_level,
    add_timestamp,
    add_logger_name,
    rename_event_key,
    structlog.processors.format_exc_info,
    render,
]


class StderrWriter:
    """Writes rendered diagnostics to whatever ``sys.stderr`` currently is."""

    def msg(self, message: str) -> None:
        stream = sys.stderr
        stream.write(message + "\n")
        stream.flush()

    debug = info = warning = warn = error = critical = exception = fatal = msg


_WRITER = StderrWriter()


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a diagnostics logger instance."""
    return structlog.wrap_logger(
        _WRITER,
        processors=_PROCESSORS,
        wrapper_class=structlog.BoundLogger,
        context_class=dict,
        _name=name or "rotolog",
    )


# =============================================================================
# Configuration Logic
# =============================================================================


def configure_diagnostics(
    *,
    level: str = "WARNING",
    fmt: str = "console",
    timestamp_format: str | None = None,
    logger_width: int | None = None,
) -> None:
    """
    Configure the library's own diagnostics output.

    Args:
        level: Minimum level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        fmt: Output format (console, json)
        timestamp_format: Console timestamp format
        logger_width: Console logger column width
    """
    _state.level = getattr(logging, level.upper(), logging.WARNING)
    _state.fmt = "json" if fmt.lower() == "json" else "console"
    ConsoleFormatter.configure(timestamp_format=timestamp_format, logger_width=logger_width)
