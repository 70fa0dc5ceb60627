"""
Diagnostics formatters and color utilities.
"""

from __future__ import annotations

from datetime import datetime, timezone
from structlog.typing import EventDict

# =============================================================================
# Console Formatter (Aligned Columns)
# =============================================================================

# Column roles and level names share one table.
COLORS = {
    "reset": "\033[0m",
    "dim": "\033[2m",
    "timestamp": "\033[90m",
    "logger": "\033[35m",
    "key": "\033[34m",
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[1;31m",
}


def colorize(text: str, color: str) -> str:
    """Apply ANSI color to text. Unknown names leave the text as is."""
    code = COLORS.get(color)
    if not code:
        return text
    return f"{code}{text}{COLORS['reset']}"


class ConsoleFormatter:
    """Handles human-readable diagnostics rendering (fixed width, right-aligned)."""

    EXCLUDED_KEYS = {"level", "message", "event", "logger", "timestamp", "_name"}
    TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
    TIMESTAMP_WIDTH = 19
    LEVEL_WIDTH = 8
    LOGGER_WIDTH = 24
    SEPARATOR = " | "

    @classmethod
    def configure(
        cls,
        *,
        timestamp_format: str | None = None,
        logger_width: int | None = None,
    ) -> None:
        """Configure alignment parameters."""
        if timestamp_format:
            cls.TIMESTAMP_FORMAT = timestamp_format
            cls.TIMESTAMP_WIDTH = len(datetime.now().strftime(timestamp_format))
        if logger_width:
            cls.LOGGER_WIDTH = logger_width

    @staticmethod
    def _fit_right(text: str, width: int) -> str:
        if width <= 0:
            return text
        if len(text) > width:
            if width <= 3:
                text = text[-width:]
            else:
                text = "..." + text[-(width - 3) :]
        return f"{text:>{width}}"

    @classmethod
    def _format_timestamp(cls, raw_timestamp: str | None) -> str:
        if raw_timestamp:
            try:
                dt = datetime.fromisoformat(raw_timestamp.replace("Z", "+00:00"))
                if dt.tzinfo is None:
                    dt = dt.replace(tzinfo=timezone.utc)
                return dt.astimezone().strftime(cls.TIMESTAMP_FORMAT)
            except (ValueError, TypeError):
                pass
        return datetime.now().strftime(cls.TIMESTAMP_FORMAT)

    @staticmethod
    def _maybe_color(text: str, color: str, use_color: bool) -> str:
        return colorize(text, color) if use_color else text

    @classmethod
    def format(cls, event_dict: EventDict, *, use_color: bool = True) -> str:
        """Format an event dict into an aligned string."""
        level_upper = str(event_dict.get("level", "info")).upper()
        message_text = str(event_dict.get("message", event_dict.get("event", "")))
        logger_name = str(event_dict.get("logger", "rotolog"))

        extras = []
        for k, v in event_dict.items():
            if k in cls.EXCLUDED_KEYS:
                continue
            extras.append(f"{cls._maybe_color(k, 'key', use_color)}={cls._maybe_color(str(v), 'dim', use_color)}")
        if extras:
            message_text = f"{message_text} " + " ".join(extras)

        timestamp = cls._format_timestamp(event_dict.get("timestamp"))
        return cls.SEPARATOR.join(
            [
                cls._maybe_color(cls._fit_right(timestamp, cls.TIMESTAMP_WIDTH), "timestamp", use_color),
                cls._maybe_color(cls._fit_right(level_upper, cls.LEVEL_WIDTH), level_upper, use_color),
                cls._maybe_color(cls._fit_right(logger_name, cls.LOGGER_WIDTH), "logger", use_color),
                message_text,
            ]
        )
