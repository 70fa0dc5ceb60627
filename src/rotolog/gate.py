"""
Runtime enable switches for the write and stream entry points.
"""

from __future__ import annotations

from .levels import GATE_LEVELS, LogLevel


class EnableGate:
    """
    Per-level switches for the write and stream entry points.

    ``set_level`` enables every level at or above the minimum and disables
    the rest. The ERROR write entry point is never disabled; NONE only
    silences ERROR's stream accessor. PROFILING is governed separately by
    the profiling switch.
    """

    def __init__(self, min_level: LogLevel = LogLevel.DEBUG, profiling: bool = False):
        self._write: dict[LogLevel, bool] = {}
        self._stream: dict[LogLevel, bool] = {}
        self.profiling = profiling
        self.min_level = LogLevel.DEBUG
        self.set_level(min_level)

    def set_level(self, min_level: LogLevel | str) -> None:
        min_level = LogLevel.parse(min_level)
        if min_level not in GATE_LEVELS:
            raise ValueError(f"Invalid minimum level: {min_level.name}")

        for level in (LogLevel.DEBUG, LogLevel.INFO):
            enabled = level >= min_level
            self._write[level] = enabled
            self._stream[level] = enabled
        self._write[LogLevel.ERROR] = True
        self._stream[LogLevel.ERROR] = min_level is not LogLevel.NONE
        self.min_level = min_level

    def write_enabled(self, level: LogLevel) -> bool:
        if level is LogLevel.PROFILING:
            return self.profiling
        return self._write.get(level, False)

    def stream_enabled(self, level: LogLevel) -> bool:
        if level is LogLevel.PROFILING:
            return self.profiling
        return self._stream.get(level, False)
