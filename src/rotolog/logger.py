"""
The logger facade: gate, router and timers behind one object.
"""

from __future__ import annotations

import inspect
import sys
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator, Optional, TextIO

from .diagnostics import get_logger
from .formatting import DEFAULT_TIMESTAMP_FORMAT
from .gate import EnableGate
from .levels import HEADERS, LogLevel, Policy
from .router import LevelRouter
from .sinks import DISCARD_STREAM, BaseSink, Clock, PathLike, StreamSink
from .timers import NOT_STARTED_LINE, TimerStack, started_line, stopped_line

if TYPE_CHECKING:
    from .config import LoggerSettings

logger = get_logger("rotolog.logger")


class Logger:
    """
    Leveled logger with per-level sinks, file rotation and profiling timers.

    By default DEBUG, INFO and PROFILING go to ``stdout`` and ERROR to
    ``stderr``. Route levels to files with ``set_level_sink`` or
    ``set_global_sink`` before logging from several threads.

    Args:
        stdout: Stream for DEBUG, INFO and PROFILING (default ``sys.stdout``).
        stderr: Stream for ERROR (default ``sys.stderr``).
        level: Minimum enabled level, see ``set_level``.
        profiling: Enable the profiling timers.
        clock: Source of local time for timestamps and daily rotation.
        timestamp_format: strftime format of line timestamps.
    """

    def __init__(
        self,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
        *,
        level: LogLevel | str = LogLevel.DEBUG,
        profiling: bool = False,
        clock: Optional[Clock] = None,
        timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
    ):
        self.timestamp_format = timestamp_format
        self._router = LevelRouter(
            StreamSink(stdout if stdout is not None else sys.stdout, clock),
            StreamSink(stderr if stderr is not None else sys.stderr, clock),
            clock,
        )
        self._gate = EnableGate(LogLevel.parse(level), profiling)
        self._timers = TimerStack()
        self._closed = False

    @classmethod
    def from_settings(cls, settings: Optional[LoggerSettings] = None, **kwargs) -> Logger:
        """Build a logger from ``LoggerSettings`` (environment when omitted)."""
        if settings is None:
            from .config import LoggerSettings

            settings = LoggerSettings()

        instance = cls(
            level=settings.level.value,
            profiling=settings.profiling,
            timestamp_format=settings.timestamp_format,
            **kwargs,
        )
        if settings.file_path:
            instance.set_global_sink(
                settings.file_path,
                settings.policy,
                settings.max_archive_count,
                settings.max_size_bytes,
            )
        return instance

    # -------------------------------------------------------------------------
    # Message entry points
    # -------------------------------------------------------------------------

    def write(self, level: LogLevel | str, message: object) -> None:
        """Append one line for ``level``, if the level is enabled."""
        level = LogLevel.parse(level)
        if self._closed or not self._gate.write_enabled(level):
            return
        self._router.sink_for(level).write_entry(HEADERS[level], message, self.timestamp_format)

    def debug(self, message: object) -> None:
        self.write(LogLevel.DEBUG, message)

    def info(self, message: object) -> None:
        self.write(LogLevel.INFO, message)

    def error(self, message: object) -> None:
        self.write(LogLevel.ERROR, message)

    # -------------------------------------------------------------------------
    # Stream entry points
    # -------------------------------------------------------------------------

    def stream(self, level: LogLevel | str) -> TextIO:
        """
        Write a line header for ``level`` and return the stream it went to.

        The sink lock is released before returning, so a rotation may swap
        the file while the caller is still writing. Use ``locked_stream``
        when several writes must land together.
        """
        level = LogLevel.parse(level)
        if self._closed or not self._gate.stream_enabled(level):
            return DISCARD_STREAM
        return self._router.sink_for(level).write_entry(HEADERS[level], "", self.timestamp_format)

    def debug_stream(self) -> TextIO:
        return self.stream(LogLevel.DEBUG)

    def info_stream(self) -> TextIO:
        return self.stream(LogLevel.INFO)

    def error_stream(self) -> TextIO:
        return self.stream(LogLevel.ERROR)

    @contextmanager
    def locked_stream(self, level: LogLevel | str) -> Iterator[TextIO]:
        """Like ``stream``, holding the sink lock until the block exits."""
        level = LogLevel.parse(level)
        if self._closed or not self._gate.stream_enabled(level):
            yield DISCARD_STREAM
            return
        sink = self._router.sink_for(level)
        with sink.lock:
            yield sink.write_entry(HEADERS[level], "", self.timestamp_format)

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    def set_level(self, min_level: LogLevel | str) -> None:
        """
        Enable levels at or above ``min_level`` (DEBUG, INFO, ERROR or NONE).

        ERROR messages are always written; NONE silences every stream
        accessor, ERROR's included.
        """
        self._gate.set_level(min_level)

    @property
    def min_level(self) -> LogLevel:
        return self._gate.min_level

    @property
    def profiling(self) -> bool:
        return self._gate.profiling

    @profiling.setter
    def profiling(self, enabled: bool) -> None:
        self._gate.profiling = enabled

    def set_level_sink(
        self,
        level: LogLevel | str,
        path: PathLike,
        policy: Policy = Policy.NONE,
        max_archive_count: int = 0,
        max_size_bytes: int = 0,
    ) -> BaseSink:
        """Route ``level`` to a file. See ``LevelRouter.set_level_sink``."""
        sink = self._router.set_level_sink(LogLevel.parse(level), path, Policy(policy), max_archive_count, max_size_bytes)
        logger.info("level_sink_set", level=LogLevel.parse(level).name, path=sink.path)
        return sink

    def set_global_sink(
        self,
        path: PathLike,
        policy: Policy = Policy.NONE,
        max_archive_count: int = 0,
        max_size_bytes: int = 0,
    ) -> BaseSink:
        """Route every level to one file. See ``LevelRouter.set_global_sink``."""
        sink = self._router.set_global_sink(path, Policy(policy), max_archive_count, max_size_bytes)
        logger.info("global_sink_set", path=sink.path)
        return sink

    def sink_for(self, level: LogLevel | str) -> BaseSink:
        return self._router.sink_for(LogLevel.parse(level))

    # -------------------------------------------------------------------------
    # Profiling
    # -------------------------------------------------------------------------

    def timer_start(self, *, stacklevel: int = 1) -> None:
        """Start a nested timer, tagged with the caller's function and line."""
        if self._closed or not self._gate.profiling:
            return
        function, line = _caller(stacklevel)
        self._router.sink_for(LogLevel.PROFILING).write_raw(started_line(len(self._timers) + 1, function, line))
        self._timers.push()

    def timer_stop(self, unit: str = "milliseconds", *, stacklevel: int = 1) -> Optional[int]:
        """
        Stop the most recently started timer and log its duration.

        Returns the duration in whole ``unit``s, or None when no timer was
        running (a "Timer not started!" line is written instead).
        """
        if self._closed or not self._gate.profiling:
            return None
        result = self._timers.pop(unit)
        sink = self._router.sink_for(LogLevel.PROFILING)
        if result is None:
            sink.write_raw(NOT_STARTED_LINE)
            return None
        depth, duration = result
        function, line = _caller(stacklevel)
        sink.write_raw(stopped_line(depth, function, line, duration, unit))
        return duration

    @property
    def running_timers(self) -> int:
        return len(self._timers)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def flush(self) -> None:
        if self._closed:
            return
        for sink in self._router.arena:
            sink.flush()

    def close(self) -> None:
        """Close file sinks and stop their daily threads. Wrapped streams stay open."""
        if self._closed:
            return
        self._closed = True
        self._router.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> Logger:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def _caller(stacklevel: int) -> tuple[str, int]:
    frame = inspect.currentframe()
    # Skip this helper and the Logger method
    for _ in range(stacklevel + 1):
        if frame is None:
            break
        frame = frame.f_back
    if frame is None:
        return "<unknown>", 0
    return frame.f_code.co_name, frame.f_lineno
