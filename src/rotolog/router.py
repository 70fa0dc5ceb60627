"""
Level routing: which sink receives each log level.

Sinks live in an arena keyed by small integer handles, and the routing
table holds handles. Several levels may hold the same handle; a sink is
released as soon as no level refers to it.
"""

from __future__ import annotations

import itertools
from typing import Iterator, Optional

from .diagnostics import get_logger
from .exceptions import SinkConflictError
from .levels import ROUTED_LEVELS, LogLevel, Policy
from .sinks import BaseSink, Clock, FileSink, PathLike, normalize_path

logger = get_logger("rotolog.router")


class SinkArena:
    """Owns every sink of a logger, addressed by integer handle."""

    def __init__(self) -> None:
        self._sinks: dict[int, BaseSink] = {}
        self._handles = itertools.count()

    def add(self, sink: BaseSink) -> int:
        handle = next(self._handles)
        self._sinks[handle] = sink
        return handle

    def get(self, handle: int) -> BaseSink:
        return self._sinks[handle]

    def find_path(self, path: str) -> Optional[int]:
        for handle, sink in self._sinks.items():
            if sink.path == path:
                return handle
        return None

    def release(self, handle: int) -> None:
        sink = self._sinks.pop(handle)
        sink.close()

    def handles(self) -> list[int]:
        return list(self._sinks)

    def __iter__(self) -> Iterator[BaseSink]:
        return iter(list(self._sinks.values()))

    def __len__(self) -> int:
        return len(self._sinks)


class LevelRouter:
    """
    Maps DEBUG, INFO, ERROR and PROFILING to sinks.

    Meant to be configured before concurrent logging starts; reassignment
    while other threads write is not synchronized.
    """

    def __init__(self, default_sink: BaseSink, error_sink: BaseSink, clock: Optional[Clock] = None):
        self.arena = SinkArena()
        self._clock = clock
        default_handle = self.arena.add(default_sink)
        error_handle = self.arena.add(error_sink)
        self._table: dict[LogLevel, int] = {
            LogLevel.DEBUG: default_handle,
            LogLevel.INFO: default_handle,
            LogLevel.ERROR: error_handle,
            LogLevel.PROFILING: default_handle,
        }

    def handle_for(self, level: LogLevel) -> int:
        return self._table[_routed(level)]

    def sink_for(self, level: LogLevel) -> BaseSink:
        return self.arena.get(self._table[_routed(level)])

    def set_level_sink(
        self,
        level: LogLevel,
        path: PathLike,
        policy: Policy = Policy.NONE,
        max_archive_count: int = 0,
        max_size_bytes: int = 0,
    ) -> BaseSink:
        """
        Route ``level`` to the file at ``path``.

        A path already backing another level is shared, and the policy
        arguments are ignored in that case.

        Raises:
            SinkConflictError: ``level`` already writes to a file.
            SinkOpenError: the file cannot be opened.
            ValueError: a negative size or archive count.
        """
        level = _routed(level)
        current = self.sink_for(level)
        if current.is_file:
            raise SinkConflictError(
                "Log file already assigned to this log level",
                level=level.name,
                path=current.path,
            )

        normalized = normalize_path(path)
        handle = self.arena.find_path(normalized)
        if handle is None:
            handle = self.arena.add(self._new_file_sink(normalized, policy, max_archive_count, max_size_bytes))
        else:
            logger.debug("sink_reused", level=level.name, path=normalized)

        self._table[level] = handle
        self._collect()
        return self.arena.get(handle)

    def set_global_sink(
        self,
        path: PathLike,
        policy: Policy = Policy.NONE,
        max_archive_count: int = 0,
        max_size_bytes: int = 0,
    ) -> BaseSink:
        """
        Route every level to one new file sink.

        Raises:
            SinkConflictError: any level already writes to a file.
            SinkOpenError: the file cannot be opened.
            ValueError: a negative size or archive count.
        """
        for level in ROUTED_LEVELS:
            sink = self.sink_for(level)
            if sink.is_file:
                raise SinkConflictError(
                    f"Log file already assigned to a log sink: {sink.path}",
                    level=level.name,
                    path=sink.path,
                )

        handle = self.arena.add(self._new_file_sink(normalize_path(path), policy, max_archive_count, max_size_bytes))
        for level in ROUTED_LEVELS:
            self._table[level] = handle
        self._collect()
        return self.arena.get(handle)

    def _new_file_sink(self, path: str, policy: Policy, max_archive_count: int, max_size_bytes: int) -> FileSink:
        return FileSink(path, policy, max_archive_count, max_size_bytes, clock=self._clock)

    def _collect(self) -> None:
        """Release sinks no level refers to any more."""
        referenced = set(self._table.values())
        for handle in self.arena.handles():
            if handle not in referenced:
                self.arena.release(handle)

    def close(self) -> None:
        for handle in self.arena.handles():
            self.arena.release(handle)

    def __iter__(self) -> Iterator[tuple[LogLevel, BaseSink]]:
        for level in ROUTED_LEVELS:
            yield level, self.sink_for(level)


def _routed(level: LogLevel) -> LogLevel:
    level = LogLevel.parse(level)
    if level not in ROUTED_LEVELS:
        raise ValueError(f"Level {level.name} has no sink")
    return level
