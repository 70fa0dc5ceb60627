"""
Log sink abstractions and concrete implementations.

A sink is an output target shared by one or more log levels: either a
borrowed stream (stdout, stderr, any text stream) or an owned file with a
rotation policy. Every write to a sink happens under its lock.
"""

from __future__ import annotations

import io
import os
import threading
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, Optional, TextIO, Union

from .diagnostics import get_logger
from .exceptions import SinkOpenError
from .formatting import DEFAULT_TIMESTAMP_FORMAT, date_stamp, render_line
from .levels import Policy
from .rotation import DailyRotationThread, rotate_by_size, rotate_daily

logger = get_logger("rotolog.sinks")

Clock = Callable[[], datetime]
PathLike = Union[str, "os.PathLike[str]"]


class DiscardStream(io.TextIOBase):
    """Writable text stream that drops everything written to it."""

    def writable(self) -> bool:
        return True

    def write(self, s: str) -> int:
        return len(s)


DISCARD_STREAM = DiscardStream()


def normalize_path(path: PathLike) -> str:
    return os.path.abspath(os.fspath(path))


# =============================================================================
# Sink Abstraction
# =============================================================================


class BaseSink(ABC):
    """Abstract base class for log sinks."""

    path: Optional[str] = None
    policy: Policy = Policy.NONE
    max_size_bytes: int = 0
    max_archive_count: int = 0
    creation_date: str = ""

    def __init__(self, clock: Optional[Clock] = None):
        self.lock = threading.RLock()
        self.clock: Clock = clock or datetime.now

    @property
    @abstractmethod
    def stream(self) -> TextIO:
        """The stream currently receiving writes."""
        ...

    @property
    def is_file(self) -> bool:
        return bool(self.path)

    def before_write(self) -> None:
        """Hook run under the lock before every write."""

    def write_entry(self, header: str, message: object = "", timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT) -> TextIO:
        """Write one timestamped line. Returns the stream it went to."""
        with self.lock:
            self.before_write()
            stream = self.stream
            stream.write(render_line(self.clock(), header, message, timestamp_format))
            return stream

    def write_raw(self, text: str) -> None:
        with self.lock:
            self.before_write()
            self.stream.write(text)

    def flush(self) -> None:
        with self.lock:
            self.stream.flush()

    @abstractmethod
    def close(self) -> None:
        """Release resources owned by the sink."""
        ...


class StreamSink(BaseSink):
    """Wraps an externally owned stream. Never closes it."""

    def __init__(self, stream: TextIO, clock: Optional[Clock] = None):
        super().__init__(clock)
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream

    def close(self) -> None:
        self.flush()

    def __repr__(self) -> str:
        return f"StreamSink(stream={getattr(self._stream, 'name', self._stream)!r})"


class FileSink(BaseSink):
    """
    File sink with an optional rotation policy.

    Args:
        path: Log file, opened for append. Parent directories must exist.
        policy: Rotation policy.
        max_archive_count: Number of files kept by size rotation, the live
            file included. Clamped to at least 2 when size rotation is active.
        max_size_bytes: Size threshold for size rotation.
        clock: Source of local time, for timestamps and date stamps.
        daily_thread: Start the background daily rotation thread (DAILY only).

    If the file cannot be reopened after a rotation, the sink discards
    writes and retries the open before each later write.

    Raises:
        ValueError: ``max_archive_count`` or ``max_size_bytes`` is negative.
        SinkOpenError: the file cannot be opened.
    """

    def __init__(
        self,
        path: PathLike,
        policy: Policy = Policy.NONE,
        max_archive_count: int = 0,
        max_size_bytes: int = 0,
        clock: Optional[Clock] = None,
        daily_thread: bool = True,
    ):
        if max_archive_count < 0 or max_size_bytes < 0:
            raise ValueError(
                f"max_archive_count and max_size_bytes must be >= 0, got {max_archive_count} and {max_size_bytes}"
            )
        super().__init__(clock)
        self.path = normalize_path(path)
        self.policy = Policy(policy)
        if self.policy is Policy.MAX_SIZE and max_size_bytes:
            self.max_size_bytes = max_size_bytes
            self.max_archive_count = max(max_archive_count, 2)
        self._daily: Optional[DailyRotationThread] = None

        if self.policy is Policy.DAILY:
            if os.path.exists(self.path):
                self.creation_date = date_stamp(datetime.fromtimestamp(os.path.getmtime(self.path)))
            else:
                self.creation_date = self.today()

        self._stream: TextIO = self._open()
        logger.debug("sink_opened", path=self.path, policy=self.policy.value)

        if self.policy is Policy.DAILY and daily_thread:
            self._daily = DailyRotationThread(self)
            self._daily.start()

    def _open(self) -> TextIO:
        try:
            return open(self.path, "a", encoding="utf-8")
        except OSError as exc:
            raise SinkOpenError(self.path, reason=exc.strerror or str(exc)) from exc

    @property
    def stream(self) -> TextIO:
        return self._stream

    def today(self) -> str:
        return date_stamp(self.clock())

    @property
    def detached(self) -> bool:
        """True while writes are discarded after a failed reopen."""
        return self._stream is DISCARD_STREAM

    def file_size(self) -> int:
        """Size of the active file, pending writes included. 0 while detached."""
        with self.lock:
            if self.detached:
                return 0
            self._stream.flush()
            return os.fstat(self._stream.fileno()).st_size

    def release(self) -> None:
        """Flush and close the active file. Caller holds the lock."""
        if self.detached:
            return
        self._stream.flush()
        self._stream.close()

    def reopen(self) -> None:
        """
        Open ``path`` fresh after a rotation. Caller holds the lock.

        On failure the sink is left detached and the error propagates.
        """
        try:
            self._stream = self._open()
        except SinkOpenError:
            self._stream = DISCARD_STREAM
            logger.error("sink_detached", path=self.path)
            raise

    def _reattach(self) -> bool:
        try:
            self._stream = self._open()
        except SinkOpenError:
            return False
        logger.info("sink_reattached", path=self.path)
        return True

    def before_write(self) -> None:
        if self.detached and not self._reattach():
            return
        if self.max_size_bytes:
            rotate_by_size(self)
        elif self.policy is Policy.DAILY:
            rotate_daily(self)

    def close(self) -> None:
        if self._daily is not None:
            self._daily.stop()
            self._daily = None
        with self.lock:
            if not self._stream.closed:
                self.release()
        logger.debug("sink_closed", path=self.path)

    @property
    def daily_thread(self) -> Optional[DailyRotationThread]:
        return self._daily

    def __repr__(self) -> str:
        return f"FileSink(path={self.path!r}, policy={self.policy.value!r})"
