"""
Rotation engine for file sinks.

Two algorithms archive and reopen a sink's active file:

- size rotation, run before each write once the file grows past the
  sink's threshold. Archives are numbered ``path.1`` (newest) up to
  ``path.<max_archive_count - 1>``; the oldest falls off the end.
- daily rotation, run before each write and by a background thread that
  wakes at local midnight. The archive is named after the day the content
  was written: ``path.YYYYMMDD``.

Both hold the sink lock for the whole close/rename/reopen sequence so a
writer never sees a closed stream.
"""

from __future__ import annotations

import os
import threading
from typing import TYPE_CHECKING, Optional

from .diagnostics import get_logger
from .formatting import next_midnight

if TYPE_CHECKING:
    from .sinks import FileSink

logger = get_logger("rotolog.rotation")

LOCK_POLL_SECONDS = 0.05


def numbered_archive(path: str, index: int) -> str:
    return f"{path}.{index}"


def dated_archive(path: str, stamp: str) -> str:
    return f"{path}.{stamp}"


def rotate_by_size(sink: FileSink) -> bool:
    """Rotate ``sink`` if its file exceeds ``max_size_bytes``. Returns True on rotation."""
    with sink.lock:
        size = sink.file_size()
        if size <= sink.max_size_bytes:
            return False

        sink.release()
        try:
            for i in range(sink.max_archive_count - 2, 0, -1):
                src = numbered_archive(sink.path, i)
                if os.path.exists(src):
                    os.replace(src, numbered_archive(sink.path, i + 1))
            os.replace(sink.path, numbered_archive(sink.path, 1))
        finally:
            sink.reopen()
        sink.creation_date = sink.today()

    logger.info("size_rotation", path=sink.path, size=size, max_size=sink.max_size_bytes)
    return True


def rotate_daily(sink: FileSink) -> bool:
    """
    Archive ``sink`` as ``path.<creation_date>`` if the day has changed.

    Empty files are never archived; their date stamp just moves forward to
    today. Returns True on rotation.
    """
    with sink.lock:
        today = sink.today()
        previous = sink.creation_date
        if today == previous:
            return False
        if sink.file_size() == 0:
            sink.creation_date = today
            return False

        archive = dated_archive(sink.path, previous)
        sink.release()
        try:
            os.replace(sink.path, archive)
        finally:
            sink.reopen()
        sink.creation_date = today

    logger.info("daily_rotation", path=sink.path, archive=archive)
    return True


class DailyRotationThread(threading.Thread):
    """
    Background thread running the daily check for one sink.

    Checks once at start, then sleeps until the midnight that ends the
    sink's current day. ``stop()`` ends it; otherwise it lives until process
    exit. A failed rotation is reported and ends the thread.
    """

    def __init__(self, sink: FileSink):
        super().__init__(name=f"rotolog-daily:{os.path.basename(sink.path)}", daemon=True)
        self.sink = sink
        self._stop_event = threading.Event()

    def run(self) -> None:
        while self._acquire():
            try:
                rotate_daily(self.sink)
            except Exception:
                logger.error("daily_rotation_failed", path=self.sink.path, exc_info=True)
                return
            finally:
                self.sink.lock.release()
            now = self.sink.clock()
            deadline = next_midnight(self.sink.creation_date, now)
            self._stop_event.wait((deadline - now).total_seconds())

    def _acquire(self) -> bool:
        """Take the sink lock, giving up once ``stop()`` is called."""
        while not self._stop_event.is_set():
            if self.sink.lock.acquire(timeout=LOCK_POLL_SECONDS):
                return True
        return False

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop_event.set()
        if self.is_alive() and threading.current_thread() is not self:
            self.join(timeout)

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()
