"""
Nested profiling timers.

Timers form a stack: ``start`` pushes, ``stop`` pops the most recent one.
There are no timer ids. The stack is not synchronized, so one logger's
timers belong to one thread.
"""

from __future__ import annotations

import time
from typing import Callable, Optional

from .levels import TIMER_UNITS


class TimerStack:
    def __init__(self, counter: Callable[[], int] = time.perf_counter_ns):
        self._counter = counter
        self._starts: list[int] = []

    def __len__(self) -> int:
        return len(self._starts)

    def push(self) -> int:
        """Start a timer. Returns the new depth."""
        self._starts.append(self._counter())
        return len(self._starts)

    def pop(self, unit: str) -> Optional[tuple[int, int]]:
        """
        Stop the innermost timer.

        Returns ``(depth, duration)`` with the duration truncated to whole
        ``unit``s, or None when no timer is running.

        Raises:
            ValueError: unknown unit.
        """
        stop = self._counter()
        scale = unit_scale(unit)
        if not self._starts:
            return None
        depth = len(self._starts)
        elapsed = stop - self._starts.pop()
        return depth, elapsed // scale


def unit_scale(unit: str) -> int:
    try:
        return TIMER_UNITS[unit]
    except KeyError:
        raise ValueError(f"Unknown timer unit: {unit!r} (expected one of {', '.join(TIMER_UNITS)})") from None


def started_line(depth: int, function: str, line: int) -> str:
    return f"\nTimer #{depth} STARTED at {function} (Line {line})"


def stopped_line(depth: int, function: str, line: int, duration: int, unit: str) -> str:
    return f"\nTimer #{depth} STOPPED at {function} (Line {line}) --- DURATION = {duration} {unit}"


NOT_STARTED_LINE = "\nTimer not started!"
