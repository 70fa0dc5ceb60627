"""
Profiling timer tests.
"""

from __future__ import annotations

import inspect

import pytest

from rotolog.levels import LogLevel
from rotolog.timers import TimerStack


def _counter(values):
    it = iter(values)
    return lambda: next(it)


class TestTimerStack:
    def test_stops_innermost_first(self):
        stack = TimerStack(_counter([0, 10, 20, 100, 200, 300]))
        assert [stack.push() for _ in range(3)] == [1, 2, 3]

        assert stack.pop("nanoseconds") == (3, 80)
        assert stack.pop("nanoseconds") == (2, 190)
        assert stack.pop("nanoseconds") == (1, 300)
        assert len(stack) == 0

    def test_empty_stack_returns_none(self):
        stack = TimerStack(_counter([5]))
        assert stack.pop("seconds") is None

    def test_durations_truncate_to_whole_units(self):
        stack = TimerStack(_counter([0, 2_999_999]))
        stack.push()
        assert stack.pop("milliseconds") == (1, 2)

    def test_unknown_unit_keeps_the_timer(self):
        stack = TimerStack(_counter([0, 1, 2]))
        stack.push()
        with pytest.raises(ValueError):
            stack.pop("fortnights")
        assert len(stack) == 1


class TestLoggerTimers:
    def test_lines_go_to_the_profiling_sink(self, make_logger, out, err):
        log = make_logger(profiling=True)
        line = inspect.currentframe().f_lineno + 1
        log.timer_start()

        assert out.getvalue() == f"\nTimer #1 STARTED at test_lines_go_to_the_profiling_sink (Line {line})"
        assert err.getvalue() == ""

    def test_nested_timers_stop_lifo(self, make_logger, out):
        log = make_logger(profiling=True)
        for _ in range(3):
            log.timer_start()
        for _ in range(3):
            assert log.timer_stop("microseconds") is not None

        stops = [line for line in out.getvalue().split("\n") if "STOPPED" in line]
        assert [s.split(" STOPPED")[0] for s in stops] == ["Timer #3", "Timer #2", "Timer #1"]
        assert all(s.endswith(" microseconds") for s in stops)
        assert "DURATION = " in stops[0]

    def test_extra_stop_reports_and_continues(self, make_logger, out):
        log = make_logger(profiling=True)
        log.timer_start()
        log.timer_stop()
        assert log.timer_stop() is None
        assert out.getvalue().endswith("\nTimer not started!")
        assert log.running_timers == 0

    def test_disabled_by_default(self, make_logger, out):
        log = make_logger()
        log.timer_start()
        assert log.timer_stop() is None
        assert out.getvalue() == ""
        assert log.running_timers == 0

    def test_switching_profiling_on(self, make_logger, out):
        log = make_logger()
        log.profiling = True
        log.timer_start()
        assert log.running_timers == 1

    def test_unknown_unit_raises(self, make_logger):
        log = make_logger(profiling=True)
        log.timer_start()
        with pytest.raises(ValueError):
            log.timer_stop("fortnights")
        assert log.running_timers == 1

    def test_follow_profiling_level_routing(self, make_logger, tmp_path, out):
        path = tmp_path / "profile.log"
        log = make_logger(profiling=True)
        log.set_level_sink(LogLevel.PROFILING, path)
        log.timer_start()
        log.timer_stop("seconds")
        log.flush()

        content = path.read_text(encoding="utf-8")
        assert "Timer #1 STARTED" in content
        assert "Timer #1 STOPPED" in content
        assert content.endswith(" seconds")
        assert out.getvalue() == ""

    def test_not_affected_by_set_level(self, make_logger, out):
        log = make_logger(profiling=True)
        log.set_level(LogLevel.NONE)
        log.timer_start()
        assert "Timer #1 STARTED" in out.getvalue()

    def test_stacklevel_names_an_outer_caller(self, make_logger, out):
        log = make_logger(profiling=True)

        def helper():
            log.timer_start(stacklevel=2)

        helper()
        assert "STARTED at test_stacklevel_names_an_outer_caller" in out.getvalue()
