import io
import typing as t
from datetime import datetime, timedelta

import pytest

from rotolog import Logger
from rotolog.diagnostics import configure_diagnostics


class FakeClock:
    """Settable local clock."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def set(self, now: datetime) -> None:
        self.now = now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 10, 16, 12, 0, 0, 123000))


@pytest.fixture
def out() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def err() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def make_logger(out, err, clock) -> t.Iterator[t.Callable[..., Logger]]:
    """
    Factory for loggers writing to in-memory stdout/stderr with the fake clock.
    Every logger built here is closed on teardown.
    """
    created: list[Logger] = []

    def factory(**kwargs: t.Any) -> Logger:
        kwargs.setdefault("stdout", out)
        kwargs.setdefault("stderr", err)
        kwargs.setdefault("clock", clock)
        instance = Logger(**kwargs)
        created.append(instance)
        return instance

    yield factory
    for instance in created:
        instance.close()


@pytest.fixture(autouse=True)
def reset_diagnostics() -> t.Iterator[None]:
    """Diagnostics state is module-global; restore the defaults around each test."""
    configure_diagnostics(level="WARNING", fmt="console")
    yield
    configure_diagnostics(level="WARNING", fmt="console")
