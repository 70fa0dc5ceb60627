"""
Log levels, rotation policies and timer units.
"""

from __future__ import annotations

from enum import Enum, IntEnum


class LogLevel(IntEnum):
    """Routing levels. NONE is only meaningful as a minimum level for the gate."""

    DEBUG = 0
    INFO = 1
    ERROR = 2
    PROFILING = 3
    NONE = 4

    @classmethod
    def parse(cls, value: LogLevel | str | int) -> LogLevel:
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f"Unknown log level: {value!r}") from None
        return cls(value)


# Levels that own a slot in the routing table
ROUTED_LEVELS: tuple[LogLevel, ...] = (
    LogLevel.DEBUG,
    LogLevel.INFO,
    LogLevel.ERROR,
    LogLevel.PROFILING,
)

# Valid arguments for the dynamic gate
GATE_LEVELS: tuple[LogLevel, ...] = (
    LogLevel.DEBUG,
    LogLevel.INFO,
    LogLevel.ERROR,
    LogLevel.NONE,
)

HEADERS: dict[LogLevel, str] = {
    LogLevel.DEBUG: "DEBUG: ",
    LogLevel.INFO: "INFO: ",
    LogLevel.ERROR: "*** ERROR!\n                         ",
    LogLevel.PROFILING: "PROFILING: ",
}


class Policy(str, Enum):
    """How a file-backed sink archives its active file."""

    NONE = "none"
    MAX_SIZE = "max_size"
    DAILY = "daily"


# Nanoseconds per unit
TIMER_UNITS: dict[str, int] = {
    "nanoseconds": 1,
    "microseconds": 1_000,
    "milliseconds": 1_000_000,
    "seconds": 1_000_000_000,
    "minutes": 60 * 1_000_000_000,
    "hours": 3_600 * 1_000_000_000,
}
