"""
Timestamp and log line rendering.
"""

from __future__ import annotations

from datetime import datetime, timedelta

DEFAULT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
DATE_STAMP_FORMAT = "%Y%m%d"


def format_timestamp(moment: datetime, fmt: str = DEFAULT_TIMESTAMP_FORMAT) -> str:
    """Render ``moment`` as ``<fmt>.<milliseconds>``."""
    return f"{moment.strftime(fmt)}.{moment.microsecond // 1000:03d}"


def render_line(moment: datetime, header: str, message: object = "", fmt: str = DEFAULT_TIMESTAMP_FORMAT) -> str:
    """Render one log line. Lines start with a newline, as in the on-disk format."""
    return f"\n{format_timestamp(moment, fmt)} - {header}{message}"


def date_stamp(moment: datetime) -> str:
    return moment.strftime(DATE_STAMP_FORMAT)


def parse_date_stamp(stamp: str) -> datetime:
    return datetime.strptime(stamp, DATE_STAMP_FORMAT)


def next_midnight(stamp: str, now: datetime) -> datetime:
    """
    Local midnight that ends the day named by ``stamp``.

    Falls back to the midnight after ``now`` when that instant has already
    passed, so the caller never gets a deadline in the past.
    """
    deadline = parse_date_stamp(stamp) + timedelta(days=1)
    if deadline <= now:
        deadline = datetime(now.year, now.month, now.day) + timedelta(days=1)
    return deadline
