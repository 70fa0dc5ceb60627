"""
Diagnostics for rotolog itself.

Operational events of the library (sinks opened and closed, rotations,
failures of the daily rotation thread) are reported here and never written
to the user's sinks. Output goes to stderr, filtered at WARNING unless
configured otherwise.

Library: structlog + orjson for the JSON rendering.
"""

from .core import configure_diagnostics, get_logger

__all__ = ["configure_diagnostics", "get_logger"]
