"""
Exception types raised by rotolog.

Every error carries a machine-readable code and an optional ``details``
dict. Configuration errors are raised synchronously at the offending call
and never leave partially applied state behind.
"""

from __future__ import annotations

from typing import Any, Optional


class RotologError(Exception):
    """Base exception for all rotolog errors."""

    default_code: str = "ROTOLOG_ERROR"

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code if code is not None else self.default_code
        self.details: dict[str, Any] = details or {}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, code={self.code!r})"

    def __str__(self) -> str:
        return self.message


class SinkOpenError(RotologError):
    """A log file could not be opened for a new sink."""

    default_code = "SINK_OPEN_FAILED"

    def __init__(self, path: str, *, reason: str = "") -> None:
        message = f"Log file cannot be opened: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, details={"path": path})
        self.path = path


class SinkConflictError(RotologError):
    """A file assignment conflicts with one already in place."""

    default_code = "SINK_CONFLICT"

    def __init__(self, message: str, *, level: Optional[str] = None, path: Optional[str] = None) -> None:
        details: dict[str, Any] = {}
        if level is not None:
            details["level"] = level
        if path is not None:
            details["path"] = path
        super().__init__(message, details=details)
