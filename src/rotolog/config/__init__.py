"""
Rotolog Configuration Module.

Implements the Nested Settings Pattern: each concern has its own settings
class and environment variable prefix.

    ROTOLOG_*        logger defaults (level, file, rotation, profiling)
    ROTOLOG_DIAG_*   the library's own diagnostics output

Usage:
    from rotolog.config import settings

    settings.logger.level
    settings.diagnostics.format
"""

from functools import cached_property

from pydantic_settings import BaseSettings, SettingsConfigDict

from .diagnostics import DiagnosticsFormat, DiagnosticsLevel, DiagnosticsSettings
from .logger import LoggerSettings, MinLevel


class Settings(BaseSettings):
    """Composite settings aggregating the configuration domains."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @cached_property
    def logger(self) -> LoggerSettings:
        return LoggerSettings()

    @cached_property
    def diagnostics(self) -> DiagnosticsSettings:
        return DiagnosticsSettings()


settings = Settings()

__all__ = [
    "DiagnosticsFormat",
    "DiagnosticsLevel",
    "DiagnosticsSettings",
    "LoggerSettings",
    "MinLevel",
    "Settings",
    "settings",
]
