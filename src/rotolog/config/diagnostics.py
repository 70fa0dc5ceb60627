"""
Diagnostics Configuration.
"""

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DiagnosticsLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class DiagnosticsFormat(str, Enum):
    CONSOLE = "console"
    JSON = "json"


class DiagnosticsSettings(BaseSettings):
    """Output of the library's own operational events."""

    model_config = SettingsConfigDict(
        env_prefix="ROTOLOG_DIAG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    level: DiagnosticsLevel = Field(default=DiagnosticsLevel.WARNING, description="Diagnostics level")
    format: DiagnosticsFormat = Field(default=DiagnosticsFormat.CONSOLE, description="Output format")
    console_timestamp_format: str = Field(default="%Y-%m-%d %H:%M:%S", description="Console timestamp format")
    console_logger_width: int = Field(default=24, description="Console logger column width")

    def apply(self) -> None:
        from rotolog.diagnostics import configure_diagnostics

        configure_diagnostics(
            level=self.level.value,
            fmt=self.format.value,
            timestamp_format=self.console_timestamp_format,
            logger_width=self.console_logger_width,
        )
