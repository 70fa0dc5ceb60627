"""
Logger Configuration.
"""

from enum import Enum
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from rotolog.formatting import DEFAULT_TIMESTAMP_FORMAT
from rotolog.levels import Policy


class MinLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    ERROR = "ERROR"
    NONE = "NONE"


class LoggerSettings(BaseSettings):
    """Sink routing, rotation and gating defaults."""

    model_config = SettingsConfigDict(
        env_prefix="ROTOLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    level: MinLevel = Field(default=MinLevel.DEBUG, description="Minimum enabled level")
    file_path: Optional[str] = Field(default=None, description="Log file for every level (stdout/stderr if unset)")
    policy: Policy = Field(default=Policy.NONE, description="Rotation policy (none, max_size, daily)")
    max_archive_count: int = Field(default=0, ge=0, description="Files kept by size rotation, live file included")
    max_size_bytes: int = Field(default=0, ge=0, description="Size rotation threshold in bytes")
    profiling: bool = Field(default=False, description="Enable profiling timers")
    timestamp_format: str = Field(default=DEFAULT_TIMESTAMP_FORMAT, description="strftime format of line timestamps")
