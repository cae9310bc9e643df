"""Configuration models describing LogRC settings."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field

MIN_RETENTION_DAYS = 1
MAX_RETENTION_DAYS = 365


class LogRCBaseModel(BaseModel):
    """Shared configuration for LogRC Pydantic models."""

    model_config = ConfigDict(extra="forbid")


class ApplicationSettings(LogRCBaseModel):
    """Settings for the application itself.

    Attributes:
        name: Application name used for the log file names.
        log_dir: Directory receiving the application's own log files.
        log_retention_days: Days to keep the application's own log files.
    """

    name: str = "LogRC"
    log_dir: str = "log"
    log_retention_days: int = Field(default=30, ge=MIN_RETENTION_DAYS, le=MAX_RETENTION_DAYS)


class LoggingSettings(LogRCBaseModel):
    """Runtime logging configuration.

    Attributes:
        level: Logging verbosity level for both handlers.
        console: Whether log records are mirrored to the terminal.
    """

    level: str = "DEBUG"
    console: bool = True


class DirectorySettings(LogRCBaseModel):
    """One directory to maintain.

    The directory, token and retention range are checked by
    ``check_directory`` rather than by field constraints, so an entry that
    fails only those checks is skipped on its own. A wrong type or a missing
    key still fails validation of the whole file.

    Attributes:
        path: Directory holding the log files.
        filename_contains: Token that file names must contain.
        retention_days: Days before a file is deleted.
        compress: Whether files are bundled into dated archives.
        move_to_path: Optional directory files are relocated to.
    """

    path: str
    filename_contains: str
    retention_days: int
    compress: bool = False
    move_to_path: str = ""


class LogRCConfig(LogRCBaseModel):
    """Top-level configuration struct for LogRC.

    Attributes:
        application: Application-wide settings.
        logging: Logging configuration.
        directories: Ordered directory entries to maintain.
    """

    application: ApplicationSettings = Field(default_factory=ApplicationSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    directories: List[DirectorySettings] = Field(default_factory=list)


__all__ = [
    "LogRCBaseModel",
    "ApplicationSettings",
    "LoggingSettings",
    "DirectorySettings",
    "LogRCConfig",
    "MIN_RETENTION_DAYS",
    "MAX_RETENTION_DAYS",
]
