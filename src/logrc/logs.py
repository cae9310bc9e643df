"""Logging setup for LogRC runs."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.logging import RichHandler

from logrc.archive.models import DATE_KEY_FORMAT
from logrc.archive.naming import next_sequenced_path
from logrc.clock import RunClock
from logrc.config.models import LoggingSettings

PACKAGE_LOGGER = "logrc"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

_INSTALLED_MARKER = "_logrc_handler"


def log_file_path(log_dir: Path, app_name: str, clock: RunClock) -> Path:
    """Return the first unused ``{YYYY-MM-DD}_{app_name}-{n}.log`` in ``log_dir``."""
    return next_sequenced_path(log_dir, f"{clock.today.strftime(DATE_KEY_FORMAT)}_{app_name}", ".log")


def configure_logging(
    settings: LoggingSettings,
    log_dir: Path | None,
    app_name: str,
    clock: RunClock | None = None,
) -> Path | None:
    """Send package log records to a fresh dated log file and, optionally, the terminal.

    Handlers installed by a previous call are removed first.

    Args:
        settings: Level and console preferences.
        log_dir: Directory receiving the log file; created when missing. When
            None, records only go to the terminal.
        app_name: Application name embedded in the log file name.
        clock: Run clock used to date the log file.

    Returns:
        Path | None: Log file that receives this run's records, if any.
    """
    clock = clock or RunClock.capture()
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if getattr(handler, _INSTALLED_MARKER, False):
            logger.removeHandler(handler)
            handler.close()

    level = logging.getLevelName(settings.level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logger.setLevel(level)

    path = None
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        path = log_file_path(log_dir, app_name, clock)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATE_FORMAT))
        setattr(file_handler, _INSTALLED_MARKER, True)
        logger.addHandler(file_handler)

    if settings.console:
        console_handler = RichHandler(show_path=False, rich_tracebacks=True)
        setattr(console_handler, _INSTALLED_MARKER, True)
        logger.addHandler(console_handler)

    return path


__all__ = ["configure_logging", "log_file_path"]
