"""Per-directory maintenance loop."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field

from logrc.archive import CompressReport, group_and_compress
from logrc.clock import RunClock
from logrc.config import ApplicationSettings, DirectorySettings, LogRCConfig, check_directory
from logrc.maintenance import RelocationReport, SweepReport, relocate, sweep

LOGGER = logging.getLogger(__name__)


class DirectoryOutcome(BaseModel):
    """Everything that happened to one configured directory.

    Attributes:
        path: Configured directory path.
        token: Configured file name token.
        problems: Validation problems; when present nothing else ran.
        sweep: Retention sweep of ``path``.
        compress: Group-and-compress pass, when enabled.
        relocation: Relocation pass, when a destination is configured.
        destination_sweep: Retention sweep of the relocation destination.
        errors: Errors that stopped individual passes.
    """

    path: str
    token: str
    problems: List[str] = Field(default_factory=list)
    sweep: Optional[SweepReport] = None
    compress: Optional[CompressReport] = None
    relocation: Optional[RelocationReport] = None
    destination_sweep: Optional[SweepReport] = None
    errors: List[str] = Field(default_factory=list)

    @property
    def skipped(self) -> bool:
        return bool(self.problems)


class RunSummary(BaseModel):
    """Aggregated outcome of a maintenance run."""

    application_sweep: Optional[SweepReport] = None
    directories: List[DirectoryOutcome] = Field(default_factory=list)
    elapsed_seconds: int = 0

    @property
    def error_count(self) -> int:
        return sum(len(outcome.errors) for outcome in self.directories)


class MaintenanceRunner:
    """Apply retention, compression and relocation to every configured directory."""

    def __init__(self, clock: RunClock | None = None) -> None:
        self.clock = clock or RunClock.capture()

    def run(self, config: LogRCConfig) -> RunSummary:
        """Process every directory entry in order.

        A failure while processing one directory is logged and never stops
        the remaining directories.
        """
        started = time.monotonic()
        summary = RunSummary()
        summary.application_sweep = self.sweep_application_logs(config.application)

        for entry in config.directories:
            summary.directories.append(self.process_directory(entry))

        summary.elapsed_seconds = int(time.monotonic() - started)
        LOGGER.info("Application ran for: %d second(s)", summary.elapsed_seconds)
        return summary

    def sweep_application_logs(self, application: ApplicationSettings) -> SweepReport | None:
        log_dir = Path(application.log_dir)
        LOGGER.info("Application log retention: %d days", application.log_retention_days)
        try:
            return sweep(
                log_dir, application.name, application.log_retention_days, now=self._now()
            )
        except OSError as exc:
            LOGGER.error("Failed to remove application logs past retention: %s", exc)
            return None

    def process_directory(self, entry: DirectorySettings) -> DirectoryOutcome:
        """Run every enabled pass for one directory entry."""
        outcome = DirectoryOutcome(path=entry.path, token=entry.filename_contains)
        outcome.problems = check_directory(entry)
        if outcome.problems:
            for problem in outcome.problems:
                LOGGER.warning("%s", problem)
            return outcome
        LOGGER.info(
            "Directory config settings are correct for Path '%s', Name '%s'",
            entry.path,
            entry.filename_contains,
        )

        root = Path(entry.path)
        token = entry.filename_contains
        outcome.sweep = self._sweep(root, token, entry.retention_days, outcome)

        if entry.compress:
            LOGGER.info("Compressing files older than today for '%s' matching '%s'", root, token)
            try:
                outcome.compress = group_and_compress(root, token, self.clock)
            except OSError as exc:
                LOGGER.error("There was an issue compressing the files: %s", exc)
                outcome.errors.append(f"compress: {exc}")
            else:
                LOGGER.info("Completed file compression")
        else:
            LOGGER.info(
                "Skipping file compression for '%s' because compress setting is false", root
            )

        destination = Path(entry.move_to_path) if entry.move_to_path.strip() else None
        if destination is None or not destination.is_dir():
            LOGGER.info(
                "Skipping moving logs to move_to_path because directory does not exist or is blank."
            )
            return outcome

        LOGGER.info("Moving files older than today from '%s' to '%s'", root, destination)
        try:
            outcome.relocation = relocate(root, destination, token, self.clock)
        except OSError as exc:
            LOGGER.error("There was an issue moving the files: %s", exc)
            outcome.errors.append(f"relocate: {exc}")
        else:
            LOGGER.info("Completed file move")

        outcome.destination_sweep = self._sweep(destination, token, entry.retention_days, outcome)
        return outcome

    def _now(self) -> float:
        return self.clock.now.timestamp()

    def _sweep(
        self,
        directory: Path,
        token: str,
        days: int,
        outcome: DirectoryOutcome,
    ) -> SweepReport | None:
        LOGGER.info(
            "Removing files with a date modified older than %d days in '%s' matching '%s'",
            days,
            directory,
            token,
        )
        try:
            report = sweep(directory, token, days, now=self._now())
        except OSError as exc:
            LOGGER.error("There was an issue removing the files: %s", exc)
            outcome.errors.append(f"sweep {directory}: {exc}")
            return None
        LOGGER.info("Completed file retention")
        return report


__all__ = ["DirectoryOutcome", "MaintenanceRunner", "RunSummary"]
