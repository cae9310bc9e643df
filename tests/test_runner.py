"""Tests for the per-directory maintenance loop and logging setup."""

import logging
import os
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from logrc import runner as runner_module
from logrc.clock import RunClock
from logrc.config import LoggingSettings, LogRCConfig
from logrc.logs import PACKAGE_LOGGER, configure_logging
from logrc.runner import MaintenanceRunner


def _config(tmp_path: Path, directories: list[dict]) -> LogRCConfig:
    return LogRCConfig.model_validate(
        {
            "application": {"log_dir": str(tmp_path / "log"), "log_retention_days": 30},
            "directories": directories,
        }
    )


def _age_days(path: Path, clock: RunClock, days: int) -> None:
    stamp = (clock.now - timedelta(days=days)).timestamp()
    os.utime(path, (stamp, stamp))


def test_run_compresses_relocates_and_sweeps(tmp_path: Path, clock: RunClock, make_file) -> None:
    source = tmp_path / "source"
    dest = tmp_path / "dest"
    dest.mkdir()
    make_file(source / "a-app.log", datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc))
    make_file(source / "b-app.log", datetime(2024, 1, 2, 8, 0, tzinfo=timezone.utc))
    config = _config(
        tmp_path,
        [
            {
                "path": str(source),
                "filename_contains": "app",
                "retention_days": 30,
                "compress": True,
                "move_to_path": str(dest),
            }
        ],
    )

    summary = MaintenanceRunner(clock).run(config)

    [outcome] = summary.directories
    assert outcome.errors == []
    assert outcome.compress.archives_created == 2
    moved = sorted(record.destination.name for record in outcome.relocation.moved)
    assert moved == ["2024-01-01_app-1.zip", "2024-01-02_app-1.zip"]
    assert outcome.destination_sweep is not None
    assert (source / "app files have been moved.status").exists()


def test_invalid_directory_is_skipped_and_others_continue(
    tmp_path: Path, clock: RunClock, make_file
) -> None:
    valid = tmp_path / "valid"
    old_file = make_file(valid / "old-app.log", datetime(2023, 1, 1, tzinfo=timezone.utc))
    _age_days(old_file, clock, 40)
    config = _config(
        tmp_path,
        [
            {"path": str(tmp_path / "missing"), "filename_contains": "app", "retention_days": 5},
            {"path": str(valid), "filename_contains": "bad_token", "retention_days": 5},
            {"path": str(valid), "filename_contains": "app", "retention_days": 5},
        ],
    )

    summary = MaintenanceRunner(clock).run(config)

    first, second, third = summary.directories
    assert first.skipped and second.skipped
    assert not third.skipped
    assert third.sweep.removed == [old_file]
    assert third.compress is None
    assert third.relocation is None


def test_failure_in_one_directory_does_not_stop_the_next(
    tmp_path: Path, clock: RunClock, make_file, monkeypatch: pytest.MonkeyPatch
) -> None:
    first = tmp_path / "first"
    second = tmp_path / "second"
    make_file(first / "app.log", datetime(2024, 1, 1, tzinfo=timezone.utc))
    make_file(second / "app.log", datetime(2024, 1, 1, tzinfo=timezone.utc))
    original_sweep = runner_module.sweep

    def exploding_sweep(directory: Path, *args, **kwargs):
        if directory == first:
            raise PermissionError("denied")
        return original_sweep(directory, *args, **kwargs)

    monkeypatch.setattr("logrc.runner.sweep", exploding_sweep)
    entries = [
        {"path": str(path), "filename_contains": "app", "retention_days": 5, "compress": True}
        for path in (first, second)
    ]

    summary = MaintenanceRunner(clock).run(_config(tmp_path, entries))

    assert summary.error_count == 1
    assert "denied" in summary.directories[0].errors[0]
    assert summary.directories[0].compress.archives_created == 1
    assert summary.directories[1].errors == []
    assert (second / "2024-01-01_app-1.zip").exists()


def test_application_logs_past_retention_are_removed(tmp_path: Path, clock: RunClock) -> None:
    log_dir = tmp_path / "log"
    log_dir.mkdir()
    stale = log_dir / "2023-01-01_LogRC-1.log"
    stale.write_text("old run\n", encoding="utf-8")
    _age_days(stale, clock, 31)

    summary = MaintenanceRunner(clock).run(_config(tmp_path, []))

    assert summary.application_sweep.removed == [stale]


def test_configure_logging_writes_dated_files(tmp_path: Path, clock: RunClock) -> None:
    settings = LoggingSettings(level="INFO", console=False)

    first = configure_logging(settings, tmp_path / "log", "LogRC", clock)
    logging.getLogger("logrc.tests").info("hello from the test")
    second = configure_logging(settings, tmp_path / "log", "LogRC", clock)

    assert first.name == "2024-01-03_LogRC-1.log"
    assert second.name == "2024-01-03_LogRC-2.log"
    assert "hello from the test" in first.read_text(encoding="utf-8")
    installed = [
        handler
        for handler in logging.getLogger(PACKAGE_LOGGER).handlers
        if isinstance(handler, logging.FileHandler)
    ]
    assert [Path(handler.baseFilename) for handler in installed] == [second]
    configure_logging(settings, None, "LogRC", clock)
