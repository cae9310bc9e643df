"""Tests for the retention sweeper and the relocator."""

import os
import shutil
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from logrc.clock import RunClock
from logrc.maintenance import SECONDS_PER_DAY, relocate, status_file_name, sweep

NOW = 1_704_283_200  # 2024-01-03T12:00:00Z


def _aged(path: Path, seconds_old: int) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("entry\n", encoding="utf-8")
    stamp = NOW - seconds_old
    os.utime(path, (stamp, stamp))
    return path


def test_sweep_retention_boundary_is_strict(tmp_path: Path) -> None:
    max_age = 7 * SECONDS_PER_DAY
    boundary = _aged(tmp_path / "boundary-app.log", max_age)
    older = _aged(tmp_path / "older-app.log", max_age + 1)

    report = sweep(tmp_path, "app", 7, now=NOW)

    assert boundary.exists()
    assert not older.exists()
    assert report.removed == [older]


def test_sweep_includes_archives_and_filters_names(tmp_path: Path) -> None:
    old = 30 * SECONDS_PER_DAY
    archive = _aged(tmp_path / "2023-12-01_app-1.zip", old)
    csv = _aged(tmp_path / "app.csv", old)
    foreign = _aged(tmp_path / "other.log", old)
    nested = _aged(tmp_path / "sub" / "app.log", old)

    report = sweep(tmp_path, "app", 7, now=NOW)

    assert report.removed == [archive]
    assert csv.exists()
    assert foreign.exists()
    assert nested.exists()


def test_sweep_missing_directory_raises(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        sweep(tmp_path / "missing", "app", 7, now=NOW)


def test_sweep_continues_after_deletion_failure(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    old = 30 * SECONDS_PER_DAY
    first = _aged(tmp_path / "a-app.log", old)
    second = _aged(tmp_path / "b-app.log", old)
    original_unlink = Path.unlink

    def stubborn_unlink(self: Path, *args, **kwargs) -> None:
        if self.name == "a-app.log":
            raise PermissionError("locked")
        original_unlink(self, *args, **kwargs)

    monkeypatch.setattr(Path, "unlink", stubborn_unlink)

    report = sweep(tmp_path, "app", 7, now=NOW)

    assert report.failed == [first]
    assert report.removed == [second]


def test_relocate_moves_old_files_and_writes_status(
    tmp_path: Path, clock: RunClock, make_file
) -> None:
    source = tmp_path / "source"
    dest = tmp_path / "dest"
    dest.mkdir()
    old = datetime(2024, 1, 1, tzinfo=timezone.utc)
    make_file(source / "a-app.log", old)
    make_file(source / "2023-12-31_app-1.zip", old)
    make_file(source / "today-app.txt", clock.now - timedelta(hours=2))
    make_file(source / "app.csv", old)

    report = relocate(source, dest, "app", clock)

    assert sorted(path.name for path in dest.iterdir()) == ["2023-12-31_app-1.zip", "a-app.log"]
    assert report.kept_today == [source / "today-app.txt"]
    assert (source / "app.csv").exists()

    status = source / status_file_name("app")
    assert status.name == "app files have been moved.status"
    text = status.read_text(encoding="utf-8")
    assert "files older than 2024-01-03 were moved to" in text
    assert str(dest) in text
    assert "*app*.[log|txt|zip]" in text
    assert "\n" not in text


def test_relocate_overwrites_previous_status(tmp_path: Path, clock: RunClock) -> None:
    source = tmp_path / "source"
    dest = tmp_path / "dest"
    source.mkdir()
    dest.mkdir()
    (source / status_file_name("app")).write_text("stale", encoding="utf-8")

    relocate(source, dest, "app", clock)

    assert "stale" not in (source / status_file_name("app")).read_text(encoding="utf-8")


def test_relocate_continues_after_move_failure(
    tmp_path: Path, clock: RunClock, make_file, monkeypatch: pytest.MonkeyPatch
) -> None:
    source = tmp_path / "source"
    dest = tmp_path / "dest"
    dest.mkdir()
    old = datetime(2024, 1, 1, tzinfo=timezone.utc)
    make_file(source / "a-app.log", old)
    make_file(source / "b-app.log", old)
    original_move = shutil.move

    def flaky_move(src: str, dst: str, *args, **kwargs):
        if src.endswith("a-app.log"):
            raise PermissionError("in use")
        return original_move(src, dst, *args, **kwargs)

    monkeypatch.setattr(shutil, "move", flaky_move)

    report = relocate(source, dest, "app", clock)

    assert report.failed == [source / "a-app.log"]
    assert [record.destination for record in report.moved] == [dest / "b-app.log"]
    assert (source / "a-app.log").exists()
