"""Shared fixtures for LogRC tests."""

from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

import pytest

from logrc.clock import RunClock

TODAY = datetime(2024, 1, 3, 12, 0, tzinfo=timezone.utc)


def _mtime_as_creation(st: os.stat_result) -> datetime:
    return datetime.fromtimestamp(st.st_mtime, tz=timezone.utc)


@pytest.fixture(autouse=True)
def creation_from_mtime(monkeypatch: pytest.MonkeyPatch) -> None:
    """Read creation times from mtime so tests can set them on any platform."""
    monkeypatch.setattr("logrc.archive.classifier.file_created_at", _mtime_as_creation)
    monkeypatch.setattr("logrc.maintenance.relocation.file_created_at", _mtime_as_creation)


@pytest.fixture
def clock() -> RunClock:
    return RunClock.at(TODAY)


@pytest.fixture
def make_file() -> Callable[..., Path]:
    """Return a factory writing a file with a given creation instant."""

    def _make(path: Path, created: datetime, content: str = "line\n") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        stamp = created.timestamp()
        os.utime(path, (stamp, stamp))
        return path

    return _make
