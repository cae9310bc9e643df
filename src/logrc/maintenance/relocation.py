"""Relocation of maintained files to a secondary directory."""

from __future__ import annotations

import logging
import os
import shutil
import stat
from datetime import date
from pathlib import Path

from logrc.archive.classifier import file_created_at, file_extension
from logrc.clock import RunClock

from .models import MoveRecord, RelocationReport
from .retention import MAINTAINED_EXTENSIONS

LOGGER = logging.getLogger(__name__)

STATUS_FILE_SUFFIX = "files have been moved.status"


def status_file_name(search_token: str) -> str:
    return f"{search_token} {STATUS_FILE_SUFFIX}"


def write_status_file(source_dir: Path, search_token: str, dest_dir: Path, today: date) -> Path:
    """Write the relocation manifest into ``source_dir``, replacing any previous one.

    Raises:
        OSError: If the previous manifest cannot be removed or the new one written.
    """
    path = source_dir / status_file_name(search_token)
    pattern = f"{source_dir}{os.sep}*{search_token}*.[log|txt|zip]"
    content = f"'{pattern}' files older than {today.isoformat()} were moved to '{dest_dir}'"

    path.unlink(missing_ok=True)
    path.write_text(content, encoding="utf-8")
    LOGGER.info("Created a status file at '%s'", path)
    return path


def relocate(
    source_dir: Path,
    dest_dir: Path,
    search_token: str,
    clock: RunClock | None = None,
) -> RelocationReport:
    """Move matching files not created today from ``source_dir`` to ``dest_dir``.

    Args:
        source_dir: Directory to move files out of (not recursive).
        dest_dir: Existing directory receiving the files.
        search_token: Token the file names must contain.
        clock: Run clock; captured now when omitted.

    Returns:
        RelocationReport: Manifest path plus moved, kept and failed files.

    Raises:
        OSError: If the manifest cannot be written or ``source_dir`` cannot be listed.
    """
    clock = clock or RunClock.capture()
    report = RelocationReport(source_dir=source_dir, dest_dir=dest_dir)
    report.status_file = write_status_file(source_dir, search_token, dest_dir, clock.today)

    for path in sorted(source_dir.iterdir()):
        if file_extension(path) not in MAINTAINED_EXTENSIONS or search_token not in path.name:
            continue
        try:
            st = path.stat()
        except OSError as exc:
            LOGGER.error("Cannot read metadata for %s: %s", path, exc)
            continue
        if not stat.S_ISREG(st.st_mode):
            continue

        if clock.local_date(file_created_at(st)) == clock.today:
            LOGGER.info("Not moving file: '%s' because it was made today", path.name)
            report.kept_today.append(path)
            continue

        destination = dest_dir / path.name
        try:
            shutil.move(str(path), str(destination))
        except OSError as exc:
            LOGGER.error("Error moving file '%s' to '%s': %s", path, destination, exc)
            report.failed.append(path)
        else:
            LOGGER.info("Moved file: '%s' to '%s'", path, destination)
            report.moved.append(MoveRecord(source=path, destination=destination))

    return report


__all__ = ["STATUS_FILE_SUFFIX", "relocate", "status_file_name", "write_status_file"]
