"""Age-based deletion of maintained files."""

from __future__ import annotations

import logging
import stat
import time
from pathlib import Path

from logrc.archive.classifier import file_extension

from .models import SweepReport

LOGGER = logging.getLogger(__name__)

MAINTAINED_EXTENSIONS = frozenset({"log", "txt", "zip"})
SECONDS_PER_DAY = 24 * 60 * 60


def sweep(
    directory: Path,
    search_token: str,
    max_age_days: int,
    now: float | None = None,
) -> SweepReport:
    """Delete files in ``directory`` last modified more than ``max_age_days`` ago.

    Only regular files directly inside ``directory`` whose name contains
    ``search_token`` and whose extension is ``log``, ``txt`` or ``zip`` are
    considered. A file exactly ``max_age_days`` old is kept.

    Args:
        directory: Directory to sweep (not recursive).
        search_token: Token the file names must contain.
        max_age_days: Retention window in days.
        now: POSIX timestamp to measure ages from; defaults to the current time.

    Returns:
        SweepReport: Files removed and files that could not be removed.

    Raises:
        OSError: If ``directory`` cannot be listed.
    """
    current = time.time() if now is None else now
    max_age = max_age_days * SECONDS_PER_DAY
    report = SweepReport(directory=directory)

    for path in sorted(directory.iterdir()):
        if search_token not in path.name or file_extension(path) not in MAINTAINED_EXTENSIONS:
            continue
        try:
            st = path.stat()
        except OSError as exc:
            LOGGER.error("Cannot read metadata for %s: %s", path, exc)
            continue
        if not stat.S_ISREG(st.st_mode):
            continue
        if current - st.st_mtime <= max_age:
            continue

        try:
            path.unlink()
        except OSError as exc:
            LOGGER.error("Error removing file %s: %s", path, exc)
            report.failed.append(path)
        else:
            LOGGER.info("Removed file: '%s'", path)
            report.removed.append(path)

    return report


__all__ = ["MAINTAINED_EXTENSIONS", "SECONDS_PER_DAY", "sweep"]
