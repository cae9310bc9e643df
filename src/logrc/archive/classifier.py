"""Decide which files take part in archiving."""

from __future__ import annotations

import os
import stat
from datetime import datetime, timezone
from pathlib import Path

from logrc.clock import RunClock

from .models import Classification, Eligible, FileRecord, Skipped

ARCHIVE_EXTENSIONS = frozenset({"log", "txt"})


def file_created_at(st: os.stat_result) -> datetime:
    """Return the creation instant reported by ``st`` as an aware UTC datetime.

    Platforms that do not expose a birth time through ``os.stat`` fall back to
    the modification time.
    """
    birth = getattr(st, "st_birthtime", None)
    timestamp = birth if birth is not None else st.st_mtime
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


def file_extension(path: Path) -> str:
    return path.suffix[1:] if path.suffix else ""


def classify(path: Path, search_token: str, clock: RunClock) -> Classification:
    """Classify ``path`` for archiving.

    Args:
        path: Candidate file.
        search_token: Case-sensitive substring the file name must contain.
        clock: Run clock supplying "today" and the local offset.

    Returns:
        Classification: ``Eligible`` with the file's record, or ``Skipped`` with a reason.
    """
    try:
        st = path.stat()
    except OSError as exc:
        return Skipped(path=path, reason=f"metadata unavailable: {exc}")

    if not stat.S_ISREG(st.st_mode):
        return Skipped(path=path, reason="not a regular file")
    if search_token not in path.name:
        return Skipped(path=path, reason=f"name does not contain '{search_token}'")

    extension = file_extension(path)
    if extension not in ARCHIVE_EXTENSIONS:
        return Skipped(path=path, reason=f"extension '{extension}' is not archived")

    created = clock.local(file_created_at(st))
    if created.date() == clock.today:
        return Skipped(path=path, reason="created today")

    return Eligible(
        record=FileRecord(
            path=path,
            parent=path.parent,
            created_at=created,
            extension=extension,
        )
    )


__all__ = ["ARCHIVE_EXTENSIONS", "classify", "file_created_at", "file_extension"]
