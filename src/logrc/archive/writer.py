"""Transactional creation of cohort archives."""

from __future__ import annotations

import logging
import os
import zipfile
from pathlib import Path

from .errors import ArchiveError
from .models import ArchiveResult, Cohort
from .naming import next_archive_path

LOGGER = logging.getLogger(__name__)


def create_archive(cohort: Cohort, path: Path) -> None:
    """Write every cohort member into a new ZIP archive at ``path``.

    The archive is opened with exclusive creation and is either fully
    finalized or removed again. Source files are never modified here.

    Args:
        cohort: Cohort whose members become archive entries.
        path: Archive path; must not exist yet.

    Raises:
        ArchiveError: ``name_collision`` when ``path`` already exists, or
            ``write_failed`` when any entry or the central directory could not
            be written.
    """
    try:
        handle = open(path, "xb")
    except FileExistsError as exc:
        raise ArchiveError("name_collision", path, f"Archive already exists: {path}") from exc
    except OSError as exc:
        raise ArchiveError("write_failed", path, f"Cannot create archive {path}: {exc}") from exc

    try:
        with handle, zipfile.ZipFile(
            handle, "w", compression=zipfile.ZIP_DEFLATED, strict_timestamps=False
        ) as bundle:
            entry_names: set[str] = set()
            for member in cohort.members:
                if member.name in entry_names:
                    raise ArchiveError(
                        "write_failed", path, f"Duplicate entry name '{member.name}' in {path}"
                    )
                entry_names.add(member.name)
                bundle.write(member, arcname=member.name)
    except ArchiveError as exc:
        exc.partial_removed = _discard_partial(path)
        raise
    except Exception as exc:
        raise ArchiveError(
            "write_failed",
            path,
            f"Error creating zip file {path}: {exc}",
            partial_removed=_discard_partial(path),
        ) from exc


def _discard_partial(path: Path) -> bool:
    """Remove a partially written archive and report whether it is gone."""
    try:
        path.unlink()
    except FileNotFoundError:
        pass
    except OSError as exc:
        LOGGER.error("Error removing partial zip file '%s': %s", path, exc)
        return False
    return True


def _stamp_modified(path: Path, cohort: Cohort) -> None:
    seconds = int(cohort.earliest_created_at.timestamp())
    try:
        os.utime(path, (path.stat().st_atime, seconds))
    except OSError as exc:
        LOGGER.error("Error setting modification time of '%s': %s", path, exc)


def write_archive(cohort: Cohort, search_token: str) -> ArchiveResult:
    """Archive a cohort and remove its source files once the archive is committed.

    Args:
        cohort: Cohort produced by the cohort builder.
        search_token: Token embedded in the archive name.

    Returns:
        ArchiveResult: ``sources_removed`` on success, ``cleaned`` when the
            attempt was rolled back, or ``failed`` when a partial archive
            could not be removed.
    """
    result = ArchiveResult(cohort=cohort, state="creating")
    path = next_archive_path(cohort.date_key, cohort.parent, search_token)
    result.path = path

    try:
        result.state = "writing"
        create_archive(cohort, path)
    except ArchiveError as exc:
        LOGGER.error("%s", exc)
        result.state = "cleaned" if exc.partial_removed else "failed"
        result.error = str(exc)
        result.error_kind = exc.kind
        return result

    result.state = "finalized"
    LOGGER.info("Created zip file: '%s'", path)
    _stamp_modified(path, cohort)

    for member in cohort.members:
        try:
            member.unlink()
        except OSError as exc:
            LOGGER.error("Error removing file %s: %s", member, exc)
            result.failed_removals.append(member)
        else:
            LOGGER.info("Removed file: '%s'", member)
            result.removed_sources.append(member)

    result.state = "sources_removed"
    return result


__all__ = ["create_archive", "write_archive"]
