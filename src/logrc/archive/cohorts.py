"""Group eligible files into same-day cohorts."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator

from logrc.clock import RunClock

from .classifier import classify
from .models import DATE_KEY_FORMAT, Cohort, Eligible, Skipped

LOGGER = logging.getLogger(__name__)


def walk_files(root: Path) -> Iterator[Path]:
    """Yield every file path below ``root``, skipping unreadable directories."""
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for name in sorted(filenames):
            yield Path(dirpath) / name


def build_cohorts(
    root: Path,
    search_token: str,
    clock: RunClock,
    skipped: list[Skipped] | None = None,
) -> dict[str, Cohort]:
    """Partition the eligible files under ``root`` by creation date.

    Args:
        root: Directory tree to scan recursively.
        search_token: Token the file names must contain.
        clock: Run clock used for "today" and date conversion.
        skipped: Optional list collecting the files the classifier rejected.

    Returns:
        dict[str, Cohort]: Cohorts keyed by ``YYYY-MM-DD`` date key.
    """
    cohorts: dict[str, Cohort] = {}

    for path in walk_files(root):
        verdict = classify(path, search_token, clock)
        if not isinstance(verdict, Eligible):
            if verdict.reason == "created today":
                LOGGER.info("Not compressing file: '%s' because it was made today", path.name)
            elif verdict.reason.startswith("metadata unavailable"):
                LOGGER.error("Skipping file '%s': %s", path, verdict.reason)
            if skipped is not None:
                skipped.append(verdict)
            continue

        record = verdict.record
        date_key = record.created_at.strftime(DATE_KEY_FORMAT)
        cohort = cohorts.get(date_key)
        if cohort is None:
            cohorts[date_key] = Cohort.start(date_key, record)
        elif not cohort.add(record):
            LOGGER.warning(
                "Not compressing file: '%s' because another %s file is named '%s'; "
                "it will be archived on a later run",
                path,
                date_key,
                path.name,
            )

    return cohorts


__all__ = ["build_cohorts", "walk_files"]
