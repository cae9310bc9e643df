"""Group-and-compress pass over one configured directory."""

from __future__ import annotations

import logging
from pathlib import Path

from logrc.clock import RunClock

from .cohorts import build_cohorts
from .models import CompressReport
from .writer import write_archive

LOGGER = logging.getLogger(__name__)


def group_and_compress(root: Path, search_token: str, clock: RunClock | None = None) -> CompressReport:
    """Bundle every eligible file under ``root`` into one archive per creation date.

    Args:
        root: Directory tree to process.
        search_token: Token the file names must contain; also used in archive names.
        clock: Run clock; captured now when omitted.

    Returns:
        CompressReport: Per-cohort results and the files the classifier skipped.
    """
    clock = clock or RunClock.capture()
    report = CompressReport(root=root)
    cohorts = build_cohorts(root, search_token, clock, skipped=report.skipped)
    LOGGER.debug("Found %d cohort(s) under '%s'", len(cohorts), root)

    for date_key in sorted(cohorts):
        report.results.append(write_archive(cohorts[date_key], search_token))

    return report


__all__ = ["group_and_compress"]
