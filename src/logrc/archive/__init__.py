"""Grouping and archiving engine."""

from .classifier import ARCHIVE_EXTENSIONS, classify, file_created_at
from .cohorts import build_cohorts
from .errors import ArchiveError
from .models import (
    ArchiveResult,
    Classification,
    Cohort,
    CompressReport,
    Eligible,
    FileRecord,
    Skipped,
)
from .naming import next_archive_path, next_sequenced_path
from .pipeline import group_and_compress
from .writer import create_archive, write_archive

__all__ = [
    "ARCHIVE_EXTENSIONS",
    "ArchiveError",
    "ArchiveResult",
    "Classification",
    "Cohort",
    "CompressReport",
    "Eligible",
    "FileRecord",
    "Skipped",
    "build_cohorts",
    "classify",
    "create_archive",
    "file_created_at",
    "group_and_compress",
    "next_archive_path",
    "next_sequenced_path",
    "write_archive",
]
