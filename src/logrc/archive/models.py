"""Data models for the grouping and archiving engine."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field

DATE_KEY_FORMAT = "%Y-%m-%d"

ArchiveState = Literal[
    "pending",
    "creating",
    "writing",
    "finalized",
    "sources_removed",
    "failed",
    "cleaned",
]


class FileRecord(BaseModel):
    """Metadata captured for a candidate file at scan time.

    Attributes:
        path: Absolute path of the file.
        parent: Directory containing the file.
        created_at: Creation instant expressed in the run's local offset.
        extension: Extension without the leading dot.
    """

    path: Path
    parent: Path
    created_at: datetime
    extension: str


class Eligible(BaseModel):
    """Classifier verdict for a file that should be archived."""

    record: FileRecord

    @property
    def eligible(self) -> bool:
        return True


class Skipped(BaseModel):
    """Classifier verdict for a file left alone, with the reason."""

    path: Path
    reason: str

    @property
    def eligible(self) -> bool:
        return False


Classification = Union[Eligible, Skipped]


class Cohort(BaseModel):
    """Files sharing a creation date within one scanned directory tree.

    Attributes:
        date_key: ``YYYY-MM-DD`` creation date shared by every member.
        parent: Directory of the first member; the archive is written here.
        members: Member paths in insertion order.
        earliest_created_at: Oldest creation instant among the members.
        deferred: Files left for a later run because a member already uses
            their base name.
    """

    date_key: str
    parent: Path
    members: List[Path] = Field(default_factory=list)
    earliest_created_at: datetime
    deferred: List[Path] = Field(default_factory=list)

    @classmethod
    def start(cls, date_key: str, record: FileRecord) -> "Cohort":
        return cls(
            date_key=date_key,
            parent=record.parent,
            members=[record.path],
            earliest_created_at=record.created_at,
        )

    def add(self, record: FileRecord) -> bool:
        """Append a member and keep ``earliest_created_at`` at the minimum.

        Archive entries are stored under their base name, so a file whose
        name is already taken is deferred instead and ``False`` is returned.
        """
        if any(member.name == record.path.name for member in self.members):
            self.deferred.append(record.path)
            return False
        self.members.append(record.path)
        if record.created_at < self.earliest_created_at:
            self.earliest_created_at = record.created_at
        return True


class ArchiveResult(BaseModel):
    """Terminal outcome of archiving one cohort.

    Attributes:
        cohort: Cohort that was processed.
        path: Archive path that was attempted, if naming succeeded.
        state: ``sources_removed`` on success; ``cleaned`` on failure, or
            ``failed`` when a partial archive could not be removed.
        error: Failure description when the archive was not committed.
        error_kind: ``name_collision`` or ``write_failed`` on failure.
        removed_sources: Source files deleted after commit.
        failed_removals: Source files that could not be deleted after commit.
    """

    cohort: Cohort
    path: Optional[Path] = None
    state: ArchiveState = "pending"
    error: Optional[str] = None
    error_kind: Optional[str] = None
    removed_sources: List[Path] = Field(default_factory=list)
    failed_removals: List[Path] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.state == "sources_removed"


class CompressReport(BaseModel):
    """Aggregated results of one group-and-compress pass."""

    root: Path
    results: List[ArchiveResult] = Field(default_factory=list)
    skipped: List[Skipped] = Field(default_factory=list)

    @property
    def archives_created(self) -> int:
        return sum(1 for result in self.results if result.ok)

    @property
    def archives_failed(self) -> int:
        return sum(1 for result in self.results if not result.ok)

    @property
    def files_archived(self) -> int:
        return sum(len(result.cohort.members) for result in self.results if result.ok)

    @property
    def files_deferred(self) -> int:
        return sum(len(result.cohort.deferred) for result in self.results)


__all__ = [
    "DATE_KEY_FORMAT",
    "ArchiveState",
    "FileRecord",
    "Eligible",
    "Skipped",
    "Classification",
    "Cohort",
    "ArchiveResult",
    "CompressReport",
]
