"""Result models for the retention and relocation passes."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field


class SweepReport(BaseModel):
    """Outcome of one retention sweep."""

    directory: Path
    removed: List[Path] = Field(default_factory=list)
    failed: List[Path] = Field(default_factory=list)


class MoveRecord(BaseModel):
    """A single relocated file."""

    source: Path
    destination: Path


class RelocationReport(BaseModel):
    """Outcome of one relocation pass.

    Attributes:
        source_dir: Directory the files were moved out of.
        dest_dir: Directory the files were moved into.
        status_file: Manifest written into ``source_dir``.
        moved: Files that were moved.
        kept_today: Files left in place because they were created today.
        failed: Files whose move failed.
    """

    source_dir: Path
    dest_dir: Path
    status_file: Optional[Path] = None
    moved: List[MoveRecord] = Field(default_factory=list)
    kept_today: List[Path] = Field(default_factory=list)
    failed: List[Path] = Field(default_factory=list)


__all__ = ["SweepReport", "MoveRecord", "RelocationReport"]
