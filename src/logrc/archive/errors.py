"""Archive engine errors."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

ArchiveErrorKind = Literal["name_collision", "write_failed"]


class ArchiveError(Exception):
    """Raised when a cohort archive could not be committed.

    Attributes:
        kind: ``name_collision`` when exclusive creation failed, otherwise ``write_failed``.
        path: Archive path that was being created.
        partial_removed: False when a partially written archive is still on disk.
    """

    def __init__(
        self,
        kind: ArchiveErrorKind,
        path: Path,
        message: str,
        *,
        partial_removed: bool = True,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.path = path
        self.partial_removed = partial_removed
