"""Collision-free names for dated bundles."""

from __future__ import annotations

from pathlib import Path


def next_sequenced_path(directory: Path, prefix: str, suffix: str) -> Path:
    """Return ``directory/{prefix}-{n}{suffix}`` for the smallest free ``n >= 1``."""
    counter = 1
    candidate = directory / f"{prefix}-{counter}{suffix}"
    while candidate.exists():
        counter += 1
        candidate = directory / f"{prefix}-{counter}{suffix}"
    return candidate


def next_archive_path(date_key: str, directory: Path, search_token: str) -> Path:
    """Return the first ``{date_key}_{search_token}-{n}.zip`` absent from ``directory``.

    The probe only avoids names left by earlier runs. Callers must still open
    the result with exclusive creation.
    """
    return next_sequenced_path(directory, f"{date_key}_{search_token}", ".zip")


__all__ = ["next_archive_path", "next_sequenced_path"]
