"""Retention and relocation passes."""

from .models import MoveRecord, RelocationReport, SweepReport
from .relocation import STATUS_FILE_SUFFIX, relocate, status_file_name, write_status_file
from .retention import MAINTAINED_EXTENSIONS, SECONDS_PER_DAY, sweep

__all__ = [
    "MAINTAINED_EXTENSIONS",
    "SECONDS_PER_DAY",
    "STATUS_FILE_SUFFIX",
    "MoveRecord",
    "RelocationReport",
    "SweepReport",
    "relocate",
    "status_file_name",
    "sweep",
    "write_status_file",
]
