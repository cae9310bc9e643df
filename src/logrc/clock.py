"""Run-scoped view of the local clock."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone, tzinfo


@dataclass(frozen=True, slots=True)
class RunClock:
    """Local time frozen at the start of a run.

    The UTC offset is captured once so every date comparison made during the
    run agrees, even when the run crosses a DST transition.

    Attributes:
        now: Aware local instant captured at run start.
        offset: Fixed local UTC offset in effect at ``now``.
    """

    now: datetime
    offset: tzinfo

    @classmethod
    def capture(cls) -> "RunClock":
        """Freeze the current local time and offset."""
        now = datetime.now().astimezone()
        return cls.at(now)

    @classmethod
    def at(cls, moment: datetime) -> "RunClock":
        """Build a clock pinned to an aware ``moment``."""
        if moment.tzinfo is None:
            raise ValueError("RunClock requires a timezone-aware datetime.")
        offset = timezone(moment.utcoffset())  # type: ignore[arg-type]
        return cls(now=moment.astimezone(offset), offset=offset)

    @property
    def today(self) -> date:
        return self.now.date()

    def local(self, instant: datetime) -> datetime:
        """Express ``instant`` in the run's local offset."""
        return instant.astimezone(self.offset)

    def local_date(self, instant: datetime) -> date:
        return self.local(instant).date()


__all__ = ["RunClock"]
