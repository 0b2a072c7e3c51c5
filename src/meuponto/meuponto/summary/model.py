from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..punches.model import Interval, Punch
from ..workcalendar.model import DayResolution


@dataclass(frozen=True)
class DailySummary:
    """Worked vs expected time for one employment on one date."""

    day: date
    employment_id: int
    worked_minutes: int
    expected_minutes: int
    intervals: tuple[Interval, ...] = ()
    punches: tuple[Punch, ...] = ()
    resolution: Optional[DayResolution] = None
    forgiven_minutes: int = 0
    bridge_add_on_minutes: int = 0

    @property
    def balance(self) -> int:
        return self.worked_minutes - self.expected_minutes

    @property
    def punch_count(self) -> int:
        return len(self.punches)

    @property
    def complete(self) -> bool:
        """True iff an even, non-zero number of punches exists."""
        return self.punch_count > 0 and self.punch_count % 2 == 0

    @property
    def has_open_interval(self) -> bool:
        return any(i.is_open for i in self.intervals)

    @property
    def warnings(self) -> tuple[str, ...]:
        return self.resolution.warnings if self.resolution else ()


@dataclass(frozen=True)
class PeriodSummary:
    start: date
    end: date
    days: tuple[DailySummary, ...] = field(default_factory=tuple)

    @property
    def worked_minutes(self) -> int:
        return sum(d.worked_minutes for d in self.days)

    @property
    def expected_minutes(self) -> int:
        return sum(d.expected_minutes for d in self.days)

    @property
    def balance(self) -> int:
        return self.worked_minutes - self.expected_minutes

    @property
    def days_worked(self) -> int:
        return sum(1 for d in self.days if d.complete)

    @property
    def days_with_absence(self) -> int:
        return sum(1 for d in self.days if d.resolution is not None and d.resolution.absence is not None)

    @property
    def workdays_without_punches(self) -> int:
        return sum(1 for d in self.days if d.expected_minutes > 0 and d.punch_count == 0)
