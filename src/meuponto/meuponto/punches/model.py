from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import minutes_between


@dataclass(frozen=True)
class Punch:
    """Domain entity: a single clock-in/out event."""

    punch_id: int
    employment_id: int
    timestamp: datetime
    considered_timestamp: Optional[datetime] = None
    manually_edited: bool = False
    note: Optional[str] = None

    @property
    def day(self) -> date:
        return self.timestamp.date()

    @property
    def considered(self) -> datetime:
        """Timestamp used for balance math (tolerance-adjusted when set)."""
        return self.considered_timestamp or self.timestamp

    @property
    def is_adjusted(self) -> bool:
        return self.considered != self.timestamp

    def with_considered(self, considered: Optional[datetime]) -> "Punch":
        return replace(self, considered_timestamp=considered)


@dataclass(frozen=True)
class Interval:
    """A clock-in paired with its clock-out; open while the clock-out is missing."""

    clock_in: Punch
    clock_out: Optional[Punch]

    @property
    def is_open(self) -> bool:
        return self.clock_out is None

    @property
    def minutes(self) -> int:
        if self.clock_out is None:
            return 0
        return minutes_between(self.clock_in.considered, self.clock_out.considered)


def sort_by_actual(punches) -> list[Punch]:
    return sorted(punches, key=lambda p: (p.timestamp, p.punch_id))


def sort_by_considered(punches) -> list[Punch]:
    return sorted(punches, key=lambda p: (p.considered, p.timestamp, p.punch_id))
