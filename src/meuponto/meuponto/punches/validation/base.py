from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional, Sequence

from ...core.enums import PunchKind, ValidationRule
from ...employment.model import EmploymentRules
from ...workcalendar.model import DayResolution
from ..model import Punch


@dataclass(frozen=True)
class PunchCandidate:
    """A punch the caller wants to register, not yet persisted."""

    employment_id: int
    day: date
    at: time
    declared_kind: Optional[PunchKind] = None
    allow_future_time: bool = False
    allow_non_working_day: bool = False

    @property
    def timestamp(self) -> datetime:
        return datetime.combine(self.day, self.at.replace(second=0, microsecond=0))


@dataclass(frozen=True)
class Violation:
    rule: ValidationRule
    message: str


@dataclass(frozen=True)
class ValidationContext:
    """Snapshot a rule is checked against: candidate, the day's punches and the rules in force."""

    candidate: PunchCandidate
    existing: tuple[Punch, ...]
    rules: EmploymentRules
    now: datetime
    resolution: Optional[DayResolution] = None
    previous_punch: Optional[Punch] = None

    @property
    def insertion_index(self) -> int:
        """Position the candidate would take among the day's punches."""
        at = self.candidate.timestamp
        return sum(1 for p in self.existing if p.timestamp < at)

    @property
    def expected_kind(self) -> PunchKind:
        return PunchKind.for_index(self.insertion_index)


class PunchRule(ABC):
    """Strategy Pattern: one independent acceptance check for a new punch."""

    rule: ValidationRule

    @abstractmethod
    def check(self, ctx: ValidationContext) -> Optional[Violation]:
        raise NotImplementedError

    def violation(self, message: str) -> Violation:
        return Violation(rule=self.rule, message=message)
