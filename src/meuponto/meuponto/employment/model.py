from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, time
from typing import Optional

from ..core import constants
from ..core.enums import ClosureKind, CycleUnit
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class DaySchedule:
    """Expected workload for one weekday (0 = Monday).

    Break fields left as None fall back to the employment-wide values.
    """

    weekday: int
    target_minutes: int
    min_break_minutes: Optional[int] = None
    break_tolerance_minutes: Optional[int] = None
    ideal_break_start: Optional[time] = None


def default_workweek(target_minutes: int = constants.DEFAULT_DAILY_TARGET_MINUTES) -> tuple[DaySchedule, ...]:
    return tuple(DaySchedule(weekday=d, target_minutes=target_minutes) for d in range(5))


@dataclass(frozen=True)
class BreakPolicy:
    min_break_minutes: int
    tolerance_minutes: int
    ideal_break_start: Optional[time] = None


@dataclass(frozen=True)
class EmploymentRules:
    """Per-employment configuration, valid from `effective_from` onwards."""

    employment_id: int
    effective_from: date = date.min
    daily_target_minutes: int = constants.DEFAULT_DAILY_TARGET_MINUTES
    max_shift_minutes: int = constants.DEFAULT_MAX_SHIFT_MINUTES
    min_interjourney_rest_minutes: int = constants.DEFAULT_INTERJOURNEY_REST_MINUTES
    min_break_minutes: int = constants.DEFAULT_MIN_BREAK_MINUTES
    break_tolerance_minutes: int = constants.DEFAULT_BREAK_TOLERANCE_MINUTES
    ideal_break_start: Optional[time] = None
    week_start: int = 0
    rh_period_start_day: int = constants.DEFAULT_RH_PERIOD_START_DAY
    time_bank_enabled: bool = False
    cycle_length: int = 0
    cycle_unit: CycleUnit = CycleUnit.MONTHS
    cycle_start: Optional[date] = None
    reset_weekly: bool = False
    reset_monthly: bool = False
    max_punches: int = constants.DEFAULT_MAX_PUNCHES
    min_punch_spacing_minutes: int = constants.DEFAULT_MIN_PUNCH_SPACING_MINUTES
    state: Optional[str] = None
    municipality: Optional[str] = None
    schedules: Optional[tuple[DaySchedule, ...]] = None

    def __post_init__(self) -> None:
        if self.daily_target_minutes < 0:
            raise ValidationError("daily_target_minutes must not be negative")
        if self.max_punches <= 0:
            raise ValidationError("max_punches must be positive")
        if not 0 <= self.week_start <= 6:
            raise ValidationError("week_start must be a weekday number (0-6)")
        if self.cycle_length < 0:
            raise ValidationError("cycle_length must not be negative")
        if self.schedules is None:
            object.__setattr__(self, "schedules", default_workweek(self.daily_target_minutes))

    @property
    def has_time_bank(self) -> bool:
        return self.time_bank_enabled and self.cycle_length > 0

    @property
    def rh_start_day(self) -> int:
        return min(max(self.rh_period_start_day, constants.RH_PERIOD_MIN_DAY), constants.RH_PERIOD_MAX_DAY)

    def schedule_for(self, day: date) -> Optional[DaySchedule]:
        for schedule in self.schedules or ():
            if schedule.weekday == day.weekday():
                return schedule
        return None

    def scheduled_minutes(self, day: date) -> int:
        schedule = self.schedule_for(day)
        return schedule.target_minutes if schedule else 0

    def break_policy(self, day: date) -> BreakPolicy:
        schedule = self.schedule_for(day)
        if schedule is None:
            return BreakPolicy(self.min_break_minutes, self.break_tolerance_minutes, self.ideal_break_start)
        return BreakPolicy(
            min_break_minutes=schedule.min_break_minutes if schedule.min_break_minutes is not None else self.min_break_minutes,
            tolerance_minutes=(
                schedule.break_tolerance_minutes
                if schedule.break_tolerance_minutes is not None
                else self.break_tolerance_minutes
            ),
            ideal_break_start=schedule.ideal_break_start or self.ideal_break_start,
        )

    def relevant_closure_kinds(self) -> frozenset[ClosureKind]:
        """Closure kinds that reset the running time-bank balance."""
        kinds = {ClosureKind.TIME_BANK_CYCLE}
        if self.reset_weekly:
            kinds.add(ClosureKind.WEEKLY)
        if self.reset_monthly:
            kinds.add(ClosureKind.MONTHLY)
        return frozenset(kinds)

    def with_cycle_start(self, cycle_start: date) -> "EmploymentRules":
        return replace(self, cycle_start=cycle_start)


@dataclass(frozen=True)
class RulesHistory:
    """All configuration versions of one employment, oldest first."""

    employment_id: int
    versions: tuple[EmploymentRules, ...] = field(default_factory=tuple)

    def effective_on(self, day: date) -> Optional[EmploymentRules]:
        """The version in force on `day`, never a later one."""
        chosen: Optional[EmploymentRules] = None
        for version in sorted(self.versions, key=lambda v: v.effective_from):
            if version.effective_from <= day:
                chosen = version
        return chosen
