from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import AbsenceType, DayKind, HolidayKind, HolidayRecurrence, HolidayScope
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class Holiday:
    """Domain entity: a holiday, optional day or bridge day.

    Annual holidays carry month/day only; single-year holidays carry an
    explicit date and the matching reference year.
    """

    holiday_id: int
    name: str
    kind: HolidayKind
    recurrence: HolidayRecurrence = HolidayRecurrence.ANNUAL
    scope: HolidayScope = HolidayScope.GLOBAL
    month: Optional[int] = None
    day: Optional[int] = None
    specific_date: Optional[date] = None
    reference_year: Optional[int] = None
    state: Optional[str] = None
    municipality: Optional[str] = None
    employment_id: Optional[int] = None
    active: bool = True
    note: Optional[str] = None

    def __post_init__(self) -> None:
        if self.recurrence == HolidayRecurrence.ANNUAL:
            if self.month is None or self.day is None:
                raise ValidationError(f"Annual holiday '{self.name}' needs month and day")
            if self.specific_date is not None or self.reference_year is not None:
                raise ValidationError(f"Annual holiday '{self.name}' must not carry a specific date")
            # 2000 is a leap year, so 29/02 is accepted
            try:
                date(2000, self.month, self.day)
            except ValueError as e:
                raise ValidationError(f"Invalid month/day for holiday '{self.name}'") from e
        else:
            if self.specific_date is None or self.reference_year is None:
                raise ValidationError(f"Single-year holiday '{self.name}' needs a date and reference year")
            if self.specific_date.year != self.reference_year:
                raise ValidationError(f"Reference year of holiday '{self.name}' does not match its date")
            if self.month is not None or self.day is not None:
                raise ValidationError(f"Single-year holiday '{self.name}' must not carry month/day")
        if self.scope == HolidayScope.EMPLOYMENT and self.employment_id is None:
            raise ValidationError(f"Employment-specific holiday '{self.name}' needs an employment id")

    @classmethod
    def annual(cls, holiday_id: int, name: str, kind: HolidayKind, *, month: int, day: int, **kwargs) -> "Holiday":
        return cls(holiday_id=holiday_id, name=name, kind=kind, recurrence=HolidayRecurrence.ANNUAL, month=month, day=day, **kwargs)

    @classmethod
    def single(cls, holiday_id: int, name: str, kind: HolidayKind, *, on: date, **kwargs) -> "Holiday":
        return cls(
            holiday_id=holiday_id,
            name=name,
            kind=kind,
            recurrence=HolidayRecurrence.SINGLE_YEAR,
            specific_date=on,
            reference_year=on.year,
            **kwargs,
        )

    @classmethod
    def bridge(cls, holiday_id: int, name: str, *, on: date, employment_id: Optional[int] = None) -> "Holiday":
        scope = HolidayScope.EMPLOYMENT if employment_id is not None else HolidayScope.GLOBAL
        return cls.single(holiday_id, name, HolidayKind.BRIDGE, on=on, scope=scope, employment_id=employment_id)

    @property
    def is_bridge(self) -> bool:
        return self.kind == HolidayKind.BRIDGE

    @property
    def is_employment_specific(self) -> bool:
        return self.scope == HolidayScope.EMPLOYMENT

    def date_for_year(self, year: int) -> Optional[date]:
        if self.recurrence == HolidayRecurrence.ANNUAL:
            try:
                return date(year, self.month, self.day)  # type: ignore[arg-type]
            except ValueError:
                return None
        return self.specific_date if self.reference_year == year else None

    def occurs_on(self, day: date) -> bool:
        if self.recurrence == HolidayRecurrence.ANNUAL:
            return self.month == day.month and self.day == day.day
        return self.specific_date == day

    def applies_to(self, employment_id: int, state: Optional[str] = None, municipality: Optional[str] = None) -> bool:
        if self.is_employment_specific and self.employment_id != employment_id:
            return False
        if self.kind in (HolidayKind.NATIONAL, HolidayKind.OPTIONAL, HolidayKind.BRIDGE):
            return True
        if self.kind == HolidayKind.STATE:
            return self.state is None or self.state == state
        return self.municipality is None or self.municipality == municipality

    def priority_key(self, employment_id: int) -> tuple[int, int, int]:
        specific = 0 if self.is_employment_specific and self.employment_id == employment_id else 1
        return (specific, self.kind.priority, self.holiday_id)


@dataclass(frozen=True)
class Absence:
    """Domain entity: vacation, medical leave, day off... over an inclusive date range."""

    absence_id: int
    employment_id: int
    absence_type: AbsenceType
    start: date
    end: date
    active: bool = True
    note: Optional[str] = None

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValidationError("Absence start must not be after its end")

    @property
    def zeroes_expected(self) -> bool:
        return self.absence_type.zeroes_expected

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    def covers(self, day: date) -> bool:
        return self.start <= day <= self.end

    def overlaps(self, start: date, end: date) -> bool:
        return self.start <= end and start <= self.end


@dataclass(frozen=True)
class DayResolution:
    """Calendar classification of one date for one employment."""

    day: date
    employment_id: int
    holiday: Optional[Holiday] = None
    holidays: tuple[Holiday, ...] = ()
    is_weekend: bool = False
    has_schedule: bool = True
    absence: Optional[Absence] = None
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_holiday(self) -> bool:
        return self.holiday is not None

    @property
    def is_bridge(self) -> bool:
        return self.holiday is not None and self.holiday.is_bridge

    @property
    def is_unscheduled_weekend(self) -> bool:
        return self.is_weekend and not self.has_schedule

    @property
    def zeroes_expected(self) -> bool:
        if self.absence is not None and self.absence.zeroes_expected:
            return True
        return self.is_holiday or self.is_unscheduled_weekend

    @property
    def registration_allowed(self) -> bool:
        return not (self.is_holiday or self.is_unscheduled_weekend)

    @property
    def kind(self) -> DayKind:
        if self.absence is not None:
            return DayKind.ABSENCE
        if self.holiday is not None:
            if self.holiday.kind == HolidayKind.BRIDGE:
                return DayKind.BRIDGE
            if self.holiday.kind == HolidayKind.OPTIONAL:
                return DayKind.OPTIONAL
            return DayKind.HOLIDAY
        if self.is_weekend:
            return DayKind.WEEKEND
        return DayKind.NORMAL

    def expected_minutes(self, scheduled_minutes: int) -> int:
        """Apply this day's modifier to the schedule's target."""
        return 0 if self.zeroes_expected else scheduled_minutes
