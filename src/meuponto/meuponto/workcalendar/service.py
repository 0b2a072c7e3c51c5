from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.locks import EmploymentLocks
from ..core.enums import AbsenceType, FailureCode
from ..core.exceptions import ValidationError
from ..core.results import Result
from ..employment.model import EmploymentRules
from .model import Absence, DayResolution, Holiday
from .repository import AbsenceRepository, HolidayRepository
from .resolver import CalendarResolver

logger = logging.getLogger(__name__)


class AbsenceService:
    def __init__(self, absences: AbsenceRepository):
        self._absences = absences
        self._locks = EmploymentLocks()

    def register(
        self,
        *,
        employment_id: int,
        absence_type: AbsenceType,
        start: date,
        end: date,
        note: Optional[str] = None,
    ) -> Result[Absence]:
        if start > end:
            raise ValidationError("Absence start must not be after its end")

        note = note.strip() if note else None
        with self._locks.for_employment(employment_id):
            overlapping = self._absences.list_for_range(employment_id=employment_id, start=start, end=end)
            if overlapping:
                first = overlapping[0]
                return Result.fail(
                    FailureCode.ABSENCE_OVERLAP,
                    f"An absence ({first.absence_type.value}) already covers "
                    f"{first.start.isoformat()} to {first.end.isoformat()}",
                )
            absence_id = self._absences.create(
                employment_id=employment_id, absence_type=absence_type, start=start, end=end, note=note
            )
        logger.info("Absence %s registered for employment %s (%s, %s..%s)", absence_id, employment_id, absence_type.value, start, end)
        return Result.success(
            Absence(absence_id=absence_id, employment_id=employment_id, absence_type=absence_type, start=start, end=end, note=note)
        )

    def cancel(self, *, absence_id: int) -> None:
        if not self._absences.deactivate(absence_id=absence_id):
            raise ValidationError("Absence not found")

    def overlap_warnings(self, *, employment_id: int, start: date, end: date) -> list[str]:
        """Pairs of stored absences that overlap (data imported before the check existed)."""
        items = list(self._absences.list_for_range(employment_id=employment_id, start=start, end=end))
        warnings = []
        for i, a in enumerate(items):
            for b in items[i + 1:]:
                if a.overlaps(b.start, b.end):
                    warnings.append(f"Absences {a.absence_id} and {b.absence_id} overlap")
        return warnings


class HolidayService:
    def __init__(self, holidays: HolidayRepository):
        self._holidays = holidays

    def add(self, holiday: Holiday) -> int:
        holiday_id = self._holidays.add(holiday)
        logger.info("Holiday %s '%s' stored (%s)", holiday_id, holiday.name, holiday.kind.value)
        return holiday_id

    def import_records(self, holidays: list[Holiday]) -> int:
        """Store records handed over by the holiday-import collaborator, skipping duplicates."""
        existing = {(h.name, h.month, h.day, h.specific_date) for h in self._holidays.list_active()}
        stored = 0
        for holiday in holidays:
            key = (holiday.name, holiday.month, holiday.day, holiday.specific_date)
            if key in existing:
                continue
            self._holidays.add(holiday)
            existing.add(key)
            stored += 1
        logger.info("Imported %d of %d holiday records", stored, len(holidays))
        return stored

    def remove(self, *, holiday_id: int) -> None:
        if not self._holidays.deactivate(holiday_id=holiday_id):
            raise ValidationError("Holiday not found")


class CalendarService:
    """Loads one holiday/absence snapshot and classifies dates against it."""

    def __init__(self, holidays: HolidayRepository, absences: AbsenceRepository):
        self._holidays = holidays
        self._absences = absences

    def resolver(self, *, employment_id: int, start: date, end: date) -> CalendarResolver:
        return CalendarResolver(
            self._holidays.list_active(),
            self._absences.list_for_range(employment_id=employment_id, start=start, end=end),
        )

    def resolve(self, day: date, rules: EmploymentRules) -> DayResolution:
        resolver = self.resolver(employment_id=rules.employment_id, start=day, end=day)
        return resolve_for_rules(resolver, day, rules)

    def resolve_range(self, rules: EmploymentRules, start: date, end: date) -> list[DayResolution]:
        if start > end:
            raise ValidationError("Range start must not be after its end")
        resolver = self.resolver(employment_id=rules.employment_id, start=start, end=end)
        by_day = resolver.resolve_range(
            start,
            end,
            rules.employment_id,
            state=rules.state,
            municipality=rules.municipality,
            scheduled=lambda d: rules.schedule_for(d) is not None,
        )
        return list(by_day.values())


def resolve_for_rules(resolver: CalendarResolver, day: date, rules: EmploymentRules) -> DayResolution:
    return resolver.resolve(
        day,
        rules.employment_id,
        state=rules.state,
        municipality=rules.municipality,
        has_schedule=rules.schedule_for(day) is not None,
    )
