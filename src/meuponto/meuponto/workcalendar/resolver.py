from __future__ import annotations

from datetime import date
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import is_weekend, iter_days
from .model import Absence, DayResolution, Holiday


class CalendarResolver:
    """Classifies dates against one snapshot of holidays and absences.

    Holiday priority on a shared date:
    employment-specific > municipal > state > national > optional > bridge.
    """

    def __init__(self, holidays: Sequence[Holiday] = (), absences: Sequence[Absence] = ()):
        self._holidays = tuple(h for h in holidays if h.active)
        self._absences = tuple(a for a in absences if a.active)

    def holidays_on(
        self,
        day: date,
        employment_id: int,
        *,
        state: Optional[str] = None,
        municipality: Optional[str] = None,
    ) -> list[Holiday]:
        matches = [h for h in self._holidays if h.occurs_on(day) and h.applies_to(employment_id, state, municipality)]
        return sorted(matches, key=lambda h: h.priority_key(employment_id))

    def absences_on(self, day: date, employment_id: int) -> list[Absence]:
        return [a for a in self._absences if a.employment_id == employment_id and a.covers(day)]

    def resolve(
        self,
        day: date,
        employment_id: int,
        *,
        state: Optional[str] = None,
        municipality: Optional[str] = None,
        has_schedule: Optional[bool] = None,
    ) -> DayResolution:
        """Classify `day`.

        `has_schedule` tells whether the employment schedules work on this
        weekday; when unknown, Monday to Friday count as scheduled.
        """
        weekend = is_weekend(day)
        if has_schedule is None:
            has_schedule = not weekend

        holidays = self.holidays_on(day, employment_id, state=state, municipality=municipality)
        absence, warnings = self._pick_absence(day, employment_id)

        return DayResolution(
            day=day,
            employment_id=employment_id,
            holiday=holidays[0] if holidays else None,
            holidays=tuple(holidays),
            is_weekend=weekend,
            has_schedule=has_schedule,
            absence=absence,
            warnings=warnings,
        )

    def resolve_range(
        self,
        start: date,
        end: date,
        employment_id: int,
        *,
        state: Optional[str] = None,
        municipality: Optional[str] = None,
        scheduled: Optional[Callable[[date], bool]] = None,
    ) -> dict[date, DayResolution]:
        return {
            d: self.resolve(
                d,
                employment_id,
                state=state,
                municipality=municipality,
                has_schedule=scheduled(d) if scheduled else None,
            )
            for d in iter_days(start, end)
        }

    def count_working_days(
        self,
        start: date,
        end: date,
        employment_id: int,
        *,
        state: Optional[str] = None,
        municipality: Optional[str] = None,
        include_bridges: bool = True,
    ) -> int:
        """Weekdays in [start, end] that are not holidays.

        With `include_bridges`, bridge days still count as working days
        unless a non-bridge holiday also falls on them.
        """
        count = 0
        for d in iter_days(start, end):
            if is_weekend(d):
                continue
            holidays = self.holidays_on(d, employment_id, state=state, municipality=municipality)
            if include_bridges:
                holidays = [h for h in holidays if not h.is_bridge]
            if not holidays:
                count += 1
        return count

    def _pick_absence(self, day: date, employment_id: int) -> tuple[Optional[Absence], tuple[str, ...]]:
        absences = self.absences_on(day, employment_id)
        if not absences:
            return None, ()
        if len(absences) == 1:
            return absences[0], ()

        ordered = sorted(absences, key=lambda a: (not a.zeroes_expected, a.start, a.absence_id))
        ids = ", ".join(str(a.absence_id) for a in ordered)
        warning = f"Overlapping absences on {day.isoformat()} ({ids}); using {ordered[0].absence_id}"
        return ordered[0], (warning,)
