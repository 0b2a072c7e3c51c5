from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from ..core.enums import AbsenceType
from .model import Absence


class InMemoryAbsenceRepository:
    def __init__(self):
        self._lock = threading.Lock()
        self._absences: dict[int, Absence] = {}
        self._id = 0

    def list_for_range(self, *, employment_id: int, start: date, end: date) -> Sequence[Absence]:
        with self._lock:
            items = [
                a for a in self._absences.values()
                if a.employment_id == employment_id and a.active and a.overlaps(start, end)
            ]
        return sorted(items, key=lambda a: (a.start, a.absence_id))

    def create(
        self,
        *,
        employment_id: int,
        absence_type: AbsenceType,
        start: date,
        end: date,
        note: Optional[str] = None,
    ) -> int:
        with self._lock:
            self._id += 1
            self._absences[self._id] = Absence(
                absence_id=self._id,
                employment_id=employment_id,
                absence_type=absence_type,
                start=start,
                end=end,
                note=note,
            )
            return self._id

    def deactivate(self, *, absence_id: int) -> bool:
        with self._lock:
            absence = self._absences.get(absence_id)
            if absence is None or not absence.active:
                return False
            self._absences[absence_id] = replace(absence, active=False)
            return True
