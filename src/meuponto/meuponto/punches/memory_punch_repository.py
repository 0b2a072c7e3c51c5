from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Sequence

from .model import Punch, sort_by_actual


class InMemoryPunchRepository:
    def __init__(self):
        self._lock = threading.Lock()
        self._punches: dict[int, Punch] = {}
        self._id = 0

    def get(self, *, punch_id: int) -> Optional[Punch]:
        with self._lock:
            return self._punches.get(punch_id)

    def list_for_date(self, *, employment_id: int, day: date) -> Sequence[Punch]:
        return self.list_range(employment_id=employment_id, start=day, end=day)

    def list_range(self, *, employment_id: int, start: date, end: date) -> Sequence[Punch]:
        with self._lock:
            items = [p for p in self._punches.values() if p.employment_id == employment_id and start <= p.day <= end]
        return sort_by_actual(items)

    def last_before(self, *, employment_id: int, day: date) -> Optional[Punch]:
        with self._lock:
            items = [p for p in self._punches.values() if p.employment_id == employment_id and p.day < day]
        ordered = sort_by_actual(items)
        return ordered[-1] if ordered else None

    def create(
        self,
        *,
        employment_id: int,
        timestamp: datetime,
        considered_timestamp: Optional[datetime] = None,
        manually_edited: bool = False,
        note: Optional[str] = None,
    ) -> int:
        with self._lock:
            self._id += 1
            self._punches[self._id] = Punch(
                punch_id=self._id,
                employment_id=employment_id,
                timestamp=timestamp,
                considered_timestamp=considered_timestamp,
                manually_edited=manually_edited,
                note=note,
            )
            return self._id

    def update_considered(self, *, punch_id: int, considered_timestamp: Optional[datetime]) -> bool:
        with self._lock:
            punch = self._punches.get(punch_id)
            if punch is None:
                return False
            self._punches[punch_id] = replace(punch, considered_timestamp=considered_timestamp)
            return True

    def delete(self, *, punch_id: int) -> bool:
        with self._lock:
            return self._punches.pop(punch_id, None) is not None
