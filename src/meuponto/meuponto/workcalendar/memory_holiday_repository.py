from __future__ import annotations

import threading
from dataclasses import replace
from typing import Sequence

from .model import Holiday


class InMemoryHolidayRepository:
    def __init__(self, holidays: Sequence[Holiday] = ()):
        self._lock = threading.Lock()
        self._holidays: dict[int, Holiday] = {h.holiday_id: h for h in holidays}

    def list_active(self) -> Sequence[Holiday]:
        with self._lock:
            return [h for h in self._holidays.values() if h.active]

    def next_id(self) -> int:
        with self._lock:
            return max(self._holidays, default=0) + 1

    def add(self, holiday: Holiday) -> int:
        with self._lock:
            self._holidays[holiday.holiday_id] = holiday
            return holiday.holiday_id

    def deactivate(self, *, holiday_id: int) -> bool:
        with self._lock:
            holiday = self._holidays.get(holiday_id)
            if holiday is None or not holiday.active:
                return False
            self._holidays[holiday_id] = replace(holiday, active=False)
            return True
