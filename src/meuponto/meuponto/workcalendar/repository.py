from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import AbsenceType
from .model import Absence, Holiday


class HolidayRepository(Protocol):
    def list_active(self) -> Sequence[Holiday]:
        raise NotImplementedError

    def add(self, holiday: Holiday) -> int:
        """Store a validated holiday (manual entry or an import collaborator).

        Returns holiday_id.
        """

        raise NotImplementedError

    def next_id(self) -> int:
        raise NotImplementedError

    def deactivate(self, *, holiday_id: int) -> bool:
        raise NotImplementedError


class AbsenceRepository(Protocol):
    def list_for_range(self, *, employment_id: int, start: date, end: date) -> Sequence[Absence]:
        raise NotImplementedError

    def create(
        self,
        *,
        employment_id: int,
        absence_type: AbsenceType,
        start: date,
        end: date,
        note: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def deactivate(self, *, absence_id: int) -> bool:
        raise NotImplementedError
