from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import Punch


class PunchRepository(Protocol):
    def get(self, *, punch_id: int) -> Optional[Punch]:
        raise NotImplementedError

    def list_for_date(self, *, employment_id: int, day: date) -> Sequence[Punch]:
        raise NotImplementedError

    def list_range(self, *, employment_id: int, start: date, end: date) -> Sequence[Punch]:
        raise NotImplementedError

    def last_before(self, *, employment_id: int, day: date) -> Optional[Punch]:
        """Latest punch strictly before `day` (used for the interjourney rest check)."""

        raise NotImplementedError

    def create(
        self,
        *,
        employment_id: int,
        timestamp: datetime,
        considered_timestamp: Optional[datetime] = None,
        manually_edited: bool = False,
        note: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def update_considered(self, *, punch_id: int, considered_timestamp: Optional[datetime]) -> bool:
        raise NotImplementedError

    def delete(self, *, punch_id: int) -> bool:
        raise NotImplementedError
