from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AuditAction, ClosureKind


@dataclass(frozen=True)
class PeriodClosure:
    """Snapshot of a closed accounting period. Immutable; undone only by deletion."""

    closure_id: int
    employment_id: int
    closed_on: date
    period_start: date
    period_end: date
    balance_minutes: int
    kind: ClosureKind
    note: Optional[str] = None

    def overlaps(self, start: date, end: date) -> bool:
        return self.period_start <= end and start <= self.period_end


@dataclass(frozen=True)
class BalanceAdjustment:
    adjustment_id: int
    employment_id: int
    on_date: date
    minutes: int
    justification: str
    created_at: datetime


@dataclass(frozen=True)
class AuditEntry:
    at: datetime
    employment_id: int
    action: AuditAction
    minutes: int
    detail: str
