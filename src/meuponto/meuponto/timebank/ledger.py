"""Time bank ledger for one employment.

Balances are always derived from the recorded day balances and adjustments,
so deleting a closure needs no recomputation pass.
"""

from __future__ import annotations

import logging
import threading
from datetime import date, datetime
from typing import Callable, Iterable, Optional

from ..common.datetime_utils import format_minutes, now_local
from ..core import constants
from ..core.enums import AuditAction, ClosureKind, FailureCode
from ..core.results import Result
from ..summary.model import DailySummary
from .model import AuditEntry, BalanceAdjustment, PeriodClosure

logger = logging.getLogger(__name__)


class TimeBankLedger:
    def __init__(
        self,
        employment_id: int,
        *,
        relevant_kinds: Iterable[ClosureKind] = (ClosureKind.TIME_BANK_CYCLE,),
        clock: Callable[[], datetime] = now_local,
    ):
        self.employment_id = employment_id
        self._relevant = frozenset(relevant_kinds)
        self._clock = clock
        self._lock = threading.RLock()
        self._days: dict[date, int] = {}
        self._closures: dict[int, PeriodClosure] = {}
        self._adjustments: list[BalanceAdjustment] = []
        self._audit: list[AuditEntry] = []
        self._next_closure_id = 1
        self._next_adjustment_id = 1

    def set_relevant_kinds(self, kinds: Iterable[ClosureKind]) -> None:
        with self._lock:
            self._relevant = frozenset(kinds)

    # ---- writes ----

    def record_day(self, summary: DailySummary) -> Result[int]:
        """Store (or replace) the day's balance. Returns the running balance."""
        if summary.employment_id != self.employment_id:
            return Result.fail(
                FailureCode.WRONG_EMPLOYMENT,
                f"Summary of employment {summary.employment_id} sent to ledger {self.employment_id}",
            )
        with self._lock:
            self._days[summary.day] = summary.balance
            return Result.success(self.running_balance())

    def can_close(
        self,
        period_start: date,
        period_end: date,
        kind: ClosureKind = ClosureKind.TIME_BANK_CYCLE,
        *,
        today: Optional[date] = None,
    ) -> Result[None]:
        """The checks of `close_cycle`, without writing anything."""
        if period_start > period_end:
            return Result.fail(FailureCode.INVALID_PERIOD, "Period start must not be after its end")

        today = today or self._clock().date()
        if period_end >= today:
            return Result.fail(
                FailureCode.CYCLE_NOT_ENDED,
                f"Period ends on {period_end.isoformat()} and can only be closed after that date",
            )

        with self._lock:
            for existing in self._closures.values():
                if existing.kind == kind and existing.overlaps(period_start, period_end):
                    return Result.fail(
                        FailureCode.PERIOD_ALREADY_CLOSED,
                        f"{kind.label} {existing.period_start.isoformat()}..{existing.period_end.isoformat()} already closed",
                    )
        return Result.success(None)

    def close_cycle(
        self,
        period_start: date,
        period_end: date,
        kind: ClosureKind = ClosureKind.TIME_BANK_CYCLE,
        *,
        today: Optional[date] = None,
        note: Optional[str] = None,
    ) -> Result[PeriodClosure]:
        today = today or self._clock().date()
        with self._lock:
            check = self.can_close(period_start, period_end, kind, today=today)
            if not check.ok:
                return Result.fail(check.failure.code, check.failure.message)

            balance = self._sum_between(period_start, period_end)
            closure = PeriodClosure(
                closure_id=self._next_closure_id,
                employment_id=self.employment_id,
                closed_on=today,
                period_start=period_start,
                period_end=period_end,
                balance_minutes=balance,
                kind=kind,
                note=(note or "").strip() or None,
            )
            self._next_closure_id += 1
            self._closures[closure.closure_id] = closure
            detail = f"{kind.label} {period_start.isoformat()}..{period_end.isoformat()}"
            self._record_audit(AuditAction.CLOSE, balance, detail)

        logger.info(
            "Employment %s: closed %s with balance %s",
            self.employment_id, detail, format_minutes(balance, signed=True),
        )
        return Result.success(closure)

    def adjust(
        self,
        delta_minutes: int,
        justification: str,
        *,
        on_date: Optional[date] = None,
    ) -> Result[BalanceAdjustment]:
        now = self._clock()
        on_date = on_date or now.date()
        justification = (justification or "").strip()

        failure = self._check_adjustment(delta_minutes, justification, on_date, now.date())
        if failure is not None:
            return Result.fail(FailureCode.INVALID_ADJUSTMENT, failure)

        with self._lock:
            adjustment = BalanceAdjustment(
                adjustment_id=self._next_adjustment_id,
                employment_id=self.employment_id,
                on_date=on_date,
                minutes=delta_minutes,
                justification=justification,
                created_at=now,
            )
            self._next_adjustment_id += 1
            self._adjustments.append(adjustment)
            self._record_audit(AuditAction.ADJUST, delta_minutes, justification)

        logger.info(
            "Employment %s: manual adjustment %s on %s (%s)",
            self.employment_id, format_minutes(delta_minutes, signed=True), on_date.isoformat(), justification,
        )
        return Result.success(adjustment)

    def delete_closure(self, closure_id: int) -> Result[PeriodClosure]:
        with self._lock:
            closure = self._closures.pop(closure_id, None)
            if closure is None:
                return Result.fail(FailureCode.CLOSURE_NOT_FOUND, f"Closure {closure_id} not found")
            detail = f"{closure.kind.label} {closure.period_start.isoformat()}..{closure.period_end.isoformat()}"
            self._record_audit(AuditAction.DELETE_CLOSURE, closure.balance_minutes, detail)

        logger.info("Employment %s: closure %s deleted (%s)", self.employment_id, closure_id, detail)
        return Result.success(closure)

    # ---- reads ----

    def running_balance(self) -> int:
        """Balance since the most recent relevant closure."""
        with self._lock:
            last = self._last_relevant_closure()
            if last is None:
                return self._sum_between(date.min, date.max)
            return self._sum_between(last.period_end, date.max, include_start=False)

    def balance_as_of(self, on_date: date) -> Result[int]:
        """Balance accumulated up to `on_date`.

        Only relevant closures ending strictly before `on_date` count as a
        baseline; later or same-day closures are ignored.
        """
        with self._lock:
            baseline = self._last_relevant_closure(before=on_date)
            if baseline is not None:
                return Result.success(self._sum_between(baseline.period_end, on_date, include_start=False))

            first = self._first_entry_date()
            if first is None or first > on_date:
                return Result.fail(FailureCode.NO_BASELINE, f"Nothing recorded on or before {on_date.isoformat()}")
            return Result.success(self._sum_between(first, on_date))

    def day_balance(self, day: date) -> Optional[int]:
        with self._lock:
            return self._days.get(day)

    def closures(self) -> list[PeriodClosure]:
        with self._lock:
            return sorted(self._closures.values(), key=lambda c: (c.period_end, c.closure_id))

    def adjustments(self) -> list[BalanceAdjustment]:
        with self._lock:
            return list(self._adjustments)

    def audit_log(self) -> list[AuditEntry]:
        with self._lock:
            return list(self._audit)

    # ---- helpers ----

    def _last_relevant_closure(self, *, before: Optional[date] = None) -> Optional[PeriodClosure]:
        candidates = [
            c for c in self._closures.values()
            if c.kind in self._relevant and (before is None or c.period_end < before)
        ]
        if not candidates:
            return None
        return max(candidates, key=lambda c: (c.period_end, c.closure_id))

    def _first_entry_date(self) -> Optional[date]:
        dates = list(self._days) + [a.on_date for a in self._adjustments]
        return min(dates) if dates else None

    def _sum_between(self, start: date, end: date, *, include_start: bool = True) -> int:
        def inside(d: date) -> bool:
            return (start <= d if include_start else start < d) and d <= end

        days = sum(v for d, v in self._days.items() if inside(d))
        adjustments = sum(a.minutes for a in self._adjustments if inside(a.on_date))
        return days + adjustments

    @staticmethod
    def _check_adjustment(minutes: int, justification: str, on_date: date, today: date) -> Optional[str]:
        if minutes == 0:
            return "Adjustment must not be zero"
        if abs(minutes) > constants.MAX_ADJUSTMENT_MINUTES:
            return f"Adjustment is limited to {constants.MAX_ADJUSTMENT_MINUTES} minutes"
        if len(justification) < constants.MIN_JUSTIFICATION_LENGTH:
            return f"Justification must have at least {constants.MIN_JUSTIFICATION_LENGTH} characters"
        if len(justification) > constants.MAX_JUSTIFICATION_LENGTH:
            return f"Justification must have at most {constants.MAX_JUSTIFICATION_LENGTH} characters"
        if on_date > today:
            return "Adjustments cannot be dated in the future"
        return None

    def _record_audit(self, action: AuditAction, minutes: int, detail: str) -> None:
        self._audit.append(
            AuditEntry(at=self._clock(), employment_id=self.employment_id, action=action, minutes=minutes, detail=detail)
        )
