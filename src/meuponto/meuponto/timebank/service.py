from __future__ import annotations

import logging
import threading
from datetime import date, datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..core.enums import ClosureKind, FailureCode
from ..core.results import Result
from ..employment.repository import RulesRepository
from ..summary.service import DailySummaryService
from .cycles import pending_cycles
from .ledger import TimeBankLedger
from .model import BalanceAdjustment, PeriodClosure

logger = logging.getLogger(__name__)


class TimeBankService:
    """One ledger per employment, fed from daily summaries."""

    def __init__(
        self,
        summaries: DailySummaryService,
        rules: RulesRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._summaries = summaries
        self._rules = rules
        self._clock = clock
        self._lock = threading.Lock()
        self._ledgers: dict[int, TimeBankLedger] = {}

    def ledger(self, employment_id: int) -> TimeBankLedger:
        with self._lock:
            ledger = self._ledgers.get(employment_id)
            if ledger is None:
                ledger = TimeBankLedger(employment_id, clock=self._clock)
                self._ledgers[employment_id] = ledger

        rules = self._rules.get_effective(employment_id=employment_id, on_date=self._clock().date())
        if rules is not None:
            ledger.set_relevant_kinds(rules.relevant_closure_kinds())
        return ledger

    def rebuild(self, *, employment_id: int, start: date, end: date) -> TimeBankLedger:
        """Record every day of [start, end] from fresh summaries."""
        ledger = self.ledger(employment_id)
        period = self._summaries.summarize_period(employment_id=employment_id, start=start, end=end)
        for summary in period.days:
            ledger.record_day(summary).unwrap()
        logger.debug("Ledger %s rebuilt for %s..%s (%d days)", employment_id, start, end, len(period.days))
        return ledger

    def close_cycle(
        self,
        *,
        employment_id: int,
        start: date,
        end: date,
        kind: ClosureKind = ClosureKind.TIME_BANK_CYCLE,
        note: Optional[str] = None,
        today: Optional[date] = None,
    ) -> Result[PeriodClosure]:
        today = today or self._clock().date()
        ledger = self.ledger(employment_id)
        # a refused close must leave the day balances untouched
        check = ledger.can_close(start, end, kind, today=today)
        if not check.ok:
            return Result.fail(check.failure.code, check.failure.message)
        self.rebuild(employment_id=employment_id, start=start, end=end)
        return ledger.close_cycle(start, end, kind, today=today, note=note)

    def close_pending_cycles(self, *, employment_id: int, today: Optional[date] = None) -> Result[list[PeriodClosure]]:
        today = today or self._clock().date()
        rules = self._rules.get_effective(employment_id=employment_id, on_date=today)
        if rules is None:
            return Result.fail(FailureCode.RULES_NOT_FOUND, f"No rules for employment {employment_id}")
        if not rules.has_time_bank or rules.cycle_start is None:
            return Result.fail(FailureCode.TIME_BANK_DISABLED, "Time bank is not enabled for this employment")

        ledger = self.ledger(employment_id)
        closed: list[PeriodClosure] = []
        for period in pending_cycles(rules, ledger.closures(), today=today):
            result = self.close_cycle(
                employment_id=employment_id,
                start=period.start,
                end=period.end,
                note="Closed automatically",
                today=today,
            )
            if not result.ok:
                return Result.fail(result.failure.code, result.failure.message)
            closed.append(result.value)
        return Result.success(closed)

    def adjust(
        self,
        *,
        employment_id: int,
        minutes: int,
        justification: str,
        on_date: Optional[date] = None,
    ) -> Result[BalanceAdjustment]:
        return self.ledger(employment_id).adjust(minutes, justification, on_date=on_date)

    def balance_as_of(self, *, employment_id: int, on_date: date, since: Optional[date] = None) -> Result[int]:
        """Balance up to `on_date`, rebuilding day balances from `since` first when given."""
        if since is not None and since <= on_date:
            self.rebuild(employment_id=employment_id, start=since, end=on_date)
        return self.ledger(employment_id).balance_as_of(on_date)

    def delete_closure(self, *, employment_id: int, closure_id: int) -> Result[PeriodClosure]:
        return self.ledger(employment_id).delete_closure(closure_id)
