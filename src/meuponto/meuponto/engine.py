"""Pure entry points over explicit values.

Callers hand in one snapshot (punches, rules, holidays, absences, bridge
config) and get back summaries, validation results or typed ledger results.
Nothing here touches a store.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from .bridges.distributor import BridgeDayDistributor
from .bridges.model import BridgeDayConfig
from .core.enums import ClosureKind
from .core.results import Result
from .employment.model import EmploymentRules
from .punches.model import Punch
from .punches.tolerance import ToleranceApplier
from .punches.validation.base import PunchCandidate
from .punches.validation.pipeline import PunchValidationPipeline, PunchValidationResult
from .summary.calculator.base import SummaryCalculator
from .summary.calculator.standard_calculator import StandardSummaryCalculator
from .summary.model import DailySummary
from .timebank.ledger import TimeBankLedger
from .timebank.model import BalanceAdjustment, PeriodClosure
from .workcalendar.model import Absence, Holiday
from .workcalendar.resolver import CalendarResolver
from .workcalendar.service import resolve_for_rules


class WorkTimeEngine:
    def __init__(
        self,
        *,
        tolerance: Optional[ToleranceApplier] = None,
        calculator: Optional[SummaryCalculator] = None,
        pipeline: Optional[PunchValidationPipeline] = None,
        distributor: Optional[BridgeDayDistributor] = None,
    ):
        self._tolerance = tolerance or ToleranceApplier()
        self._calculator = calculator or StandardSummaryCalculator()
        self._pipeline = pipeline or PunchValidationPipeline()
        self._distributor = distributor or BridgeDayDistributor()

    def compute_daily_summary(
        self,
        punches: Sequence[Punch],
        *,
        day: date,
        rules: EmploymentRules,
        holidays: Sequence[Holiday] = (),
        absences: Sequence[Absence] = (),
        bridge_config: Optional[BridgeDayConfig] = None,
    ) -> DailySummary:
        policy = rules.break_policy(day)
        outcome = self._tolerance.apply(
            [p for p in punches if p.day == day],
            min_break_minutes=policy.min_break_minutes,
            tolerance_minutes=policy.tolerance_minutes,
            ideal_break_start=policy.ideal_break_start,
        )
        resolution = resolve_for_rules(CalendarResolver(holidays, absences), day, rules)
        return self._calculator.summarize(
            outcome.punches,
            day=day,
            resolution=resolution,
            rules=rules,
            bridge_config=bridge_config,
            forgiven_minutes=outcome.forgiven_minutes,
        )

    def validate_punch(
        self,
        candidate: PunchCandidate,
        *,
        existing: Sequence[Punch],
        rules: EmploymentRules,
        now: datetime,
        holidays: Sequence[Holiday] = (),
        absences: Sequence[Absence] = (),
        previous_punch: Optional[Punch] = None,
    ) -> PunchValidationResult:
        resolution = resolve_for_rules(CalendarResolver(holidays, absences), candidate.day, rules)
        return self._pipeline.validate(
            candidate,
            existing=existing,
            rules=rules,
            now=now,
            resolution=resolution,
            previous_punch=previous_punch,
        )

    def distribute_bridge_days(
        self,
        *,
        year: int,
        rules: EmploymentRules,
        holidays: Sequence[Holiday] = (),
        bridge_day_count: Optional[int] = None,
    ) -> BridgeDayConfig:
        return self._distributor.distribute(
            year=year,
            employment_id=rules.employment_id,
            daily_target_minutes=rules.daily_target_minutes,
            holidays=holidays,
            bridge_day_count=bridge_day_count,
            state=rules.state,
            municipality=rules.municipality,
        )

    # Ledger operations delegate to the ledger, which owns its lock.

    @staticmethod
    def record_day(ledger: TimeBankLedger, summary: DailySummary) -> Result[int]:
        return ledger.record_day(summary)

    @staticmethod
    def close_cycle(
        ledger: TimeBankLedger,
        period_start: date,
        period_end: date,
        kind: ClosureKind = ClosureKind.TIME_BANK_CYCLE,
        *,
        today: Optional[date] = None,
        note: Optional[str] = None,
    ) -> Result[PeriodClosure]:
        return ledger.close_cycle(period_start, period_end, kind, today=today, note=note)

    @staticmethod
    def adjust(
        ledger: TimeBankLedger,
        delta_minutes: int,
        justification: str,
        *,
        on_date: Optional[date] = None,
    ) -> Result[BalanceAdjustment]:
        return ledger.adjust(delta_minutes, justification, on_date=on_date)

    @staticmethod
    def balance_as_of(ledger: TimeBankLedger, on_date: date) -> Result[int]:
        return ledger.balance_as_of(on_date)
