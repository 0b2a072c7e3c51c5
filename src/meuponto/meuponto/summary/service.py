from __future__ import annotations

from datetime import date
from typing import Optional

from ..bridges.repository import BridgeConfigRepository
from ..common.datetime_utils import iter_days
from ..core.exceptions import ValidationError
from ..employment.model import EmploymentRules
from ..employment.periods import Period, rh_period_bounds, week_bounds
from ..employment.repository import RulesRepository
from ..punches.model import Punch
from ..punches.repository import PunchRepository
from ..punches.tolerance import ToleranceApplier
from ..workcalendar.resolver import CalendarResolver
from ..workcalendar.service import CalendarService, resolve_for_rules
from .calculator.base import SummaryCalculator
from .calculator.standard_calculator import StandardSummaryCalculator
from .model import DailySummary, PeriodSummary


class DailySummaryService:
    """Loads one snapshot per call and runs tolerance -> calendar -> calculator."""

    def __init__(
        self,
        punches: PunchRepository,
        rules: RulesRepository,
        calendar: CalendarService,
        bridges: BridgeConfigRepository,
        *,
        tolerance: Optional[ToleranceApplier] = None,
        calculator: Optional[SummaryCalculator] = None,
    ):
        self._punches = punches
        self._rules = rules
        self._calendar = calendar
        self._bridges = bridges
        self._tolerance = tolerance or ToleranceApplier()
        self._calculator = calculator or StandardSummaryCalculator()

    def _rules_for(self, employment_id: int, day: date) -> EmploymentRules:
        rules = self._rules.get_effective(employment_id=employment_id, on_date=day)
        if not rules:
            raise ValidationError(f"No rules configured for employment {employment_id} on {day.isoformat()}")
        return rules

    def compute_daily_summary(self, *, employment_id: int, day: date) -> DailySummary:
        resolver = self._calendar.resolver(employment_id=employment_id, start=day, end=day)
        punches = self._punches.list_for_date(employment_id=employment_id, day=day)
        return self._summarize(employment_id, day, punches, resolver)

    def summarize_period(self, *, employment_id: int, start: date, end: date) -> PeriodSummary:
        if start > end:
            raise ValidationError("Period start must not be after its end")

        resolver = self._calendar.resolver(employment_id=employment_id, start=start, end=end)
        by_day: dict[date, list[Punch]] = {}
        for punch in self._punches.list_range(employment_id=employment_id, start=start, end=end):
            by_day.setdefault(punch.day, []).append(punch)

        days = []
        for day in iter_days(start, end):
            # days before the first rules version are outside the employment
            if self._rules.get_effective(employment_id=employment_id, on_date=day) is None:
                continue
            days.append(self._summarize(employment_id, day, by_day.get(day, []), resolver))
        return PeriodSummary(start=start, end=end, days=tuple(days))

    def summarize_week(self, *, employment_id: int, day: date) -> PeriodSummary:
        period = week_bounds(day, self._rules_for(employment_id, day).week_start)
        return self.summarize_period(employment_id=employment_id, start=period.start, end=period.end)

    def summarize_rh_period(self, *, employment_id: int, day: date) -> PeriodSummary:
        period = self.rh_period(employment_id=employment_id, day=day)
        return self.summarize_period(employment_id=employment_id, start=period.start, end=period.end)

    def rh_period(self, *, employment_id: int, day: date) -> Period:
        return rh_period_bounds(day, self._rules_for(employment_id, day).rh_start_day)

    def _summarize(self, employment_id: int, day: date, punches, resolver: CalendarResolver) -> DailySummary:
        rules = self._rules_for(employment_id, day)
        policy = rules.break_policy(day)
        outcome = self._tolerance.apply(
            punches,
            min_break_minutes=policy.min_break_minutes,
            tolerance_minutes=policy.tolerance_minutes,
            ideal_break_start=policy.ideal_break_start,
        )
        return self._calculator.summarize(
            outcome.punches,
            day=day,
            resolution=resolve_for_rules(resolver, day, rules),
            rules=rules,
            bridge_config=self._bridges.get(employment_id=employment_id, year=day.year),
            forgiven_minutes=outcome.forgiven_minutes,
        )
