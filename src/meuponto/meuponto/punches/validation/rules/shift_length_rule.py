from __future__ import annotations

from typing import Optional

from ....core.enums import PunchKind, ValidationRule
from ....summary.calculator.base import SummaryCalculator
from ....summary.calculator.standard_calculator import StandardSummaryCalculator
from ...model import Punch
from ..base import PunchRule, ValidationContext, Violation


class ShiftLengthRule(PunchRule):
    """A clock-out may not push the day's worked time past the maximum shift."""

    rule = ValidationRule.SHIFT_TOO_LONG

    def __init__(self, calculator: Optional[SummaryCalculator] = None):
        self._calculator = calculator or StandardSummaryCalculator()

    def check(self, ctx: ValidationContext) -> Optional[Violation]:
        if ctx.expected_kind != PunchKind.CLOCK_OUT:
            return None
        limit = ctx.rules.max_shift_minutes
        if limit <= 0:
            return None

        candidate = Punch(punch_id=0, employment_id=ctx.candidate.employment_id, timestamp=ctx.candidate.timestamp)
        worked = self._calculator.worked_minutes([*ctx.existing, candidate])
        if worked > limit:
            return self.violation(f"Worked time would reach {worked} minutes, above the {limit}-minute maximum")
        return None
