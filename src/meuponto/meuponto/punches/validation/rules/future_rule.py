from __future__ import annotations

from typing import Optional

from ....core.enums import ValidationRule
from ..base import PunchRule, ValidationContext, Violation


class FutureDateRule(PunchRule):
    rule = ValidationRule.FUTURE_DATE

    def check(self, ctx: ValidationContext) -> Optional[Violation]:
        if ctx.candidate.day > ctx.now.date():
            return self.violation("Punches cannot be registered on a future date")
        return None


class FutureTimeRule(PunchRule):
    """Today's punches may not be later than now unless the caller overrides it."""

    rule = ValidationRule.FUTURE_TIME

    def check(self, ctx: ValidationContext) -> Optional[Violation]:
        if ctx.candidate.allow_future_time or ctx.candidate.day != ctx.now.date():
            return None
        if ctx.candidate.timestamp > ctx.now.replace(second=0, microsecond=0):
            return self.violation("Punch time is later than the current time")
        return None
