from __future__ import annotations

from typing import Optional

from ....core.enums import ValidationRule
from ..base import PunchRule, ValidationContext, Violation


class CalendarRule(PunchRule):
    """Holidays, bridges and unscheduled weekends are closed unless overridden."""

    rule = ValidationRule.DAY_NOT_ALLOWED

    def check(self, ctx: ValidationContext) -> Optional[Violation]:
        resolution = ctx.resolution
        if resolution is None or ctx.candidate.allow_non_working_day:
            return None
        if resolution.registration_allowed:
            return None
        if resolution.holiday is not None:
            return self.violation(f"{ctx.candidate.day.isoformat()} is a day off ({resolution.holiday.name})")
        return self.violation(f"{ctx.candidate.day.isoformat()} is not a scheduled working day")
