from __future__ import annotations

from typing import Optional

from ....common.datetime_utils import minutes_between, truncate_to_minute
from ....core.enums import ValidationRule
from ..base import PunchRule, ValidationContext, Violation


class SpacingRule(PunchRule):
    rule = ValidationRule.SPACING_TOO_SHORT

    def check(self, ctx: ValidationContext) -> Optional[Violation]:
        spacing = ctx.rules.min_punch_spacing_minutes
        if spacing <= 0:
            return None
        at = ctx.candidate.timestamp
        for punch in ctx.existing:
            distance = abs(minutes_between(truncate_to_minute(punch.timestamp), at))
            # exact duplicates are reported by the duplicate rule
            if 0 < distance < spacing:
                return self.violation(f"Punches must be at least {spacing} minute(s) apart ({punch.timestamp:%H:%M})")
        return None
