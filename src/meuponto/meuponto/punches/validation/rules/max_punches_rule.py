from __future__ import annotations

from typing import Optional

from ....core.enums import ValidationRule
from ..base import PunchRule, ValidationContext, Violation


class MaxPunchesRule(PunchRule):
    rule = ValidationRule.MAX_PUNCHES_REACHED

    def check(self, ctx: ValidationContext) -> Optional[Violation]:
        limit = ctx.rules.max_punches
        if len(ctx.existing) >= limit:
            return self.violation(f"Maximum of {limit} punches per day reached")
        return None
