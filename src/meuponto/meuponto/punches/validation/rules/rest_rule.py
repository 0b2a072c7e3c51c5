from __future__ import annotations

from typing import Optional

from ....common.datetime_utils import minutes_between
from ....core.enums import ValidationRule
from ..base import PunchRule, ValidationContext, Violation


class InterjourneyRestRule(PunchRule):
    """First punch of a day must respect the minimum rest after the previous day's last punch."""

    rule = ValidationRule.INSUFFICIENT_REST

    def check(self, ctx: ValidationContext) -> Optional[Violation]:
        rest = ctx.rules.min_interjourney_rest_minutes
        previous = ctx.previous_punch
        if rest <= 0 or previous is None or ctx.insertion_index != 0:
            return None
        gap = minutes_between(previous.timestamp, ctx.candidate.timestamp)
        if gap < rest:
            return self.violation(f"Only {gap} minutes of rest since the last punch; at least {rest} required")
        return None
