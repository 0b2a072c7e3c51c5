from __future__ import annotations

from typing import Optional

from ....common.datetime_utils import truncate_to_minute
from ....core.enums import ValidationRule
from ..base import PunchRule, ValidationContext, Violation


class DuplicateTimeRule(PunchRule):
    rule = ValidationRule.DUPLICATE_TIME

    def check(self, ctx: ValidationContext) -> Optional[Violation]:
        at = ctx.candidate.timestamp
        if any(truncate_to_minute(p.timestamp) == at for p in ctx.existing):
            return self.violation(f"A punch at {at:%H:%M} already exists")
        return None
