from __future__ import annotations

from typing import Optional

from ....core.enums import ValidationRule
from ..base import PunchRule, ValidationContext, Violation


class SequenceRule(PunchRule):
    """Kind is inferred by position parity; a declared kind must agree with it."""

    rule = ValidationRule.SEQUENCE_MISMATCH

    def check(self, ctx: ValidationContext) -> Optional[Violation]:
        declared = ctx.candidate.declared_kind
        if declared is None:
            return None
        expected = ctx.expected_kind
        if declared != expected:
            return self.violation(f"Expected a {expected.value} at this position, got {declared.value}")
        return None
