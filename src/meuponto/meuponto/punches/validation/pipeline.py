from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from ...core.enums import PunchKind, ValidationRule
from ...employment.model import EmploymentRules
from ...workcalendar.model import DayResolution
from ..model import Punch
from .base import PunchCandidate, PunchRule, ValidationContext, Violation
from .factory import PunchRuleFactory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PunchValidationResult:
    candidate: PunchCandidate
    expected_kind: PunchKind
    violations: tuple[Violation, ...] = ()

    @property
    def accepted(self) -> bool:
        return not self.violations

    @property
    def violated_rules(self) -> tuple[ValidationRule, ...]:
        return tuple(v.rule for v in self.violations)


class PunchValidationPipeline:
    """Runs every rule and reports all violations, not just the first."""

    def __init__(self, rules: Optional[Sequence[PunchRule]] = None):
        self._rules = list(rules) if rules is not None else PunchRuleFactory().default_rules()

    def validate(
        self,
        candidate: PunchCandidate,
        *,
        existing: Sequence[Punch],
        rules: EmploymentRules,
        now: datetime,
        resolution: Optional[DayResolution] = None,
        previous_punch: Optional[Punch] = None,
    ) -> PunchValidationResult:
        ctx = ValidationContext(
            candidate=candidate,
            existing=tuple(p for p in existing if p.day == candidate.day),
            rules=rules,
            now=now,
            resolution=resolution,
            previous_punch=previous_punch,
        )
        violations = []
        for rule in self._rules:
            violation = rule.check(ctx)
            if violation is not None:
                violations.append(violation)

        if violations:
            logger.debug(
                "Punch %s %s rejected: %s",
                candidate.day, candidate.at, ", ".join(v.rule.value for v in violations),
            )
        return PunchValidationResult(candidate=candidate, expected_kind=ctx.expected_kind, violations=tuple(violations))
