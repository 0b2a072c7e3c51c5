from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ...summary.calculator.base import SummaryCalculator
from .base import PunchRule
from .rules.calendar_rule import CalendarRule
from .rules.duplicate_rule import DuplicateTimeRule
from .rules.future_rule import FutureDateRule, FutureTimeRule
from .rules.max_punches_rule import MaxPunchesRule
from .rules.rest_rule import InterjourneyRestRule
from .rules.sequence_rule import SequenceRule
from .rules.shift_length_rule import ShiftLengthRule
from .rules.spacing_rule import SpacingRule


@dataclass
class PunchRuleFactory:
    """Factory Pattern: the ordered rule set checked for every new punch."""

    calculator: Optional[SummaryCalculator] = None
    check_calendar: bool = True
    check_rest: bool = True

    def default_rules(self) -> list[PunchRule]:
        rules: list[PunchRule] = [
            FutureDateRule(),
            FutureTimeRule(),
            MaxPunchesRule(),
            DuplicateTimeRule(),
            SequenceRule(),
            SpacingRule(),
            ShiftLengthRule(self.calculator),
        ]
        if self.check_calendar:
            rules.append(CalendarRule())
        if self.check_rest:
            rules.append(InterjourneyRestRule())
        return rules
