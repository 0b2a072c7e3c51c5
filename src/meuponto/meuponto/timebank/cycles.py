"""Time bank cycle arithmetic.

A cycle starts at the anchor date plus k * length (weeks or months) and
ends the day before the next one starts.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import add_months
from ..core import constants
from ..core.enums import ClosureKind, CycleUnit
from ..core.exceptions import ValidationError
from ..employment.model import EmploymentRules
from ..employment.periods import Period
from .model import PeriodClosure


def _cycle_start(anchor: date, index: int, length: int, unit: CycleUnit) -> date:
    if unit == CycleUnit.WEEKS:
        return anchor + timedelta(weeks=index * length)
    return add_months(anchor, index * length)


def cycle_bounds(day: date, *, anchor: date, length: int, unit: CycleUnit) -> Period:
    if length <= 0:
        raise ValidationError("Cycle length must be positive")

    if unit == CycleUnit.WEEKS:
        index = (day - anchor).days // (7 * length)
    else:
        months = (day.year - anchor.year) * 12 + (day.month - anchor.month)
        index = months // length
        if _cycle_start(anchor, index, length, unit) > day:
            index -= 1

    start = _cycle_start(anchor, index, length, unit)
    end = _cycle_start(anchor, index + 1, length, unit) - timedelta(days=1)
    return Period(start=start, end=end)


def cycle_for(rules: EmploymentRules, day: date) -> Optional[Period]:
    if not rules.has_time_bank or rules.cycle_start is None:
        return None
    return cycle_bounds(day, anchor=rules.cycle_start, length=rules.cycle_length, unit=rules.cycle_unit)


def pending_cycles(
    rules: EmploymentRules,
    closures: Sequence[PeriodClosure],
    *,
    today: date,
    limit: int = constants.MAX_PENDING_CYCLES,
) -> list[Period]:
    """Ended cycles not closed yet, oldest first, at most `limit` of them."""
    if not rules.has_time_bank or rules.cycle_start is None:
        return []

    cycle_closures = [c for c in closures if c.kind == ClosureKind.TIME_BANK_CYCLE]
    if cycle_closures:
        resume = max(c.period_end for c in cycle_closures) + timedelta(days=1)
    else:
        resume = rules.cycle_start

    pending: list[Period] = []
    current = cycle_for(rules, resume)
    while current is not None and current.end < today and len(pending) < limit:
        if not any(c.overlaps(current.start, current.end) for c in cycle_closures):
            pending.append(current)
        current = cycle_for(rules, current.end + timedelta(days=1))
    return pending
