from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ...bridges.model import BridgeDayConfig
from ...employment.model import EmploymentRules
from ...punches.model import Interval, Punch, sort_by_considered
from ...workcalendar.model import DayResolution
from ..model import DailySummary
from .base import SummaryCalculator


class StandardSummaryCalculator(SummaryCalculator):
    """Positional pairing: 0<->1, 2<->3... over considered times.

    A trailing unmatched punch contributes 0 minutes. A forgotten punch in
    the middle of the day shifts every later pair; that is kept as is.
    """

    def pair(self, punches: Sequence[Punch]) -> list[Interval]:
        ordered = sort_by_considered(punches)
        return [
            Interval(clock_in=ordered[i], clock_out=ordered[i + 1] if i + 1 < len(ordered) else None)
            for i in range(0, len(ordered), 2)
        ]

    def worked_minutes(self, punches: Sequence[Punch]) -> int:
        return sum(i.minutes for i in self.pair(punches))

    def expected_minutes(
        self,
        *,
        day: date,
        resolution: DayResolution,
        rules: EmploymentRules,
        bridge_config: Optional[BridgeDayConfig] = None,
    ) -> tuple[int, int]:
        """Expected minutes and the bridge add-on included in them."""
        if resolution.zeroes_expected:
            return 0, 0
        scheduled = rules.scheduled_minutes(day)
        if scheduled <= 0:
            return 0, 0
        add_on = 0
        if (
            bridge_config is not None
            and bridge_config.year == day.year
            and bridge_config.employment_id == rules.employment_id
        ):
            add_on = bridge_config.add_on_minutes
        return scheduled + add_on, add_on

    def summarize(
        self,
        punches: Sequence[Punch],
        *,
        day: date,
        resolution: DayResolution,
        rules: EmploymentRules,
        bridge_config: Optional[BridgeDayConfig] = None,
        forgiven_minutes: int = 0,
    ) -> DailySummary:
        intervals = self.pair(punches)
        expected, add_on = self.expected_minutes(day=day, resolution=resolution, rules=rules, bridge_config=bridge_config)
        return DailySummary(
            day=day,
            employment_id=rules.employment_id,
            worked_minutes=sum(i.minutes for i in intervals),
            expected_minutes=expected,
            intervals=tuple(intervals),
            punches=tuple(sort_by_considered(punches)),
            resolution=resolution,
            forgiven_minutes=forgiven_minutes,
            bridge_add_on_minutes=add_on,
        )
