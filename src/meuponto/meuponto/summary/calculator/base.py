from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional, Sequence

from ...bridges.model import BridgeDayConfig
from ...employment.model import EmploymentRules
from ...punches.model import Punch
from ...workcalendar.model import DayResolution
from ..model import DailySummary


class SummaryCalculator(ABC):
    """Calculator interface (Strategy Pattern for daily summaries)."""

    @abstractmethod
    def worked_minutes(self, punches: Sequence[Punch]) -> int:
        raise NotImplementedError

    @abstractmethod
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
        raise NotImplementedError
