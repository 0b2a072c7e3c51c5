from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class BridgeDayConfig:
    """Yearly spread of bridge-day workload over the remaining working days.

    `add_on_minutes * working_days >= total_compensable_minutes` whenever
    there is at least one working day.
    """

    year: int
    employment_id: int
    bridge_days: int
    total_compensable_minutes: int
    working_days: int
    add_on_minutes: int
    note: Optional[str] = None

    @property
    def degenerate(self) -> bool:
        return self.working_days == 0 and self.total_compensable_minutes > 0

    @property
    def distributed_minutes(self) -> int:
        return self.add_on_minutes * self.working_days

    @property
    def margin_minutes(self) -> int:
        """Minutes charged above the compensable total because of rounding up."""
        return self.distributed_minutes - self.total_compensable_minutes

    @property
    def is_balanced(self) -> bool:
        return self.degenerate or self.margin_minutes >= 0
