"""Break-return tolerance.

A day gets at most one adjustment: the principal break pause, if its length
falls within [minimum break, minimum break + tolerance], has its return punch
considered at break start + minimum break. Any excess inside the window is
forgiven; a deficit never is.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import Optional, Sequence

from .model import Punch, sort_by_actual

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BreakPause:
    clock_out: Punch
    clock_in: Punch

    @property
    def seconds(self) -> float:
        return (self.clock_in.timestamp - self.clock_out.timestamp).total_seconds()


@dataclass(frozen=True)
class ToleranceOutcome:
    punches: tuple[Punch, ...]
    adjusted_punch_id: Optional[int] = None
    forgiven_minutes: int = 0

    @property
    def applied(self) -> bool:
        return self.adjusted_punch_id is not None


class ToleranceApplier:
    def apply(
        self,
        punches: Sequence[Punch],
        *,
        min_break_minutes: int,
        tolerance_minutes: int,
        ideal_break_start: Optional[time] = None,
    ) -> ToleranceOutcome:
        ordered = [p.with_considered(None) for p in sort_by_actual(punches)]
        principal = self.principal_pause(ordered, min_break_minutes=min_break_minutes, ideal_break_start=ideal_break_start)
        if principal is None:
            return ToleranceOutcome(punches=tuple(ordered))

        lower = min_break_minutes * 60
        upper = (min_break_minutes + max(tolerance_minutes, 0)) * 60
        if not lower <= principal.seconds <= upper:
            logger.debug(
                "Principal pause of %.0fs outside tolerance window [%d, %d]s; no adjustment",
                principal.seconds, lower, upper,
            )
            return ToleranceOutcome(punches=tuple(ordered))

        considered = principal.clock_out.timestamp + timedelta(minutes=min_break_minutes)
        forgiven = int((principal.clock_in.timestamp - considered).total_seconds() // 60)
        adjusted = [
            p.with_considered(considered) if p.punch_id == principal.clock_in.punch_id else p
            for p in ordered
        ]
        logger.debug(
            "Break tolerance applied to punch %s: %s -> %s",
            principal.clock_in.punch_id, principal.clock_in.timestamp, considered,
        )
        return ToleranceOutcome(
            punches=tuple(adjusted),
            adjusted_punch_id=principal.clock_in.punch_id,
            forgiven_minutes=forgiven,
        )

    @staticmethod
    def pauses(ordered: Sequence[Punch]) -> list[BreakPause]:
        """Gaps between each clock-out (odd index) and the following clock-in."""
        return [BreakPause(clock_out=ordered[i], clock_in=ordered[i + 1]) for i in range(1, len(ordered) - 1, 2)]

    def principal_pause(
        self,
        ordered: Sequence[Punch],
        *,
        min_break_minutes: int,
        ideal_break_start: Optional[time] = None,
    ) -> Optional[BreakPause]:
        long_enough = [p for p in self.pauses(ordered) if p.seconds >= min_break_minutes * 60]
        if not long_enough:
            return None
        if ideal_break_start is None:
            return long_enough[0]

        def distance(pause: BreakPause) -> float:
            out = pause.clock_out.timestamp
            ideal = datetime.combine(out.date(), ideal_break_start, tzinfo=out.tzinfo)
            return abs((out - ideal).total_seconds())

        # min() keeps the first pause on ties
        return min(long_enough, key=distance)
