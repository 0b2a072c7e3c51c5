from __future__ import annotations

import logging
import math
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import format_minutes
from ..workcalendar.model import Holiday
from ..workcalendar.resolver import CalendarResolver
from .model import BridgeDayConfig

logger = logging.getLogger(__name__)


class BridgeDayDistributor:
    """Spreads bridge-day minutes across the working days of a year.

    Working days are weekdays minus every applicable non-bridge holiday.
    Bridge days stay in the divisor. The add-on is rounded up.
    """

    def distribute(
        self,
        *,
        year: int,
        employment_id: int,
        daily_target_minutes: int,
        holidays: Sequence[Holiday] = (),
        bridge_day_count: Optional[int] = None,
        state: Optional[str] = None,
        municipality: Optional[str] = None,
    ) -> BridgeDayConfig:
        resolver = CalendarResolver(holidays)
        bridges = self.bridges_of_year(resolver, year, employment_id, holidays, state=state, municipality=municipality)
        if bridge_day_count is None:
            bridge_day_count = len(bridges)

        total = bridge_day_count * daily_target_minutes
        working_days = resolver.count_working_days(
            date(year, 1, 1), date(year, 12, 31), employment_id, state=state, municipality=municipality
        )

        if working_days == 0:
            add_on = 0
            if total > 0:
                logger.warning(
                    "No working days in %s for employment %s; %d bridge minutes cannot be distributed",
                    year, employment_id, total,
                )
        else:
            add_on = math.ceil(total / working_days)

        names = ", ".join(h.name for h in bridges)
        note = (
            f"{bridge_day_count} bridge day(s) x {format_minutes(daily_target_minutes)} = {format_minutes(total)}; "
            f"{working_days} working days -> {add_on} min/day"
        )
        if names:
            note = f"Bridges: {names}. {note}"

        return BridgeDayConfig(
            year=year,
            employment_id=employment_id,
            bridge_days=bridge_day_count,
            total_compensable_minutes=total,
            working_days=working_days,
            add_on_minutes=add_on,
            note=note,
        )

    @staticmethod
    def bridges_of_year(
        resolver: CalendarResolver,
        year: int,
        employment_id: int,
        holidays: Sequence[Holiday],
        *,
        state: Optional[str] = None,
        municipality: Optional[str] = None,
    ) -> list[Holiday]:
        found: list[Holiday] = []
        for holiday in holidays:
            if not holiday.active or not holiday.is_bridge:
                continue
            on = holiday.date_for_year(year)
            if on is not None and holiday.applies_to(employment_id, state, municipality):
                found.append(holiday)
        return sorted(found, key=lambda h: (h.date_for_year(year), h.holiday_id))
