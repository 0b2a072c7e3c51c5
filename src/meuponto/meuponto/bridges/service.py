from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..core.enums import FailureCode
from ..core.results import Result
from ..employment.repository import RulesRepository
from ..workcalendar.repository import HolidayRepository
from .distributor import BridgeDayDistributor
from .model import BridgeDayConfig
from .repository import BridgeConfigRepository

logger = logging.getLogger(__name__)


class BridgeService:
    def __init__(
        self,
        *,
        holidays: HolidayRepository,
        rules: RulesRepository,
        configs: BridgeConfigRepository,
        distributor: Optional[BridgeDayDistributor] = None,
    ):
        self._holidays = holidays
        self._rules = rules
        self._configs = configs
        self._distributor = distributor or BridgeDayDistributor()

    def recalculate(
        self,
        *,
        employment_id: int,
        year: int,
        daily_target_minutes: Optional[int] = None,
    ) -> Result[BridgeDayConfig]:
        """Distribute the year's bridge days and store the resulting config."""
        rules = self._rules.get_effective(employment_id=employment_id, on_date=date(year, 12, 31))
        if rules is None and daily_target_minutes is None:
            return Result.fail(FailureCode.RULES_NOT_FOUND, f"No rules for employment {employment_id} in {year}")

        config = self._distributor.distribute(
            year=year,
            employment_id=employment_id,
            daily_target_minutes=daily_target_minutes if daily_target_minutes is not None else rules.daily_target_minutes,
            holidays=self._holidays.list_active(),
            state=rules.state if rules else None,
            municipality=rules.municipality if rules else None,
        )
        self._configs.save(config)
        logger.info(
            "Bridge config %s/%s: %d day(s), add-on %d min over %d working days",
            employment_id, year, config.bridge_days, config.add_on_minutes, config.working_days,
        )
        return Result.success(config)

    def get(self, *, employment_id: int, year: int) -> Optional[BridgeDayConfig]:
        return self._configs.get(employment_id=employment_id, year=year)
