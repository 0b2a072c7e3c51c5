from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional

from .bridges.memory_bridge_repository import InMemoryBridgeConfigRepository
from .bridges.service import BridgeService
from .common.datetime_utils import now_local
from .employment.memory_rules_repository import InMemoryRulesRepository
from .punches.memory_punch_repository import InMemoryPunchRepository
from .punches.service import PunchService
from .summary.service import DailySummaryService
from .timebank.service import TimeBankService
from .workcalendar.memory_absence_repository import InMemoryAbsenceRepository
from .workcalendar.memory_holiday_repository import InMemoryHolidayRepository
from .workcalendar.service import AbsenceService, CalendarService, HolidayService


@dataclass(frozen=True)
class Container:
    rules_repo: InMemoryRulesRepository
    punches_repo: InMemoryPunchRepository
    holidays_repo: InMemoryHolidayRepository
    absences_repo: InMemoryAbsenceRepository
    bridges_repo: InMemoryBridgeConfigRepository

    calendar_service: CalendarService
    holiday_service: HolidayService
    absence_service: AbsenceService
    bridge_service: BridgeService
    punch_service: PunchService
    summary_service: DailySummaryService
    timebank_service: TimeBankService

    default_rules: dict = field(default_factory=dict)
    trust_client_clock: bool = False


def build_container(
    *,
    default_rules: Optional[dict] = None,
    trust_client_clock: bool = False,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    rules_repo = InMemoryRulesRepository()
    punches_repo = InMemoryPunchRepository()
    holidays_repo = InMemoryHolidayRepository()
    absences_repo = InMemoryAbsenceRepository()
    bridges_repo = InMemoryBridgeConfigRepository()

    calendar_service = CalendarService(holidays_repo, absences_repo)
    summary_service = DailySummaryService(punches_repo, rules_repo, calendar_service, bridges_repo)

    return Container(
        rules_repo=rules_repo,
        punches_repo=punches_repo,
        holidays_repo=holidays_repo,
        absences_repo=absences_repo,
        bridges_repo=bridges_repo,
        calendar_service=calendar_service,
        holiday_service=HolidayService(holidays_repo),
        absence_service=AbsenceService(absences_repo),
        bridge_service=BridgeService(holidays=holidays_repo, rules=rules_repo, configs=bridges_repo),
        punch_service=PunchService(punches_repo, rules_repo, calendar_service, clock=clock),
        summary_service=summary_service,
        timebank_service=TimeBankService(summary_service, rules_repo, clock=clock),
        default_rules=dict(default_rules or {}),
        trust_client_clock=trust_client_clock,
    )
