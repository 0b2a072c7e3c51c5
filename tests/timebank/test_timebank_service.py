from datetime import date, datetime

from src.meuponto.meuponto.bridges.memory_bridge_repository import InMemoryBridgeConfigRepository
from src.meuponto.meuponto.core.enums import CycleUnit, FailureCode
from src.meuponto.meuponto.employment.memory_rules_repository import InMemoryRulesRepository
from src.meuponto.meuponto.employment.model import EmploymentRules
from src.meuponto.meuponto.punches.memory_punch_repository import InMemoryPunchRepository
from src.meuponto.meuponto.summary.service import DailySummaryService
from src.meuponto.meuponto.timebank.service import TimeBankService
from src.meuponto.meuponto.workcalendar.memory_absence_repository import InMemoryAbsenceRepository
from src.meuponto.meuponto.workcalendar.memory_holiday_repository import InMemoryHolidayRepository
from src.meuponto.meuponto.workcalendar.service import CalendarService


def _service(fixed_now, rules: EmploymentRules):
    punches = InMemoryPunchRepository()
    rules_repo = InMemoryRulesRepository([rules])
    calendar = CalendarService(InMemoryHolidayRepository(), InMemoryAbsenceRepository())
    summaries = DailySummaryService(punches, rules_repo, calendar, InMemoryBridgeConfigRepository())
    return TimeBankService(summaries, rules_repo, clock=lambda: fixed_now), summaries, punches


def test_close_pending_cycles_closes_each_ended_month(fixed_now):
    rules = EmploymentRules(
        employment_id=1,
        effective_from=date(2026, 1, 1),
        time_bank_enabled=True,
        cycle_length=1,
        cycle_unit=CycleUnit.MONTHS,
        cycle_start=date(2026, 1, 1),
    )
    svc, summaries, punches = _service(fixed_now, rules)
    for hour in (8, 12, 13, 18):
        punches.create(employment_id=1, timestamp=datetime(2026, 1, 5, hour, 0))

    closures = svc.close_pending_cycles(employment_id=1).unwrap()

    assert [(c.period_start, c.period_end) for c in closures] == [
        (date(2026, 1, 1), date(2026, 1, 31)),
        (date(2026, 2, 1), date(2026, 2, 28)),
    ]
    january = summaries.summarize_period(employment_id=1, start=date(2026, 1, 1), end=date(2026, 1, 31))
    assert closures[0].balance_minutes == january.balance
    assert svc.close_pending_cycles(employment_id=1).unwrap() == []
    assert svc.ledger(1).running_balance() == 0


def test_close_pending_requires_time_bank(fixed_now):
    svc, _, _ = _service(fixed_now, EmploymentRules(employment_id=1))

    result = svc.close_pending_cycles(employment_id=1)

    assert result.failure.code == FailureCode.TIME_BANK_DISABLED
    assert svc.close_pending_cycles(employment_id=2).failure.code == FailureCode.RULES_NOT_FOUND


def test_balance_as_of_rebuilds_from_summaries(fixed_now):
    svc, _, punches = _service(fixed_now, EmploymentRules(employment_id=1))
    for hour in (8, 12, 13, 18):
        punches.create(employment_id=1, timestamp=datetime(2026, 2, 2, hour, 0))

    balance = svc.balance_as_of(employment_id=1, on_date=date(2026, 2, 3), since=date(2026, 2, 2))

    # +60 on Monday, nothing worked on Tuesday
    assert balance.unwrap() == 60 - 480


def test_refused_close_leaves_day_balances_untouched(fixed_now):
    rules = EmploymentRules(
        employment_id=1,
        effective_from=date(2026, 1, 1),
        time_bank_enabled=True,
        cycle_length=1,
        cycle_unit=CycleUnit.MONTHS,
        cycle_start=date(2026, 1, 1),
    )
    svc, _, _ = _service(fixed_now, rules)

    result = svc.close_cycle(employment_id=1, start=date(2026, 3, 3), end=date(2026, 3, 31))

    assert result.failure.code == FailureCode.CYCLE_NOT_ENDED
    ledger = svc.ledger(1)
    assert ledger.running_balance() == 0
    assert ledger.day_balance(date(2026, 3, 10)) is None
    assert ledger.closures() == []


def test_overlapping_close_is_refused_before_rebuilding(fixed_now):
    svc, _, punches = _service(fixed_now, EmploymentRules(employment_id=1, effective_from=date(2026, 1, 1)))
    svc.close_cycle(employment_id=1, start=date(2026, 2, 2), end=date(2026, 2, 6)).unwrap()
    for hour in (8, 12, 13, 18):
        punches.create(employment_id=1, timestamp=datetime(2026, 2, 3, hour, 0))

    result = svc.close_cycle(employment_id=1, start=date(2026, 2, 3), end=date(2026, 2, 10))

    assert result.failure.code == FailureCode.PERIOD_ALREADY_CLOSED
    # the day punched after the first close was not re-recorded
    assert svc.ledger(1).day_balance(date(2026, 2, 3)) == -480
