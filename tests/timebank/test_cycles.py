from datetime import date

from src.meuponto.meuponto.core.enums import ClosureKind, CycleUnit
from src.meuponto.meuponto.employment.model import EmploymentRules
from src.meuponto.meuponto.timebank.cycles import cycle_bounds, pending_cycles
from src.meuponto.meuponto.timebank.model import PeriodClosure


def _rules(**kwargs) -> EmploymentRules:
    base = dict(employment_id=1, time_bank_enabled=True, cycle_length=1, cycle_unit=CycleUnit.MONTHS, cycle_start=date(2026, 1, 1))
    base.update(kwargs)
    return EmploymentRules(**base)


def test_monthly_cycle_ends_day_before_next_start():
    period = cycle_bounds(date(2026, 2, 15), anchor=date(2026, 1, 1), length=1, unit=CycleUnit.MONTHS)
    assert (period.start, period.end) == (date(2026, 2, 1), date(2026, 2, 28))

    quarter = cycle_bounds(date(2026, 5, 1), anchor=date(2026, 1, 10), length=3, unit=CycleUnit.MONTHS)
    assert (quarter.start, quarter.end) == (date(2026, 4, 10), date(2026, 7, 9))


def test_day_before_anchor_day_in_month_falls_in_previous_cycle():
    period = cycle_bounds(date(2026, 1, 10), anchor=date(2026, 1, 15), length=1, unit=CycleUnit.MONTHS)
    assert (period.start, period.end) == (date(2025, 12, 15), date(2026, 1, 14))


def test_weekly_cycle():
    period = cycle_bounds(date(2026, 1, 20), anchor=date(2026, 1, 5), length=2, unit=CycleUnit.WEEKS)
    assert (period.start, period.end) == (date(2026, 1, 19), date(2026, 2, 1))


def test_pending_cycles_skip_closed_and_running_ones():
    rules = _rules()
    assert [(p.start, p.end) for p in pending_cycles(rules, [], today=date(2026, 3, 2))] == [
        (date(2026, 1, 1), date(2026, 1, 31)),
        (date(2026, 2, 1), date(2026, 2, 28)),
    ]

    january = PeriodClosure(1, 1, date(2026, 2, 1), date(2026, 1, 1), date(2026, 1, 31), 0, ClosureKind.TIME_BANK_CYCLE)
    assert [p.start for p in pending_cycles(rules, [january], today=date(2026, 3, 2))] == [date(2026, 2, 1)]


def test_pending_cycles_are_bounded():
    rules = _rules(cycle_unit=CycleUnit.WEEKS, cycle_start=date(2025, 1, 6))
    assert len(pending_cycles(rules, [], today=date(2026, 3, 2))) == 20


def test_no_cycles_without_time_bank():
    assert pending_cycles(_rules(time_bank_enabled=False), [], today=date(2026, 3, 2)) == []
