from datetime import date, time

import pytest

from src.meuponto.meuponto.common.datetime_utils import add_months, format_minutes
from src.meuponto.meuponto.core.enums import ClosureKind
from src.meuponto.meuponto.core.exceptions import ValidationError
from src.meuponto.meuponto.employment.memory_rules_repository import InMemoryRulesRepository
from src.meuponto.meuponto.employment.model import DaySchedule, EmploymentRules
from src.meuponto.meuponto.employment.periods import list_rh_periods, rh_period_bounds, week_bounds


def test_default_workweek_is_monday_to_friday():
    rules = EmploymentRules(employment_id=1, daily_target_minutes=440)

    assert rules.scheduled_minutes(date(2026, 3, 2)) == 440
    assert rules.scheduled_minutes(date(2026, 3, 7)) == 0
    assert rules.schedule_for(date(2026, 3, 8)) is None


def test_schedule_overrides_break_policy():
    rules = EmploymentRules(
        employment_id=1,
        min_break_minutes=60,
        break_tolerance_minutes=10,
        schedules=(DaySchedule(weekday=5, target_minutes=240, min_break_minutes=15, ideal_break_start=time(10, 0)),),
    )

    saturday = rules.break_policy(date(2026, 3, 7))
    monday = rules.break_policy(date(2026, 3, 2))

    assert (saturday.min_break_minutes, saturday.tolerance_minutes, saturday.ideal_break_start) == (15, 10, time(10, 0))
    assert (monday.min_break_minutes, monday.tolerance_minutes) == (60, 10)


def test_invalid_rules_are_rejected():
    with pytest.raises(ValidationError):
        EmploymentRules(employment_id=1, max_punches=0)
    with pytest.raises(ValidationError):
        EmploymentRules(employment_id=1, week_start=7)


def test_relevant_closure_kinds_follow_reset_flags():
    assert EmploymentRules(employment_id=1).relevant_closure_kinds() == {ClosureKind.TIME_BANK_CYCLE}
    assert EmploymentRules(employment_id=1, reset_monthly=True).relevant_closure_kinds() == {
        ClosureKind.TIME_BANK_CYCLE,
        ClosureKind.MONTHLY,
    }


def test_rules_version_in_force_is_never_a_later_one():
    repo = InMemoryRulesRepository(
        [
            EmploymentRules(employment_id=1, daily_target_minutes=480),
            EmploymentRules(employment_id=1, effective_from=date(2026, 3, 1), daily_target_minutes=360),
        ]
    )

    assert repo.get_effective(employment_id=1, on_date=date(2026, 2, 28)).daily_target_minutes == 480
    assert repo.get_effective(employment_id=1, on_date=date(2026, 3, 1)).daily_target_minutes == 360
    assert repo.get_effective(employment_id=2, on_date=date(2026, 3, 1)) is None


def test_week_bounds_respect_week_start():
    # Wednesday 2026-03-04
    monday_week = week_bounds(date(2026, 3, 4))
    sunday_week = week_bounds(date(2026, 3, 4), week_start=6)

    assert (monday_week.start, monday_week.end) == (date(2026, 3, 2), date(2026, 3, 8))
    assert (sunday_week.start, sunday_week.end) == (date(2026, 3, 1), date(2026, 3, 7))


def test_rh_period_before_start_day_belongs_to_previous_month():
    period = rh_period_bounds(date(2026, 3, 10), 21)
    assert (period.start, period.end) == (date(2026, 2, 21), date(2026, 3, 20))

    period = rh_period_bounds(date(2026, 3, 21), 21)
    assert (period.start, period.end) == (date(2026, 3, 21), date(2026, 4, 20))


def test_rh_start_day_is_clamped():
    period = rh_period_bounds(date(2026, 3, 30), 31)
    assert (period.start, period.end) == (date(2026, 3, 28), date(2026, 4, 27))
    assert EmploymentRules(employment_id=1, rh_period_start_day=0).rh_start_day == 1


def test_list_rh_periods_covers_range():
    periods = list_rh_periods(date(2026, 1, 5), date(2026, 3, 25), 21)

    assert [p.start for p in periods] == [date(2025, 12, 21), date(2026, 1, 21), date(2026, 2, 21), date(2026, 3, 21)]


def test_add_months_clamps_day_and_format_minutes():
    assert add_months(date(2026, 1, 31), 1) == date(2026, 2, 28)
    assert add_months(date(2026, 11, 30), 3) == date(2027, 2, 28)
    assert format_minutes(-75, signed=True) == "-01:15"
    assert format_minutes(480) == "08:00"
