from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime, time

import pytest

from src.meuponto.meuponto.core.enums import PunchKind, ValidationRule
from src.meuponto.meuponto.core.exceptions import ValidationError
from src.meuponto.meuponto.employment.memory_rules_repository import InMemoryRulesRepository
from src.meuponto.meuponto.employment.model import EmploymentRules
from src.meuponto.meuponto.punches.memory_punch_repository import InMemoryPunchRepository
from src.meuponto.meuponto.punches.service import PunchService
from src.meuponto.meuponto.workcalendar.memory_absence_repository import InMemoryAbsenceRepository
from src.meuponto.meuponto.workcalendar.memory_holiday_repository import InMemoryHolidayRepository
from src.meuponto.meuponto.workcalendar.service import CalendarService

DAY = date(2026, 3, 2)


def _service(fixed_now, **rules_kwargs):
    punches = InMemoryPunchRepository()
    rules = InMemoryRulesRepository([EmploymentRules(employment_id=1, **rules_kwargs)])
    calendar = CalendarService(InMemoryHolidayRepository(), InMemoryAbsenceRepository())
    return PunchService(punches, rules, calendar, clock=lambda: fixed_now), punches


def test_register_stores_tolerance_adjusted_return(fixed_now):
    svc, repo = _service(fixed_now, min_break_minutes=60, break_tolerance_minutes=15)

    for at in (time(8, 0), time(12, 0), time(13, 10), time(17, 0)):
        assert svc.register(employment_id=1, day=DAY, at=at).accepted

    stored = repo.list_for_date(employment_id=1, day=DAY)
    assert [p.considered for p in stored][2] == datetime(2026, 3, 2, 13, 0)
    assert stored[2].timestamp == datetime(2026, 3, 2, 13, 10)


def test_rejected_punch_is_not_persisted(fixed_now):
    svc, repo = _service(fixed_now)
    svc.register(employment_id=1, day=DAY, at=time(8, 0))

    registration = svc.register(employment_id=1, day=DAY, at=time(9, 0), declared_kind=PunchKind.CLOCK_IN)

    assert not registration.accepted
    assert registration.validation.violated_rules == (ValidationRule.SEQUENCE_MISMATCH,)
    assert len(repo.list_for_date(employment_id=1, day=DAY)) == 1


def test_deleting_a_punch_recomputes_tolerance(fixed_now):
    svc, repo = _service(fixed_now, min_break_minutes=60, break_tolerance_minutes=15)
    ids = [svc.register(employment_id=1, day=DAY, at=at).punch.punch_id for at in (time(8, 0), time(12, 0), time(13, 10))]

    svc.delete(employment_id=1, punch_id=ids[1])

    assert all(not p.is_adjusted for p in repo.list_for_date(employment_id=1, day=DAY))


def test_missing_rules_raise(fixed_now):
    svc, _ = _service(fixed_now)
    with pytest.raises(ValidationError):
        svc.register(employment_id=99, day=DAY, at=time(8, 0))


def test_delete_refuses_another_employments_punch(fixed_now):
    svc, _ = _service(fixed_now)
    punch = svc.register(employment_id=1, day=DAY, at=time(8, 0)).punch

    with pytest.raises(ValidationError):
        svc.delete(employment_id=2, punch_id=punch.punch_id)

    assert [p.punch_id for p in svc.list_day(employment_id=1, day=DAY)] == [punch.punch_id]


def test_delete_recomputes_the_punch_day(fixed_now):
    svc, repo = _service(fixed_now, min_break_minutes=60, break_tolerance_minutes=15)
    earlier = date(2026, 2, 27)
    ids = [svc.register(employment_id=1, day=earlier, at=at).punch.punch_id for at in (time(8, 0), time(12, 0), time(13, 10))]
    assert repo.list_for_date(employment_id=1, day=earlier)[2].is_adjusted

    deleted = svc.delete(employment_id=1, punch_id=ids[1])

    assert deleted.day == earlier
    assert all(not p.is_adjusted for p in repo.list_for_date(employment_id=1, day=earlier))


def test_concurrent_registrations_of_one_time_accept_a_single_punch(fixed_now):
    svc, repo = _service(fixed_now)

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: svc.register(employment_id=1, day=DAY, at=time(8, 0)), range(8)))

    assert sum(r.accepted for r in results) == 1
    assert len(repo.list_for_date(employment_id=1, day=DAY)) == 1
