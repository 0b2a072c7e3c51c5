import logging
from datetime import date, timedelta

from src.meuponto.meuponto.bridges.distributor import BridgeDayDistributor
from src.meuponto.meuponto.core.enums import HolidayKind
from src.meuponto.meuponto.workcalendar.model import Holiday


def _weekday_holidays(year: int, count: int, first_id: int = 100) -> list[Holiday]:
    holidays, day = [], date(year, 1, 1)
    while len(holidays) < count:
        if day.weekday() < 5:
            holidays.append(Holiday.single(first_id + len(holidays), f"H{len(holidays)}", HolidayKind.NATIONAL, on=day))
        day += timedelta(days=1)
    return holidays


def test_three_bridges_over_248_working_days_adds_six_minutes():
    # 2026 has 261 weekdays
    holidays = _weekday_holidays(2026, 13)
    holidays += [
        Holiday.bridge(1, "Carnival bridge", on=date(2026, 2, 16)),
        Holiday.bridge(2, "Corpus Christi bridge", on=date(2026, 6, 5)),
        Holiday.bridge(3, "Christmas bridge", on=date(2026, 12, 24)),
    ]

    config = BridgeDayDistributor().distribute(year=2026, employment_id=1, daily_target_minutes=480, holidays=holidays)

    assert config.bridge_days == 3
    assert config.total_compensable_minutes == 1440
    assert config.working_days == 248
    assert config.add_on_minutes == 6
    assert config.distributed_minutes == 1488
    assert config.margin_minutes == 48
    assert config.is_balanced
    assert "Carnival bridge" in config.note


def test_add_on_always_covers_total():
    distributor = BridgeDayDistributor()
    holidays = _weekday_holidays(2026, 9)
    for count in range(0, 7):
        for target in (360, 440, 480, 528):
            config = distributor.distribute(
                year=2026, employment_id=1, daily_target_minutes=target, holidays=holidays, bridge_day_count=count
            )
            assert config.add_on_minutes * config.working_days >= config.total_compensable_minutes


def test_bridges_of_other_employments_are_not_counted():
    holidays = [
        Holiday.bridge(1, "Mine", on=date(2026, 2, 16), employment_id=1),
        Holiday.bridge(2, "Theirs", on=date(2026, 6, 5), employment_id=2),
    ]

    config = BridgeDayDistributor().distribute(year=2026, employment_id=1, daily_target_minutes=480, holidays=holidays)

    assert config.bridge_days == 1
    assert config.working_days == 261


def test_state_holiday_of_other_state_stays_a_working_day():
    holidays = [Holiday.annual(1, "State day", HolidayKind.STATE, month=3, day=2, state="SP")]

    here = BridgeDayDistributor().distribute(
        year=2026, employment_id=1, daily_target_minutes=480, holidays=holidays, bridge_day_count=1, state="SP"
    )
    elsewhere = BridgeDayDistributor().distribute(
        year=2026, employment_id=1, daily_target_minutes=480, holidays=holidays, bridge_day_count=1, state="AM"
    )

    assert here.working_days == 260
    assert elsewhere.working_days == 261


def test_zero_working_days_is_degenerate(caplog):
    holidays = _weekday_holidays(2026, 261)

    with caplog.at_level(logging.WARNING):
        config = BridgeDayDistributor().distribute(
            year=2026, employment_id=1, daily_target_minutes=480, holidays=holidays, bridge_day_count=2
        )

    assert config.working_days == 0
    assert config.add_on_minutes == 0
    assert config.degenerate
    assert "cannot be distributed" in caplog.text
