"""Calendar periods derived from employment rules (weeks, RH months)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

from ..common.datetime_utils import add_months
from ..core import constants


@dataclass(frozen=True)
class Period:
    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1


def week_bounds(day: date, week_start: int = 0) -> Period:
    offset = (day.weekday() - week_start) % 7
    start = day - timedelta(days=offset)
    return Period(start=start, end=start + timedelta(days=6))


def rh_period_bounds(day: date, start_day: int = constants.DEFAULT_RH_PERIOD_START_DAY) -> Period:
    """HR closing period containing `day`.

    Dates before the start day belong to the period opened in the previous month.
    """
    start_day = min(max(start_day, constants.RH_PERIOD_MIN_DAY), constants.RH_PERIOD_MAX_DAY)
    if day.day >= start_day:
        start = day.replace(day=start_day)
    else:
        start = add_months(day, -1).replace(day=start_day)
    end = add_months(start, 1) - timedelta(days=1)
    return Period(start=start, end=end)


def list_rh_periods(start: date, end: date, start_day: int = constants.DEFAULT_RH_PERIOD_START_DAY) -> list[Period]:
    periods: list[Period] = []
    current = rh_period_bounds(start, start_day)
    while current.start <= end:
        periods.append(current)
        current = rh_period_bounds(current.end + timedelta(days=1), start_day)
    return periods
