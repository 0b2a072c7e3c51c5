from __future__ import annotations

from datetime import date, datetime

import pytest

from src.meuponto.meuponto.common.datetime_utils import parse_hhmm
from src.meuponto.meuponto.punches.model import Punch


@pytest.fixture
def fixed_now() -> datetime:
    # Monday
    return datetime(2026, 3, 2, 18, 0)


@pytest.fixture
def make_punches():
    def _make(day: date, *times: str, employment_id: int = 1, first_id: int = 1) -> list[Punch]:
        return [
            Punch(punch_id=first_id + i, employment_id=employment_id, timestamp=datetime.combine(day, parse_hhmm(t)))
            for i, t in enumerate(times)
        ]

    return _make
