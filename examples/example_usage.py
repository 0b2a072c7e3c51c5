"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the accounting rules live in the services and
the engine.
"""

import importlib
from datetime import date, time

from config import get_settings_module

from src.meuponto.meuponto.container import build_container
from src.meuponto.meuponto.employment.model import EmploymentRules


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(default_rules=settings.DEFAULT_RULES, trust_client_clock=True)
    container.rules_repo.save(EmploymentRules(employment_id=1, min_break_minutes=60, break_tolerance_minutes=15))

    day = date(2026, 3, 2)
    for at in (time(8, 0), time(12, 0), time(13, 12), time(17, 0)):
        registration = container.punch_service.register(employment_id=1, day=day, at=at, allow_future_time=True)
        print(at, "accepted" if registration.accepted else registration.validation.violations)

    summary = container.summary_service.compute_daily_summary(employment_id=1, day=day)
    print(f"worked={summary.worked_minutes} expected={summary.expected_minutes} balance={summary.balance}")


if __name__ == "__main__":
    main()
