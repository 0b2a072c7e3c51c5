import logging
import threading
from datetime import date

import pytest

from src.meuponto.meuponto.core.enums import AuditAction, ClosureKind, FailureCode
from src.meuponto.meuponto.core.exceptions import LedgerError
from src.meuponto.meuponto.summary.model import DailySummary
from src.meuponto.meuponto.timebank.ledger import TimeBankLedger


def _day(day: date, balance: int, employment_id: int = 1) -> DailySummary:
    return DailySummary(day=day, employment_id=employment_id, worked_minutes=480 + balance, expected_minutes=480)


@pytest.fixture
def ledger(fixed_now):
    ledger = TimeBankLedger(1, clock=lambda: fixed_now)
    for day, balance in (
        (date(2026, 2, 2), 30),
        (date(2026, 2, 3), -10),
        (date(2026, 2, 5), 20),
        (date(2026, 2, 9), 15),
        (date(2026, 2, 10), 5),
    ):
        ledger.record_day(_day(day, balance)).unwrap()
    return ledger


def test_record_day_replaces_previous_value(ledger):
    assert ledger.running_balance() == 60

    assert ledger.record_day(_day(date(2026, 2, 3), 0)).unwrap() == 70
    assert ledger.day_balance(date(2026, 2, 3)) == 0


def test_closure_ending_on_or_after_query_date_is_ignored(ledger):
    closure = ledger.close_cycle(date(2026, 2, 1), date(2026, 2, 10)).unwrap()
    assert closure.balance_minutes == 60

    assert ledger.balance_as_of(date(2026, 2, 5)).unwrap() == 40
    assert ledger.balance_as_of(date(2026, 2, 10)).unwrap() == 60
    assert ledger.balance_as_of(date(2026, 2, 11)).unwrap() == 0


def test_closing_resets_running_balance(ledger):
    ledger.close_cycle(date(2026, 2, 1), date(2026, 2, 10)).unwrap()
    assert ledger.running_balance() == 0

    ledger.record_day(_day(date(2026, 2, 11), 7))
    assert ledger.running_balance() == 7


def test_non_relevant_closure_does_not_reset(ledger):
    ledger.close_cycle(date(2026, 2, 2), date(2026, 2, 8), ClosureKind.WEEKLY).unwrap()

    assert ledger.running_balance() == 60
    assert ledger.balance_as_of(date(2026, 2, 10)).unwrap() == 60


def test_close_cycle_failures(ledger):
    inverted = ledger.close_cycle(date(2026, 2, 10), date(2026, 2, 1))
    not_ended = ledger.close_cycle(date(2026, 3, 1), date(2026, 3, 2))
    ledger.close_cycle(date(2026, 2, 1), date(2026, 2, 10)).unwrap()
    overlap = ledger.close_cycle(date(2026, 2, 5), date(2026, 2, 20))
    other_kind = ledger.close_cycle(date(2026, 2, 5), date(2026, 2, 20), ClosureKind.MONTHLY)

    assert inverted.failure.code == FailureCode.INVALID_PERIOD
    assert not_ended.failure.code == FailureCode.CYCLE_NOT_ENDED
    assert overlap.failure.code == FailureCode.PERIOD_ALREADY_CLOSED
    assert other_kind.ok
    with pytest.raises(LedgerError):
        overlap.unwrap()


def test_adjustment_validation(ledger):
    cases = [
        (0, "Valid justification"),
        (241, "Valid justification"),
        (30, "too short"),
        (30, "x" * 501),
    ]
    for minutes, text in cases:
        result = ledger.adjust(minutes, text)
        assert result.failure.code == FailureCode.INVALID_ADJUSTMENT

    future = ledger.adjust(30, "Valid justification", on_date=date(2026, 3, 3))
    assert future.failure.code == FailureCode.INVALID_ADJUSTMENT
    assert ledger.adjustments() == []


def test_adjustment_is_logged_and_audited(ledger, caplog):
    with caplog.at_level(logging.INFO):
        adjustment = ledger.adjust(-45, "  Doctor appointment not registered  ", on_date=date(2026, 2, 4)).unwrap()

    assert adjustment.justification == "Doctor appointment not registered"
    assert "manual adjustment" in caplog.text
    assert ledger.running_balance() == 15
    assert ledger.balance_as_of(date(2026, 2, 4)).unwrap() == -25
    assert [e.action for e in ledger.audit_log()] == [AuditAction.ADJUST]


def test_delete_closure_restores_balances(ledger):
    closure = ledger.close_cycle(date(2026, 2, 1), date(2026, 2, 10)).unwrap()

    assert ledger.delete_closure(closure.closure_id).ok
    assert ledger.running_balance() == 60
    assert ledger.balance_as_of(date(2026, 2, 11)).unwrap() == 60
    assert ledger.delete_closure(closure.closure_id).failure.code == FailureCode.CLOSURE_NOT_FOUND
    assert [e.action for e in ledger.audit_log()] == [AuditAction.CLOSE, AuditAction.DELETE_CLOSURE]


def test_no_baseline_before_first_entry(fixed_now, ledger):
    empty = TimeBankLedger(1, clock=lambda: fixed_now)

    assert empty.balance_as_of(date(2026, 2, 5)).failure.code == FailureCode.NO_BASELINE
    assert ledger.balance_as_of(date(2026, 2, 1)).failure.code == FailureCode.NO_BASELINE


def test_summary_of_other_employment_is_refused(ledger):
    result = ledger.record_day(_day(date(2026, 2, 11), 10, employment_id=2))

    assert result.failure.code == FailureCode.WRONG_EMPLOYMENT
    assert ledger.running_balance() == 60


def test_concurrent_adjustments_are_serialised(fixed_now):
    ledger = TimeBankLedger(1, clock=lambda: fixed_now)

    def worker():
        ledger.adjust(1, "Concurrent correction", on_date=date(2026, 2, 2)).unwrap()

    threads = [threading.Thread(target=worker) for _ in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert ledger.running_balance() == 20
    assert len({a.adjustment_id for a in ledger.adjustments()}) == 20
