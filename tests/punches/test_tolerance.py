from datetime import date, datetime, time

from src.meuponto.meuponto.punches.tolerance import ToleranceApplier

DAY = date(2026, 3, 2)


def test_pause_inside_window_is_considered_as_minimum_break(make_punches):
    punches = make_punches(DAY, "08:00", "12:00", "13:14", "17:00")

    outcome = ToleranceApplier().apply(punches, min_break_minutes=60, tolerance_minutes=15)

    assert outcome.applied
    assert outcome.adjusted_punch_id == 3
    assert outcome.forgiven_minutes == 14
    returned = outcome.punches[2]
    assert returned.timestamp == datetime(2026, 3, 2, 13, 14)
    assert returned.considered == datetime(2026, 3, 2, 13, 0)
    assert [p.is_adjusted for p in outcome.punches] == [False, False, True, False]


def test_pause_beyond_tolerance_is_not_adjusted(make_punches):
    punches = make_punches(DAY, "08:00", "12:00", "13:20", "17:00")

    outcome = ToleranceApplier().apply(punches, min_break_minutes=60, tolerance_minutes=15)

    assert not outcome.applied
    assert all(not p.is_adjusted for p in outcome.punches)


def test_short_pause_is_never_extended(make_punches):
    punches = make_punches(DAY, "08:00", "12:00", "12:55", "17:00")

    outcome = ToleranceApplier().apply(punches, min_break_minutes=60, tolerance_minutes=15)

    assert not outcome.applied


def test_window_edges_are_inclusive(make_punches):
    applier = ToleranceApplier()

    exact = applier.apply(make_punches(DAY, "08:00", "12:00", "13:00", "17:00"), min_break_minutes=60, tolerance_minutes=15)
    upper = applier.apply(make_punches(DAY, "08:00", "12:00", "13:15", "17:00"), min_break_minutes=60, tolerance_minutes=15)

    assert exact.applied and exact.forgiven_minutes == 0
    assert upper.applied and upper.forgiven_minutes == 15


def test_only_one_pause_is_adjusted_per_day(make_punches):
    punches = make_punches(DAY, "08:00", "10:00", "11:10", "12:00", "13:05", "17:00")

    outcome = ToleranceApplier().apply(punches, min_break_minutes=60, tolerance_minutes=15)

    adjusted = [p for p in outcome.punches if p.is_adjusted]
    assert len(adjusted) == 1
    assert adjusted[0].punch_id == 3
    assert adjusted[0].considered == datetime(2026, 3, 2, 11, 0)


def test_ideal_break_start_selects_closest_pause(make_punches):
    punches = make_punches(DAY, "08:00", "10:00", "11:10", "12:00", "13:05", "17:00")

    outcome = ToleranceApplier().apply(
        punches, min_break_minutes=60, tolerance_minutes=15, ideal_break_start=time(12, 0)
    )

    assert outcome.adjusted_punch_id == 5
    assert outcome.punches[4].considered == datetime(2026, 3, 2, 13, 0)
    assert not outcome.punches[2].is_adjusted


def test_stale_considered_times_are_reset(make_punches):
    punches = make_punches(DAY, "08:00", "12:00", "13:30", "17:00")
    stale = [p.with_considered(datetime(2026, 3, 2, 13, 0)) if p.punch_id == 3 else p for p in punches]

    outcome = ToleranceApplier().apply(stale, min_break_minutes=60, tolerance_minutes=15)

    assert not outcome.applied
    assert outcome.punches[2].considered == datetime(2026, 3, 2, 13, 30)
