from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_minutes
from ..common.http import arg_date
from ..container import Container
from .model import DailySummary, PeriodSummary


def daily_to_dict(s: DailySummary) -> dict:
    return {
        "date": s.day.isoformat(),
        "kind": s.resolution.kind.value if s.resolution else None,
        "worked_minutes": s.worked_minutes,
        "expected_minutes": s.expected_minutes,
        "balance_minutes": s.balance,
        "balance": format_minutes(s.balance, signed=True),
        "complete": s.complete,
        "forgiven_minutes": s.forgiven_minutes,
        "bridge_add_on_minutes": s.bridge_add_on_minutes,
        "intervals": [
            {
                "clock_in": i.clock_in.considered.strftime("%H:%M"),
                "clock_out": i.clock_out.considered.strftime("%H:%M") if i.clock_out else None,
                "minutes": i.minutes,
            }
            for i in s.intervals
        ],
        "warnings": list(s.warnings),
    }


def period_to_dict(p: PeriodSummary) -> dict:
    return {
        "start": p.start.isoformat(),
        "end": p.end.isoformat(),
        "worked_minutes": p.worked_minutes,
        "expected_minutes": p.expected_minutes,
        "balance_minutes": p.balance,
        "balance": format_minutes(p.balance, signed=True),
        "days_worked": p.days_worked,
        "days_with_absence": p.days_with_absence,
        "workdays_without_punches": p.workdays_without_punches,
        "days": [daily_to_dict(d) for d in p.days],
    }


def register(app: Flask, container: Container) -> None:
    service = container.summary_service

    @app.route("/employments/<int:employment_id>/summary/<day>", methods=["GET"], endpoint="daily_summary")
    def daily_summary(employment_id: int, day: str):
        on = arg_date({"day": day}, "day")
        return jsonify(daily_to_dict(service.compute_daily_summary(employment_id=employment_id, day=on)))

    @app.route("/employments/<int:employment_id>/summary", methods=["GET"], endpoint="period_summary")
    def period_summary(employment_id: int):
        scope = request.args.get("scope", "range")
        if scope == "week":
            period = service.summarize_week(employment_id=employment_id, day=arg_date(request.args, "date"))
        elif scope == "rh":
            period = service.summarize_rh_period(employment_id=employment_id, day=arg_date(request.args, "date"))
        else:
            period = service.summarize_period(
                employment_id=employment_id,
                start=arg_date(request.args, "start"),
                end=arg_date(request.args, "end"),
            )
        return jsonify(period_to_dict(period))
