from __future__ import annotations

from datetime import date

from flask import Flask, jsonify

from ..common.datetime_utils import parse_hhmm
from ..common.http import arg_date, error_json, iso, payload
from ..core.enums import CycleUnit
from ..core.exceptions import ValidationError
from ..container import Container
from .model import DaySchedule, EmploymentRules

_INT_FIELDS = (
    "daily_target_minutes",
    "max_shift_minutes",
    "min_interjourney_rest_minutes",
    "min_break_minutes",
    "break_tolerance_minutes",
    "week_start",
    "rh_period_start_day",
    "cycle_length",
    "max_punches",
    "min_punch_spacing_minutes",
)
_BOOL_FIELDS = ("time_bank_enabled", "reset_weekly", "reset_monthly")


def rules_from_payload(employment_id: int, data: dict, defaults: dict) -> EmploymentRules:
    values: dict = {"employment_id": employment_id, "effective_from": arg_date(data, "effective_from", date.min)}
    try:
        for name in _INT_FIELDS:
            if name in data:
                values[name] = int(data[name])
            elif name in defaults:
                values[name] = int(defaults[name])
        for name in _BOOL_FIELDS:
            if name in data:
                values[name] = bool(data[name])
        if data.get("ideal_break_start"):
            values["ideal_break_start"] = parse_hhmm(str(data["ideal_break_start"]))
        if data.get("cycle_unit"):
            values["cycle_unit"] = CycleUnit(str(data["cycle_unit"]).upper())
        if data.get("cycle_start"):
            values["cycle_start"] = arg_date(data, "cycle_start")
        for name in ("state", "municipality"):
            if data.get(name):
                values[name] = str(data[name]).strip()
        if data.get("schedules") is not None:
            values["schedules"] = tuple(
                DaySchedule(
                    weekday=int(s["weekday"]),
                    target_minutes=int(s["target_minutes"]),
                    min_break_minutes=s.get("min_break_minutes"),
                    break_tolerance_minutes=s.get("break_tolerance_minutes"),
                    ideal_break_start=parse_hhmm(s["ideal_break_start"]) if s.get("ideal_break_start") else None,
                )
                for s in data["schedules"]
            )
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid rules payload: {e}") from e
    return EmploymentRules(**values)


def rules_to_dict(rules: EmploymentRules) -> dict:
    return {
        "employment_id": rules.employment_id,
        "effective_from": None if rules.effective_from == date.min else rules.effective_from.isoformat(),
        **{name: getattr(rules, name) for name in _INT_FIELDS + _BOOL_FIELDS},
        "ideal_break_start": rules.ideal_break_start.strftime("%H:%M") if rules.ideal_break_start else None,
        "cycle_unit": rules.cycle_unit.value,
        "cycle_start": iso(rules.cycle_start),
        "state": rules.state,
        "municipality": rules.municipality,
        "schedules": [{"weekday": s.weekday, "target_minutes": s.target_minutes} for s in rules.schedules or ()],
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/employments/<int:employment_id>/rules", methods=["PUT"], endpoint="save_rules")
    def save_rules(employment_id: int):
        rules = rules_from_payload(employment_id, payload(), container.default_rules)
        container.rules_repo.save(rules)
        return jsonify(rules_to_dict(rules)), 201

    @app.route("/employments/<int:employment_id>/rules", methods=["GET"], endpoint="list_rules")
    def list_rules(employment_id: int):
        versions = container.rules_repo.list_versions(employment_id=employment_id)
        if not versions:
            return error_json("No rules configured for this employment", 404)
        return jsonify([rules_to_dict(v) for v in versions])
