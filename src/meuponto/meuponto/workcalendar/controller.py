from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import arg_date, arg_int, error_json, iso, payload, result_json
from ..common.validators import require_non_empty
from ..core.enums import AbsenceType, HolidayKind, HolidayScope
from ..core.exceptions import ValidationError
from ..container import Container
from .model import Absence, DayResolution, Holiday


def holiday_from_payload(holiday_id: int, data: dict) -> Holiday:
    try:
        kind = HolidayKind(str(data.get("kind", "")).upper())
    except ValueError as e:
        raise ValidationError("'kind' must be one of NATIONAL, STATE, MUNICIPAL, OPTIONAL, BRIDGE") from e

    name = require_non_empty(str(data.get("name") or ""), "name")

    extra = {
        "state": data.get("state") or None,
        "municipality": data.get("municipality") or None,
        "note": data.get("note") or None,
    }
    if data.get("employment_id") is not None:
        extra["scope"] = HolidayScope.EMPLOYMENT
        extra["employment_id"] = arg_int(data, "employment_id")

    if data.get("date"):
        return Holiday.single(holiday_id, name, kind, on=arg_date(data, "date"), **extra)
    return Holiday.annual(holiday_id, name, kind, month=arg_int(data, "month"), day=arg_int(data, "day"), **extra)


def holiday_to_dict(h: Holiday) -> dict:
    return {
        "holiday_id": h.holiday_id,
        "name": h.name,
        "kind": h.kind.value,
        "recurrence": h.recurrence.value,
        "scope": h.scope.value,
        "month": h.month,
        "day": h.day,
        "date": iso(h.specific_date),
        "state": h.state,
        "municipality": h.municipality,
        "employment_id": h.employment_id,
    }


def absence_to_dict(a: Absence) -> dict:
    return {
        "absence_id": a.absence_id,
        "employment_id": a.employment_id,
        "type": a.absence_type.value,
        "start": a.start.isoformat(),
        "end": a.end.isoformat(),
        "zeroes_expected": a.zeroes_expected,
        "note": a.note,
    }


def resolution_to_dict(r: DayResolution) -> dict:
    return {
        "date": r.day.isoformat(),
        "kind": r.kind.value,
        "holiday": holiday_to_dict(r.holiday) if r.holiday else None,
        "is_weekend": r.is_weekend,
        "is_bridge": r.is_bridge,
        "absence": absence_to_dict(r.absence) if r.absence else None,
        "registration_allowed": r.registration_allowed,
        "zeroes_expected": r.zeroes_expected,
        "warnings": list(r.warnings),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/holidays", methods=["GET"], endpoint="list_holidays")
    def list_holidays():
        return jsonify([holiday_to_dict(h) for h in container.holidays_repo.list_active()])

    @app.route("/holidays", methods=["POST"], endpoint="create_holiday")
    def create_holiday():
        holiday = holiday_from_payload(container.holidays_repo.next_id(), payload())
        container.holiday_service.add(holiday)
        return jsonify(holiday_to_dict(holiday)), 201

    @app.route("/holidays/<int:holiday_id>", methods=["DELETE"], endpoint="delete_holiday")
    def delete_holiday(holiday_id: int):
        container.holiday_service.remove(holiday_id=holiday_id)
        return "", 204

    @app.route("/employments/<int:employment_id>/absences", methods=["POST"], endpoint="create_absence")
    def create_absence(employment_id: int):
        data = payload()
        try:
            absence_type = AbsenceType(str(data.get("type", "")).upper())
        except ValueError as e:
            raise ValidationError("'type' is not a known absence type") from e
        result = container.absence_service.register(
            employment_id=employment_id,
            absence_type=absence_type,
            start=arg_date(data, "start"),
            end=arg_date(data, "end"),
            note=data.get("note"),
        )
        return result_json(result, absence_to_dict, status=201)

    @app.route("/employments/<int:employment_id>/absences/<int:absence_id>", methods=["DELETE"], endpoint="delete_absence")
    def delete_absence(employment_id: int, absence_id: int):
        container.absence_service.cancel(absence_id=absence_id)
        return "", 204

    @app.route("/employments/<int:employment_id>/calendar/<day>", methods=["GET"], endpoint="resolve_day")
    def resolve_day(employment_id: int, day: str):
        on = arg_date({"day": day}, "day")
        rules = container.rules_repo.get_effective(employment_id=employment_id, on_date=on)
        if rules is None:
            return error_json("No rules configured for this employment", 404)
        return jsonify(resolution_to_dict(container.calendar_service.resolve(on, rules)))

    @app.route("/employments/<int:employment_id>/calendar", methods=["GET"], endpoint="resolve_range")
    def resolve_range(employment_id: int):
        start = arg_date(request.args, "start")
        end = arg_date(request.args, "end")
        rules = container.rules_repo.get_effective(employment_id=employment_id, on_date=start)
        if rules is None:
            return error_json("No rules configured for this employment", 404)
        days = container.calendar_service.resolve_range(rules, start, end)
        warnings = container.absence_service.overlap_warnings(employment_id=employment_id, start=start, end=end)
        return jsonify({"days": [resolution_to_dict(r) for r in days], "warnings": warnings})

    @app.route("/employments/<int:employment_id>/bridges/<int:year>", methods=["POST"], endpoint="distribute_bridges")
    def distribute_bridges(employment_id: int, year: int):
        target = None
        if request.args.get("daily_target_minutes"):
            target = arg_int(request.args, "daily_target_minutes")
        result = container.bridge_service.recalculate(
            employment_id=employment_id, year=year, daily_target_minutes=target
        )
        return result_json(
            result,
            lambda c: {
                "year": c.year,
                "employment_id": c.employment_id,
                "bridge_days": c.bridge_days,
                "total_compensable_minutes": c.total_compensable_minutes,
                "working_days": c.working_days,
                "add_on_minutes": c.add_on_minutes,
                "degenerate": c.degenerate,
                "note": c.note,
            },
        )
