from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import arg_date, arg_datetime, arg_time, iso, payload
from ..core.enums import PunchKind
from ..core.exceptions import ValidationError
from ..container import Container
from .model import Punch
from .validation.pipeline import PunchValidationResult


def punch_to_dict(p: Punch) -> dict:
    return {
        "punch_id": p.punch_id,
        "employment_id": p.employment_id,
        "timestamp": p.timestamp.isoformat(),
        "considered": p.considered.isoformat(),
        "adjusted": p.is_adjusted,
        "manually_edited": p.manually_edited,
        "note": p.note,
    }


def validation_to_dict(result: PunchValidationResult) -> dict:
    return {
        "accepted": result.accepted,
        "expected_kind": result.expected_kind.value,
        "violations": [{"rule": v.rule.value, "message": v.message} for v in result.violations],
    }


def register(app: Flask, container: Container) -> None:
    def _candidate_args(employment_id: int) -> dict:
        data = payload()
        kind = data.get("kind")
        try:
            declared = PunchKind(str(kind).upper()) if kind else None
        except ValueError as e:
            raise ValidationError("'kind' must be CLOCK_IN or CLOCK_OUT") from e
        now = arg_datetime(data, "now") if container.trust_client_clock else None
        return {
            "employment_id": employment_id,
            "day": arg_date(data, "date"),
            "at": arg_time(data, "time"),
            "declared_kind": declared,
            "allow_future_time": bool(data.get("allow_future_time", False)),
            "allow_non_working_day": bool(data.get("allow_non_working_day", False)),
            "now": now,
            "note": data.get("note"),
        }

    @app.route("/employments/<int:employment_id>/punches/validate", methods=["POST"], endpoint="validate_punch")
    def validate_punch(employment_id: int):
        args = _candidate_args(employment_id)
        args.pop("note")
        return jsonify(validation_to_dict(container.punch_service.validate(**args)))

    @app.route("/employments/<int:employment_id>/punches", methods=["POST"], endpoint="register_punch")
    def register_punch(employment_id: int):
        registration = container.punch_service.register(**_candidate_args(employment_id))
        body = validation_to_dict(registration.validation)
        if not registration.accepted:
            return jsonify(body), 422
        body["punch"] = punch_to_dict(registration.punch)
        return jsonify(body), 201

    @app.route("/employments/<int:employment_id>/punches", methods=["GET"], endpoint="list_punches")
    def list_punches(employment_id: int):
        day = arg_date(request.args, "date")
        return jsonify([punch_to_dict(p) for p in container.punch_service.list_day(employment_id=employment_id, day=day)])

    @app.route("/employments/<int:employment_id>/punches/<int:punch_id>", methods=["DELETE"], endpoint="delete_punch")
    def delete_punch(employment_id: int, punch_id: int):
        punch = container.punch_service.delete(employment_id=employment_id, punch_id=punch_id)
        return jsonify({"deleted": punch_id, "date": iso(punch.day)})
