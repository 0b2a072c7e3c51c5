from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_minutes
from ..common.http import arg_date, arg_int, error_json, payload, result_json
from ..core.enums import ClosureKind
from ..core.exceptions import ValidationError
from ..container import Container
from .model import BalanceAdjustment, PeriodClosure


def closure_to_dict(c: PeriodClosure) -> dict:
    return {
        "closure_id": c.closure_id,
        "employment_id": c.employment_id,
        "kind": c.kind.value,
        "closed_on": c.closed_on.isoformat(),
        "period_start": c.period_start.isoformat(),
        "period_end": c.period_end.isoformat(),
        "balance_minutes": c.balance_minutes,
        "balance": format_minutes(c.balance_minutes, signed=True),
        "note": c.note,
    }


def adjustment_to_dict(a: BalanceAdjustment) -> dict:
    return {
        "adjustment_id": a.adjustment_id,
        "employment_id": a.employment_id,
        "date": a.on_date.isoformat(),
        "minutes": a.minutes,
        "justification": a.justification,
    }


def register(app: Flask, container: Container) -> None:
    service = container.timebank_service

    @app.route("/employments/<int:employment_id>/timebank/closures", methods=["POST"], endpoint="close_cycle")
    def close_cycle(employment_id: int):
        data = payload()
        try:
            kind = ClosureKind(str(data.get("kind", ClosureKind.TIME_BANK_CYCLE.value)).upper())
        except ValueError as e:
            raise ValidationError("'kind' must be WEEKLY, MONTHLY or TIME_BANK_CYCLE") from e
        result = service.close_cycle(
            employment_id=employment_id,
            start=arg_date(data, "start"),
            end=arg_date(data, "end"),
            kind=kind,
            note=data.get("note"),
        )
        return result_json(result, closure_to_dict, status=201)

    @app.route("/employments/<int:employment_id>/timebank/closures", methods=["GET"], endpoint="list_closures")
    def list_closures(employment_id: int):
        return jsonify([closure_to_dict(c) for c in service.ledger(employment_id).closures()])

    @app.route(
        "/employments/<int:employment_id>/timebank/closures/<int:closure_id>",
        methods=["DELETE"],
        endpoint="delete_closure",
    )
    def delete_closure(employment_id: int, closure_id: int):
        result = service.delete_closure(employment_id=employment_id, closure_id=closure_id)
        return result_json(result, closure_to_dict)

    @app.route("/employments/<int:employment_id>/timebank/pending", methods=["POST"], endpoint="close_pending")
    def close_pending(employment_id: int):
        result = service.close_pending_cycles(employment_id=employment_id)
        return result_json(result, lambda closures: [closure_to_dict(c) for c in closures])

    @app.route("/employments/<int:employment_id>/timebank/adjustments", methods=["POST"], endpoint="adjust_balance")
    def adjust_balance(employment_id: int):
        data = payload()
        result = service.adjust(
            employment_id=employment_id,
            minutes=arg_int(data, "minutes"),
            justification=str(data.get("justification") or ""),
            on_date=arg_date(data, "date") if data.get("date") else None,
        )
        return result_json(result, adjustment_to_dict, status=201)

    @app.route("/employments/<int:employment_id>/timebank/balance", methods=["GET"], endpoint="balance_as_of")
    def balance_as_of(employment_id: int):
        on = arg_date(request.args, "date")
        since = arg_date(request.args, "since") if request.args.get("since") else None
        result = service.balance_as_of(employment_id=employment_id, on_date=on, since=since)
        if not result.ok:
            return result_json(result, lambda v: v)
        return jsonify(
            {"date": on.isoformat(), "balance_minutes": result.value, "balance": format_minutes(result.value, signed=True)}
        )

    @app.route("/employments/<int:employment_id>/timebank/audit", methods=["GET"], endpoint="audit_log")
    def audit_log(employment_id: int):
        entries = service.ledger(employment_id).audit_log()
        if not entries:
            return error_json("No ledger activity for this employment", 404)
        return jsonify(
            [
                {"at": e.at.isoformat(), "action": e.action.value, "minutes": e.minutes, "detail": e.detail}
                for e in entries
            ]
        )
