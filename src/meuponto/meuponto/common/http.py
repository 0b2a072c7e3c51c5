"""JSON helpers shared by the Flask controllers."""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Any, Callable, Optional

from flask import jsonify, request

from ..core.enums import FailureCode
from ..core.exceptions import ValidationError
from ..core.results import Result
from .datetime_utils import parse_hhmm, parse_iso_date

_STATUS_BY_FAILURE = {
    FailureCode.CLOSURE_NOT_FOUND: 404,
    FailureCode.RULES_NOT_FOUND: 404,
    FailureCode.NO_BASELINE: 404,
    FailureCode.PERIOD_ALREADY_CLOSED: 409,
    FailureCode.ABSENCE_OVERLAP: 409,
    FailureCode.CYCLE_NOT_ENDED: 409,
    FailureCode.TIME_BANK_DISABLED: 409,
}


def failure_status(code: FailureCode) -> int:
    return _STATUS_BY_FAILURE.get(code, 422)


def error_json(message: str, status: int, **extra):
    return jsonify({"error": message, **extra}), status


def result_json(result: Result, to_dict: Callable[[Any], Any], *, status: int = 200):
    if not result.ok:
        failure = result.failure
        return error_json(failure.message, failure_status(failure.code), code=failure.code.value)
    return jsonify(to_dict(result.value)), status


def payload() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def arg_date(data: dict, key: str, default: Optional[date] = None) -> date:
    raw = data.get(key)
    if not raw:
        if default is not None:
            return default
        raise ValidationError(f"'{key}' is required (YYYY-MM-DD)")
    try:
        return parse_iso_date(str(raw))
    except ValueError as e:
        raise ValidationError(f"'{key}' must be a date (YYYY-MM-DD)") from e


def arg_time(data: dict, key: str) -> time:
    raw = data.get(key)
    try:
        return parse_hhmm(str(raw or ""))
    except ValueError as e:
        raise ValidationError(f"'{key}' must be a time (HH:MM)") from e


def arg_datetime(data: dict, key: str) -> Optional[datetime]:
    raw = data.get(key)
    if not raw:
        return None
    try:
        return datetime.fromisoformat(str(raw))
    except ValueError as e:
        raise ValidationError(f"'{key}' must be an ISO datetime") from e


def arg_int(data: dict, key: str, default: Optional[int] = None) -> int:
    raw = data.get(key, default)
    if raw is None:
        raise ValidationError(f"'{key}' is required")
    try:
        return int(raw)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"'{key}' must be an integer") from e


def iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None
