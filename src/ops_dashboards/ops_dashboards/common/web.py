"""Helpers shared by the feature controllers."""
from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from functools import wraps

from flask import jsonify, session

from .actor import UserRef


def current_user() -> UserRef:
    raw_id = session.get("user_id")
    return UserRef(
        user_id=int(raw_id) if raw_id is not None else None,
        display_name=session.get("name"),
    )


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"error": "Authentication required"}), 401
        return view(*args, **kwargs)

    return wrapper


def error_response(message: str, status: int):
    return jsonify({"error": message}), status


def gate_failure(message: str, status: int):
    return jsonify({"success": False, "error": message}), status


def jsonable(value):
    """Make driver values (dates, Decimals) JSON friendly, recursively."""
    if isinstance(value, dict):
        return {k: jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [jsonable(v) for v in value]
    if isinstance(value, datetime):
        return value.isoformat(sep=" ", timespec="seconds")
    if isinstance(value, date):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, time):
        return value.strftime("%H:%M")
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, Enum):
        return value.value
    return value
