from __future__ import annotations

from datetime import date
from enum import Enum
from functools import wraps
from typing import Optional, Type, TypeVar

from flask import jsonify, request, session

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DataIntegrityError,
    DomainError,
    ValidationError,
)
from ..users.model import User
from ..users.repository import UserRepository
from .datetime_utils import parse_iso_date

E = TypeVar("E", bound=Enum)

_STATUS_CODES = (
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (DataIntegrityError, 409),
    (ValidationError, 400),
)


def error_response(exc: DomainError):
    for exc_type, code in _STATUS_CODES:
        if isinstance(exc, exc_type):
            return jsonify({"success": False, "message": str(exc)}), code
    return jsonify({"success": False, "message": str(exc)}), 400


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Please log in to continue."}), 401
        return view(*args, **kwargs)

    return wrapper


def domain_errors(view):
    """Turn business rule violations into an inline JSON message."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            return error_response(e)

    return wrapper


def current_user(users: UserRepository) -> User:
    """Re-read the logged-in account so role changes apply on the next request."""
    user = users.get_by_id(str(session.get("user_id", "")))
    if not user:
        session.clear()
        raise AuthenticationError("Your session has expired. Please log in again.")
    return user


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def text_field(data, key: str, default: Optional[str] = "") -> Optional[str]:
    """A string field from a JSON body or form; missing or null gives ``default``."""
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValidationError(f"Field '{key}' must be text")
    return value


def list_field(data, key: str) -> list:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValidationError(f"Field '{key}' must be a list")
    return value


def parse_enum(enum_type: Type[E], value: Optional[str], field_name: str) -> E:
    try:
        return enum_type(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field_name}")


def ok(**payload):
    return jsonify({"success": True, **payload})


def parse_date_field(value: Optional[str], field_name: str) -> date:
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{field_name} must be YYYY-MM-DD")
    try:
        return parse_iso_date((value or "").strip())
    except ValueError:
        raise ValidationError(f"{field_name} must be YYYY-MM-DD")
