from __future__ import annotations

from datetime import date, datetime, time
from enum import Enum
from functools import wraps
from typing import Any, Iterable, Optional

from bson import ObjectId
from flask import Flask, jsonify, request, send_file, session
from flask.json.provider import DefaultJSONProvider

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from ..system_log.model import Actor
from .results import FormResult
from .validators import F, validate_form


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "uid" not in session:
            return jsonify(FormResult.failure("Please sign in to continue.").to_dict()), 401
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles: Role):
    allowed = {r.value for r in roles}

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "uid" not in session:
                return jsonify(FormResult.failure("Please sign in to continue.").to_dict()), 401
            if session.get("role") not in allowed:
                return jsonify(FormResult.failure("You do not have permission to perform this action.").to_dict()), 403
            return view(*args, **kwargs)

        return wrapper

    return decorator


def form_payload(list_fields: Iterable[str] = ()) -> dict[str, Any]:
    """Submitted fields from a form post or a JSON body."""

    if request.is_json:
        return dict(request.get_json(silent=True) or {})
    data: dict[str, Any] = request.form.to_dict(flat=True)
    for name in list_fields:
        data[name] = request.form.getlist(name)
    return data


def current_actor() -> Actor:
    return Actor(
        actor_id=session.get("uid"),
        email=session.get("email"),
        role=session.get("role"),
    )


def current_employee_doc_id() -> Optional[str]:
    return session.get("employee_doc_id")


def respond(result: FormResult):
    return jsonify(result.to_dict()), (200 if result.success else 400)


def query_args(schema: type[F]) -> F:
    """Validate the query string of a GET request against ``schema``."""

    return validate_form(schema, request.args.to_dict(flat=True))


def send_download(buffer, filename: str, mimetype: str):
    return send_file(buffer, mimetype=mimetype, as_attachment=True, download_name=filename)


_STATUS = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def _domain_error(e: DomainError):
        errors = e.field_errors if isinstance(e, ValidationError) and e.field_errors else None
        code = next((status for kind, status in _STATUS if isinstance(e, kind)), 400)
        return jsonify(FormResult.failure(str(e), errors).to_dict()), code


class AppJSONProvider(DefaultJSONProvider):
    """ISO dates, enum values and dataclasses in JSON responses."""

    @staticmethod
    def default(o: Any) -> Any:
        if isinstance(o, (datetime, date, time)):
            return o.isoformat()
        if isinstance(o, Enum):
            return o.value
        if isinstance(o, ObjectId):
            return str(o)
        if isinstance(o, (set, frozenset)):
            return sorted(o)
        return DefaultJSONProvider.default(o)


def scope_to_self(payload: dict[str, Any], field: str) -> dict[str, Any]:
    """Employees may only act on their own record; HR and admins pick any."""

    if session.get("role") == Role.EMPLOYEE.value:
        payload[field] = current_employee_doc_id()
    return payload
