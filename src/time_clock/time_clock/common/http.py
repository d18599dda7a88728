from __future__ import annotations

from typing import Any, Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from .datetime_utils import parse_iso_date
from .validators import require_positive_int

# Checked in order, so subclasses resolve before their bases.
_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
)


def error_response(kind: str, message: str, status: int):
    return jsonify({"success": False, "error": kind, "message": message}), status


def status_for(error: DomainError) -> int:
    for cls, status in _STATUS_BY_ERROR:
        if isinstance(error, cls):
            return status
    return 400


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return error_response(e.kind, str(e), status_for(e))

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return error_response(e.name.replace(" ", ""), e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        app.logger.exception("unhandled error on %s %s", request.method, request.path)
        return error_response("Internal", "Erro interno do servidor", 500)


def json_body() -> dict[str, Any]:
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ValidationError("Corpo da requisição deve ser um objeto JSON")
    return body


def required_date_arg(name: str):
    value = request.args.get(name)
    if not value:
        raise ValidationError(f"Parâmetro {name} é obrigatório")
    return parse_iso_date(value, name)


def optional_date_arg(name: str):
    value = request.args.get(name)
    return parse_iso_date(value, name) if value else None


def optional_int_arg(name: str) -> Optional[int]:
    value = request.args.get(name)
    return require_positive_int(value, name) if value else None
