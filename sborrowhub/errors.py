# sborrowhub/errors.py
from __future__ import annotations

from flask import current_app, jsonify
from pydantic import ValidationError as PydanticValidationError
from werkzeug.exceptions import HTTPException

from sborrowhub.extensions import db


class AppError(Exception):
    status_code = 400

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        return {"success": False, "message": self.message}


class ValidationError(AppError):
    status_code = 400

    def __init__(self, message: str, errors: list[dict] | None = None):
        super().__init__(message)
        self.errors = errors or []

    def to_dict(self) -> dict:
        body = super().to_dict()
        if self.errors:
            body["errors"] = self.errors
        return body


class AuthorizationError(AppError):
    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    status_code = 409


def app_assert(condition, error: AppError) -> None:
    """Raise `error` unless `condition` holds."""
    if not condition:
        raise error


def json_error(message, code=400):
    return jsonify({"success": False, "message": message}), code


def _field_errors(exc: PydanticValidationError) -> list[dict]:
    out = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ())) or "body"
        out.append({"field": field, "message": err.get("msg", "Invalid value")})
    return out


def register_error_handlers(app):
    @app.errorhandler(AppError)
    def _app_error(e: AppError):
        db.session.rollback()
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(PydanticValidationError)
    def _schema_error(e: PydanticValidationError):
        db.session.rollback()
        return jsonify({
            "success": False,
            "message": "Validation failed",
            "errors": _field_errors(e),
        }), 400

    @app.errorhandler(HTTPException)
    def _http_error(e: HTTPException):
        return json_error(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def _unexpected(e: Exception):
        db.session.rollback()
        current_app.logger.exception(f"[error] Unhandled exception: {e}")
        return json_error("Something went wrong", 500)
