from flask import jsonify
from werkzeug.exceptions import HTTPException

from library_app.extensions import db


class ApiError(Exception):
    status_code = 400
    default_message = "Bad request"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def to_dict(self) -> dict:
        return {"message": self.message}


class ValidationFailed(ApiError):
    status_code = 422
    default_message = "Validation failed"

    def __init__(self, errors: dict, message: str | None = None):
        super().__init__(message)
        self.errors = errors

    def to_dict(self) -> dict:
        return {"message": self.message, "errors": self.errors}


class BusinessRuleViolation(ApiError):
    status_code = 422
    default_message = "The request violates a business rule"


class Unauthorized(ApiError):
    status_code = 401
    default_message = "Unauthenticated"


class Forbidden(ApiError):
    status_code = 403
    default_message = "Unauthorized"


class NotFound(ApiError):
    status_code = 404
    default_message = "Resource not found"


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def _api_error(e: ApiError):
        db.session.rollback()
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(HTTPException)
    def _http_error(e: HTTPException):
        return jsonify({"message": e.description or e.name}), e.code

    @app.errorhandler(Exception)
    def _unhandled(e: Exception):
        db.session.rollback()
        app.logger.exception(f"[errors] Unhandled error: {e}")
        return jsonify({"message": "Server Error"}), 500
