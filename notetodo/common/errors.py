import logging
from flask import jsonify, g
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException

class ApiError(Exception):
    def __init__(self, message, status_code=400, code="bad_request", details=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.details = details or {}


# --- Taxonomie utilisée par les services ---
class BadRequest(ApiError):
    def __init__(self, message="Bad request.", details=None):
        super().__init__(message, 400, "bad_request", details)


class Unauthenticated(ApiError):
    def __init__(self, message="Authentication required.", details=None):
        super().__init__(message, 401, "unauthenticated", details)


class Forbidden(ApiError):
    def __init__(self, message="Forbidden.", details=None):
        super().__init__(message, 403, "forbidden", details)


class NotFound(ApiError):
    def __init__(self, message="Not found.", details=None):
        super().__init__(message, 404, "not_found", details)


class Conflict(ApiError):
    def __init__(self, message="Conflict.", details=None):
        super().__init__(message, 409, "conflict", details)


def error_body(message, code, details=None):
    body = {"success": False, "error": message, "code": code}
    if details:
        body["details"] = details
    return body

def _json_error(message, status, code, details=None):
    return jsonify(error_body(message, code, details)), status

def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(e: ApiError):
        return _json_error(e.message, e.status_code, e.code, e.details)

    @app.errorhandler(ValidationError)
    def handle_validation_error(e: ValidationError):
        return _json_error("Invalid request body.", 400, "validation_error", e.messages)

    @app.errorhandler(HTTPException)
    def handle_http_exception(e: HTTPException):
        # Ex: 404, 405, 413…
        return _json_error(e.description or "HTTP error", e.code or 500, "http_error")

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        # Traceback côté logs uniquement; le client ne voit rien d'interne
        logging.getLogger("notetodo.error").exception(
            "unhandled_exception",
            extra={"request_id": getattr(g, "request_id", "-")},
        )
        return _json_error("Internal server error.", 500, "internal_error")
