from flask import current_app, jsonify
from werkzeug.exceptions import HTTPException


class ApiError(Exception):
    """Base class for errors that map straight onto a JSON error response."""

    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ApiError):
    status_code = 400


class NotFoundError(ApiError):
    status_code = 404


class PermissionDeniedError(ApiError):
    status_code = 403


class ConflictError(ApiError):
    status_code = 409


class StoreError(ApiError):
    """A relational error from the data store, already translated."""

    def __init__(self, message, status_code=500, code=None):
        super().__init__(message, status_code)
        self.code = code


class StorageError(ApiError):
    """Object storage failure (upload, listing, removal)."""


def error_response(message, status_code):
    response = jsonify({
        "success": False,
        "error": message
    })
    response.status_code = status_code
    return response


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(error):
        if error.status_code >= 500:
            current_app.logger.error("%s: %s", type(error).__name__, error.message)
        return error_response(error.message, error.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return error_response(error.description or error.name, error.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        current_app.logger.exception("Unhandled error: %s", error)
        return error_response("Internal server error", 500)
