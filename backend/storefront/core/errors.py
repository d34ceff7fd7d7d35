"""Centralized JSON error handling for the API.

Every error leaves the application as ``{"message": ...}`` JSON. Unexpected
exceptions are converted into a 500 response that exposes the underlying
exception message under ``"error"``.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException

log = logging.getLogger(__name__)


def error_response(status: int, message: str, **extra: Any) -> tuple[Response, int]:
    """Build a ``({"message": ...}, status)`` pair with optional extra keys."""

    body: dict[str, Any] = {"message": message}
    body.update({k: v for k, v in extra.items() if v is not None})
    return jsonify(body), int(status)


class APIError(Exception):
    """
    Represent a JSON-serializable API error.

    Parameters
    ----------
    message : str
        Human-readable description presented to clients.
    status_code : int, optional
        HTTP status code to return. Defaults to ``400``.
    details : dict[str, Any] | None, optional
        Optional structured payload included under ``"errors"``.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.details = details or {}


# Domain conveniences
class NotFound(APIError):
    """404 when resources are missing."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, status_code=HTTPStatus.NOT_FOUND)


class Unauthorized(APIError):
    """401 when authentication fails."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message, status_code=HTTPStatus.UNAUTHORIZED)


class Forbidden(APIError):
    """403 when authorization denies access."""

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message, status_code=HTTPStatus.FORBIDDEN)


def init_app(app: Flask) -> None:
    """
    Attach JSON error handlers to the Flask app.

    Notes
    -----
    - ``APIError`` keeps its status; 4xx log as warnings.
    - Marshmallow validation failures become 400 with field messages.
    - Anything else is the recovery boundary: logged with traceback and
      rendered as 500 carrying the exception message.
    """

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        level = log.error if err.status_code >= 500 else log.warning
        level("APIError: status=%s msg=%s path=%s", err.status_code, err.message, request.path)
        return error_response(err.status_code, err.message, errors=err.details or None)

    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        log.warning("ValidationError: path=%s", request.path)
        return error_response(
            HTTPStatus.BAD_REQUEST, "Validation failed", errors=err.normalized_messages()
        )

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        message = (err.description or HTTPStatus(status).phrase).strip()
        if status == HTTPStatus.NOT_FOUND:
            message = f"Route '{request.path}' not found"
        level = log.error if status >= 500 else log.warning
        level("HTTPException: status=%s detail=%s", status, message)
        return error_response(status, message)

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        log.error("Error in %s controller: %s", request.endpoint, err, exc_info=True)
        return error_response(HTTPStatus.INTERNAL_SERVER_ERROR, "Server Error", error=str(err))
