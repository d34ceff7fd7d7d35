"""Translation of service-layer errors into HTTP responses."""

from __future__ import annotations

import logging
from http import HTTPStatus

from flask import Flask, request

from storefront.core.errors import APIError, error_response
from storefront.services._shared.errors import (
    ConflictError,
    ForbiddenError,
    InvalidCredentialsError,
    InvalidTokenError,
    NotFoundError,
    ServiceError,
    UnauthorizedError,
)

log = logging.getLogger(__name__)

# Most specific class first; anything unlisted falls back to 400.
STATUS_BY_ERROR: tuple[tuple[type[ServiceError], HTTPStatus], ...] = (
    (ConflictError, HTTPStatus.BAD_REQUEST),
    (InvalidCredentialsError, HTTPStatus.BAD_REQUEST),
    (UnauthorizedError, HTTPStatus.UNAUTHORIZED),
    (InvalidTokenError, HTTPStatus.UNAUTHORIZED),
    (ForbiddenError, HTTPStatus.FORBIDDEN),
    (NotFoundError, HTTPStatus.NOT_FOUND),
)


def to_api_error(exc: ServiceError) -> APIError:
    """Return the :class:`APIError` equivalent of ``exc``."""
    for error_type, status in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return APIError(exc.message, status_code=status)
    return APIError(exc.message, status_code=HTTPStatus.BAD_REQUEST)


def init_app(app: Flask) -> None:
    @app.errorhandler(ServiceError)
    def handle_service_error(exc: ServiceError):
        err = to_api_error(exc)
        log.warning(
            "%s: status=%s msg=%s path=%s",
            type(exc).__name__,
            err.status_code,
            err.message,
            request.path,
        )
        return error_response(err.status_code, err.message)
