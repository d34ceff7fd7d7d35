"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask or HTTP
helpers. The API layer translates them into status codes
(see :mod:`storefront.api.errors`).
"""

from __future__ import annotations


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    ``str(exc)`` is the client-facing message.
    """

    default_message = "Request could not be processed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class ConflictError(ServiceError):
    """Raised when a unique natural key (e.g. email) is already taken."""

    default_message = "Conflict"


class InvalidCredentialsError(ServiceError):
    """Raised on failed login; never reveals which half was wrong."""

    default_message = "Invalid email or password"


class UnauthorizedError(ServiceError):
    """Raised when a required credential is missing."""

    default_message = "Unauthorized"


class InvalidTokenError(ServiceError):
    """Raised when a token fails signature or expiry verification."""

    default_message = "Invalid token"


class ForbiddenError(ServiceError):
    """Raised when a credential is well-formed but not accepted."""

    default_message = "Forbidden"


class NotFoundError(ServiceError):
    """Raised when an entity is not found in the repository."""

    default_message = "Resource not found"
