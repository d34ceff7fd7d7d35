"""Shared API helpers: responses, service wiring and route guards."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request
from flask_jwt_extended import current_user, verify_jwt_in_request

from storefront.core.errors import Forbidden, error_response
from storefront.core.extensions import (
    db,
    get_cache_client,
    get_identity_provider,
    get_image_storage,
    jwt,
)
from storefront.infra.jwt.pyjwt_token_provider import PyJWTTokenProvider
from storefront.infra.redis.redis_cache import RedisKeyValueCache
from storefront.models.user import User
from storefront.services._shared.ports import IdentityProvider
from storefront.services.auth.dto import AuthTokenConfig
from storefront.services.auth.service import AuthService
from storefront.services.auth.tokens import USER_ID_CLAIM, TokenService
from storefront.services.catalog.service import CatalogService

F = TypeVar("F", bound=Callable[..., Any])


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response with ``status``."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            current_app.logger.debug(
                "handler.elapsed",
                extra={"endpoint": request.endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]


# --------------------------------------------------------------------------- #
# Service wiring
# --------------------------------------------------------------------------- #


def session_cache() -> RedisKeyValueCache:
    return RedisKeyValueCache(get_cache_client())


def build_token_service() -> TokenService:
    cfg = current_app.config
    return TokenService(
        provider=PyJWTTokenProvider(),
        cache=session_cache(),
        config=AuthTokenConfig(
            access_secret=cfg["ACCESS_TOKEN_SECRET"],
            refresh_secret=cfg["REFRESH_TOKEN_SECRET"],
            access_expires=cfg["ACCESS_TOKEN_EXPIRES"],
            refresh_expires=cfg["REFRESH_TOKEN_EXPIRES"],
        ),
    )


def build_auth_service() -> AuthService:
    return AuthService(tokens=build_token_service())


def build_catalog_service() -> CatalogService:
    return CatalogService(cache=session_cache(), images=get_image_storage())


def identity_provider() -> IdentityProvider:
    return get_identity_provider()


# --------------------------------------------------------------------------- #
# Authorization middleware
# --------------------------------------------------------------------------- #


@jwt.user_lookup_loader
def _load_user(_jwt_header: dict, jwt_data: dict) -> User | None:
    return db.session.get(User, jwt_data[USER_ID_CLAIM])


@jwt.user_lookup_error_loader
def _user_not_found(_jwt_header: dict, _jwt_data: dict):
    return error_response(401, "User not found")


@jwt.unauthorized_loader
def _missing_token(_reason: str):
    return error_response(401, "Unauthorized - No access token provided")


@jwt.expired_token_loader
def _expired_token(_jwt_header: dict, _jwt_data: dict):
    return error_response(401, "Unauthorized - Access token expired")


@jwt.invalid_token_loader
def _invalid_token(_reason: str):
    return error_response(401, "Unauthorized - Invalid access token")


def protect_route(func: F) -> F:
    """Require a valid ``accessToken`` cookie and load ``current_user``."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        verify_jwt_in_request()
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def admin_route(func: F) -> F:
    """Like :func:`protect_route`, additionally requiring the admin role."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        verify_jwt_in_request()
        if not current_user.is_admin:
            raise Forbidden("Access denied - Admin only")
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]
