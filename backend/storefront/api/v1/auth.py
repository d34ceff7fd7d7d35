"""Authentication endpoints: cookie sessions plus Google sign-in."""

from __future__ import annotations

import logging
import secrets

import requests
from flask import Blueprint, current_app, redirect, request
from flask_jwt_extended import current_user

from storefront.api.cookies import (
    OAUTH_STATE_COOKIE,
    REFRESH_COOKIE,
    clear_auth_cookies,
    set_access_cookie,
    set_auth_cookies,
)
from storefront.api.deps import (
    build_auth_service,
    identity_provider,
    json_response,
    protect_route,
    timing,
)
from storefront.core.extensions import limiter
from storefront.schemas import LoginSchema, ProfileSchema, SignupSchema, UserPublicSchema
from storefront.services._shared.errors import ServiceError
from storefront.services.auth.dto import LoginIn, SignupIn

log = logging.getLogger(__name__)

bp = Blueprint("auth", __name__)

signup_schema = SignupSchema()
login_schema = LoginSchema()
user_schema = UserPublicSchema()
profile_schema = ProfileSchema()

OAUTH_STATE_MAX_AGE = 600


def _login_rate_limit() -> str:
    return str(current_app.config.get("AUTH_LOGIN_RATE_LIMIT", "10 per minute"))


@bp.post("/signup")
@timing
def signup():
    """Create an account, open its session and return the public user."""

    data = signup_schema.load(request.get_json(silent=True) or {})
    result = build_auth_service().signup(SignupIn(**data))
    response = json_response(user_schema.dump(result.user), status=201)
    set_auth_cookies(response, result.tokens)
    return response


@bp.post("/login")
@limiter.limit(_login_rate_limit)
@timing
def login():
    data = login_schema.load(request.get_json(silent=True) or {})
    result = build_auth_service().login(LoginIn(**data))
    response = json_response(user_schema.dump(result.user))
    set_auth_cookies(response, result.tokens)
    return response


@bp.post("/logout")
@timing
def logout():
    """Revoke the caller's refresh entry (if any) and clear both cookies."""

    build_auth_service().logout(request.cookies.get(REFRESH_COOKIE))
    response = json_response({"message": "Logged out successfully"})
    clear_auth_cookies(response)
    return response


@bp.post("/refresh-token")
@timing
def refresh_token():
    access_token = build_auth_service().refresh_access_token(request.cookies.get(REFRESH_COOKIE))
    response = json_response({"message": "Access token refreshed successfully"})
    set_access_cookie(response, access_token)
    return response


@bp.get("/profile")
@protect_route
@timing
def profile():
    return json_response(profile_schema.dump(build_auth_service().profile(current_user)))


# --------------------------------------------------------------------------- #
# Google OAuth
# --------------------------------------------------------------------------- #


def _failure_url() -> str:
    return f"{current_app.config['CLIENT_URL'].rstrip('/')}/login?error=google_auth_failed"


@bp.get("/google")
def google_login():
    """Redirect to the Google consent screen, pinning ``state`` in a cookie."""

    state = secrets.token_urlsafe(24)
    response = redirect(identity_provider().authorization_url(state))
    # Lax: the cookie has to survive the cross-site redirect back from Google
    response.set_cookie(
        OAUTH_STATE_COOKIE,
        state,
        max_age=OAUTH_STATE_MAX_AGE,
        httponly=True,
        samesite="Lax",
        secure=bool(current_app.config.get("COOKIE_SECURE", False)),
    )
    return response


@bp.get("/google/callback")
@timing
def google_callback():
    expected_state = request.cookies.get(OAUTH_STATE_COOKIE)
    state = request.args.get("state")
    code = request.args.get("code")
    if request.args.get("error") or not code or not expected_state or state != expected_state:
        log.warning("google callback rejected: error=%s", request.args.get("error"))
        return redirect(_failure_url())

    try:
        federated = identity_provider().fetch_profile(code)
    except (ServiceError, requests.RequestException) as exc:
        log.warning("google profile exchange failed: %s", exc)
        return redirect(_failure_url())

    try:
        result = build_auth_service().federated_login(federated)
    except ServiceError as exc:
        log.warning("google sign-in refused: %s", exc)
        return redirect(_failure_url())

    response = redirect(current_app.config["CLIENT_URL"])
    set_auth_cookies(response, result.tokens)
    response.delete_cookie(OAUTH_STATE_COOKIE)
    return response


@bp.get("/google/failure")
def google_failure():
    return redirect(_failure_url())
