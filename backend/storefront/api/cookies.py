"""Auth cookie contract: ``accessToken`` and ``refreshToken``."""

from __future__ import annotations

from flask import Response, current_app

from storefront.services.auth.dto import TokenPairOut

ACCESS_COOKIE = "accessToken"
REFRESH_COOKIE = "refreshToken"
OAUTH_STATE_COOKIE = "oauthState"


def _cookie_options() -> dict:
    return {
        "httponly": True,
        "samesite": "Strict",
        "secure": bool(current_app.config.get("COOKIE_SECURE", False)),
    }


def set_access_cookie(response: Response, token: str) -> None:
    max_age = int(current_app.config["ACCESS_TOKEN_EXPIRES"].total_seconds())
    response.set_cookie(ACCESS_COOKIE, token, max_age=max_age, **_cookie_options())


def set_auth_cookies(response: Response, tokens: TokenPairOut) -> None:
    """Attach both session cookies; max-ages follow the token lifetimes."""
    set_access_cookie(response, tokens.access_token)
    max_age = int(current_app.config["REFRESH_TOKEN_EXPIRES"].total_seconds())
    response.set_cookie(REFRESH_COOKIE, tokens.refresh_token, max_age=max_age, **_cookie_options())


def clear_auth_cookies(response: Response) -> None:
    for name in (ACCESS_COOKIE, REFRESH_COOKIE):
        response.delete_cookie(name, **_cookie_options())
