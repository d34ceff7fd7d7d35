"""Tiny helpers shared across test modules."""

from __future__ import annotations

from storefront.api.cookies import ACCESS_COOKIE, REFRESH_COOKIE

from tests.factories.user import DEFAULT_PASSWORD

AUTH = "/api/v1/auth"
PRODUCTS = "/api/v1/products"


def login(client, email: str, password: str = DEFAULT_PASSWORD):
    """Log ``email`` in through the API so the client jar holds both cookies."""
    resp = client.post(f"{AUTH}/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.get_json()
    return resp


def set_cookie_header(response, name: str) -> str:
    """Return the ``Set-Cookie`` header emitted for ``name``."""
    for header in response.headers.getlist("Set-Cookie"):
        if header.startswith(f"{name}="):
            return header
    raise AssertionError(f"no Set-Cookie for {name!r}")


def session_cookies(client) -> tuple[str | None, str | None]:
    access = client.get_cookie(ACCESS_COOKIE)
    refresh = client.get_cookie(REFRESH_COOKIE)
    return (access.value if access else None, refresh.value if refresh else None)
