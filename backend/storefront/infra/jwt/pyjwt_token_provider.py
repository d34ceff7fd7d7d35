# storefront/infra/jwt/pyjwt_token_provider.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from storefront.services._shared.errors import InvalidTokenError
from storefront.services._shared.ports import TokenProvider


@dataclass(slots=True)
class PyJWTTokenProvider(TokenProvider):
    """
    HMAC JWT adapter built on PyJWT.

    The secret is chosen per call so access and refresh tokens can be signed
    with different keys.
    """

    algorithm: str = "HS256"

    def encode(self, payload: dict[str, Any], *, secret: str, expires_delta: timedelta) -> str:
        now = datetime.now(UTC)
        claims = dict(payload)
        claims["iat"] = now
        claims["exp"] = now + expires_delta
        return jwt.encode(claims, secret, algorithm=self.algorithm)

    def decode(self, token: str, *, secret: str) -> dict[str, Any]:
        try:
            return jwt.decode(
                token,
                secret,
                algorithms=[self.algorithm],
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise InvalidTokenError("Token expired") from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidTokenError(f"Invalid token: {exc}") from exc
