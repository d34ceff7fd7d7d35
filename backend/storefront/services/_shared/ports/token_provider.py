from __future__ import annotations

from datetime import timedelta
from typing import Any, Protocol


class TokenProvider(Protocol):
    """Port for signing and verifying JWTs with a caller-supplied secret."""

    def encode(self, payload: dict[str, Any], *, secret: str, expires_delta: timedelta) -> str:
        """Sign ``payload`` adding ``iat`` and ``exp`` claims."""
        ...

    def decode(self, token: str, *, secret: str) -> dict[str, Any]:
        """
        Verify signature and expiry and return the claims.

        :raises storefront.services._shared.errors.InvalidTokenError: On any
            verification failure.
        """
        ...
