"""Token issuance and refresh-session reconciliation."""

from __future__ import annotations

import logging
from typing import Any

from storefront.services._shared.errors import InvalidTokenError
from storefront.services._shared.ports import KeyValueCache, TokenProvider
from storefront.services.auth.dto import AuthTokenConfig, TokenPairOut

log = logging.getLogger(__name__)

USER_ID_CLAIM = "userId"


def refresh_token_key(user_id: int | str) -> str:
    """Cache key holding the single valid refresh token of ``user_id``."""
    return f"refresh_token:{user_id}"


class TokenService:
    """
    Issue signed tokens and keep the server-side refresh entry in sync.

    At most one refresh token per user is valid at a time: persisting a new
    one overwrites the previous entry.
    """

    def __init__(
        self,
        *,
        provider: TokenProvider,
        cache: KeyValueCache,
        config: AuthTokenConfig,
    ) -> None:
        self.provider = provider
        self.cache = cache
        self.cfg = config

    # ------------------------------------------------------------------ #
    # Issuance
    # ------------------------------------------------------------------ #

    def issue_access_token(self, user_id: int | str) -> str:
        return self.provider.encode(
            {USER_ID_CLAIM: user_id},
            secret=self.cfg.access_secret,
            expires_delta=self.cfg.access_expires,
        )

    def issue_token_pair(self, user_id: int | str) -> TokenPairOut:
        """Sign an access token and a refresh token carrying ``{"userId": user_id}``."""
        refresh = self.provider.encode(
            {USER_ID_CLAIM: user_id},
            secret=self.cfg.refresh_secret,
            expires_delta=self.cfg.refresh_expires,
        )
        return TokenPairOut(access_token=self.issue_access_token(user_id), refresh_token=refresh)

    # ------------------------------------------------------------------ #
    # Session cache
    # ------------------------------------------------------------------ #

    def persist_refresh_token(self, user_id: int | str, refresh_token: str) -> None:
        """Store ``refresh_token`` for ``user_id`` with the refresh lifetime as TTL."""
        self.cache.set(
            refresh_token_key(user_id),
            refresh_token,
            ttl_seconds=int(self.cfg.refresh_expires.total_seconds()),
        )

    def validate_refresh_token(self, user_id: int | str, presented_token: str) -> bool:
        """Return ``True`` only if the cached token string-equals ``presented_token``."""
        stored = self.cache.get(refresh_token_key(user_id))
        return stored is not None and stored == presented_token

    def revoke_refresh_token(self, user_id: int | str) -> None:
        removed = self.cache.delete(refresh_token_key(user_id))
        log.debug("refresh token revoked", extra={"user_id": user_id, "removed": removed})

    # ------------------------------------------------------------------ #
    # Verification
    # ------------------------------------------------------------------ #

    def verify_and_decode(self, token: str, secret: str) -> dict[str, Any]:
        """
        Check signature and expiry of ``token`` against ``secret``.

        :raises InvalidTokenError: On bad signature, expiry, or a payload
            without a user id.
        """
        payload = self.provider.decode(token, secret=secret)
        if USER_ID_CLAIM not in payload:
            raise InvalidTokenError("Token payload has no user id")
        return payload

    def decode_refresh_token(self, token: str) -> dict[str, Any]:
        return self.verify_and_decode(token, self.cfg.refresh_secret)
