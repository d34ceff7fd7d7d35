"""Google OAuth 2.0 authorization-code client built on ``requests``."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

import requests

from storefront.services._shared.errors import UnauthorizedError
from storefront.services._shared.ports import FederatedProfile

AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
TOKEN_URL = "https://oauth2.googleapis.com/token"
USERINFO_URL = "https://openidconnect.googleapis.com/v1/userinfo"
SCOPES = ("openid", "profile", "email")


class GoogleOAuthClient:
    """Implements :class:`~storefront.services._shared.ports.IdentityProvider` for Google."""

    def __init__(
        self,
        *,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.timeout = timeout
        self.http = session or requests.Session()

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> GoogleOAuthClient:
        return cls(
            client_id=config.get("GOOGLE_CLIENT_ID", ""),
            client_secret=config.get("GOOGLE_CLIENT_SECRET", ""),
            redirect_uri=config.get("GOOGLE_CALLBACK_URL", ""),
        )

    def authorization_url(self, state: str) -> str:
        query = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "scope": " ".join(SCOPES),
            "state": state,
            "prompt": "select_account",
        }
        return f"{AUTHORIZE_URL}?{urlencode(query)}"

    def fetch_profile(self, code: str) -> FederatedProfile:
        token_resp = self.http.post(
            TOKEN_URL,
            data={
                "code": code,
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "redirect_uri": self.redirect_uri,
                "grant_type": "authorization_code",
            },
            timeout=self.timeout,
        )
        token_resp.raise_for_status()
        access_token = token_resp.json().get("access_token")
        if not access_token:
            raise UnauthorizedError("Google did not return an access token")

        info_resp = self.http.get(
            USERINFO_URL,
            headers={"Authorization": f"Bearer {access_token}"},
            timeout=self.timeout,
        )
        info_resp.raise_for_status()
        info = info_resp.json()
        if not info.get("email") or not info.get("email_verified", False):
            raise UnauthorizedError("Google account email is not verified")

        return FederatedProfile(
            subject=str(info["sub"]),
            email=info["email"],
            name=info.get("name") or info["email"].split("@")[0],
            picture=info.get("picture"),
        )
