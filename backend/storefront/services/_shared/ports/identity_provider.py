from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class FederatedProfile:
    """
    Identity asserted by a third-party provider.

    :ivar subject: Provider-specific stable user id.
    :ivar email: Verified email address.
    :ivar name: Display name.
    :ivar picture: Avatar URL, if any.
    """

    subject: str
    email: str
    name: str
    picture: str | None = None


class IdentityProvider(Protocol):
    """OAuth 2.0 authorization-code flow against an external provider."""

    def authorization_url(self, state: str) -> str:
        """Return the consent-screen URL embedding ``state``."""
        ...

    def fetch_profile(self, code: str) -> FederatedProfile:
        """Exchange ``code`` for tokens and return the user's profile."""
        ...
