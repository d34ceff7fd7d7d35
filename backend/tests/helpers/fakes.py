"""In-memory doubles for external collaborators."""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.services._shared.errors import UnauthorizedError
from storefront.services._shared.ports import FederatedProfile


@dataclass
class FakeImageStorage:
    """Records uploads/destroys; set ``fail_destroy`` to simulate outages."""

    uploads: list[tuple[str, str]] = field(default_factory=list)
    destroyed: list[str] = field(default_factory=list)
    fail_destroy: bool = False

    def upload(self, image: str, *, folder: str) -> str | None:
        self.uploads.append((image, folder))
        n = len(self.uploads)
        return f"https://res.cloudinary.com/demo/image/upload/v1/{folder}/img{n}.png"

    def destroy(self, public_id: str) -> None:
        if self.fail_destroy:
            raise RuntimeError("image storage unavailable")
        self.destroyed.append(public_id)


@dataclass
class FakeIdentityProvider:
    """Returns ``profile`` for code ``"good-code"``; anything else is rejected."""

    profile: FederatedProfile
    states: list[str] = field(default_factory=list)

    def authorization_url(self, state: str) -> str:
        self.states.append(state)
        return f"https://accounts.example.test/auth?state={state}"

    def fetch_profile(self, code: str) -> FederatedProfile:
        if code != "good-code":
            raise UnauthorizedError("Google rejected the authorization code")
        return self.profile


class BrokenCache:
    """Cache double whose every call fails like a dropped Redis connection."""

    def get(self, key):
        raise ConnectionError("cache down")

    def set(self, key, value, *, ttl_seconds=None):
        raise ConnectionError("cache down")

    def delete(self, key):
        raise ConnectionError("cache down")

    def ping(self):
        return False
