# tests/unit/services/test_auth_service.py
from __future__ import annotations

import pytest
from storefront.infra.jwt.pyjwt_token_provider import PyJWTTokenProvider
from storefront.infra.redis.redis_cache import RedisKeyValueCache
from storefront.models import User
from storefront.services._shared.errors import (
    ConflictError,
    ForbiddenError,
    InvalidCredentialsError,
    InvalidTokenError,
    UnauthorizedError,
)
from storefront.services._shared.ports import FederatedProfile
from storefront.services.auth.dto import AuthTokenConfig, LoginIn, SignupIn
from storefront.services.auth.service import AuthService, SessionTeardownError
from storefront.services.auth.tokens import TokenService

from tests.factories.user import UserFactory


# ------------------------------ Fixtures ---------------------------------- #
@pytest.fixture()
def service(app, redis_client) -> AuthService:
    """Build an AuthService over PyJWT and the app's FakeRedis."""
    return AuthService(
        tokens=TokenService(
            provider=PyJWTTokenProvider(),
            cache=RedisKeyValueCache(redis_client),
            config=AuthTokenConfig(access_secret="a-secret", refresh_secret="r-secret"),
        )
    )


def _profile(**overrides) -> FederatedProfile:
    data = {"subject": "g-1", "email": "gina@example.com", "name": "Gina", "picture": "https://p/g.png"}
    data.update(overrides)
    return FederatedProfile(**data)


# -------------------------------- Signup ---------------------------------- #
def test_signup_creates_customer_and_opens_session(service, redis_client, session):
    result = service.signup(SignupIn(name="Ann", email="a@x.com", password="secret1"))

    assert result.user.role == "customer"
    assert result.user.email == "a@x.com"
    assert redis_client.get(f"refresh_token:{result.user.id}") == result.tokens.refresh_token

    stored = session.get(User, result.user.id)
    assert stored.password_hash != "secret1"
    assert stored.verify_password("secret1")


def test_signup_duplicate_email_conflicts(service):
    service.signup(SignupIn(name="Ann", email="a@x.com", password="secret1"))
    with pytest.raises(ConflictError, match="User already exists"):
        service.signup(SignupIn(name="Ann 2", email="A@X.com", password="secret2"))


def test_user_survives_cache_failure(service, session, monkeypatch):
    """A cache outage after the commit leaves the user without a session."""

    def boom(*args, **kwargs):
        raise ConnectionError("redis down")

    monkeypatch.setattr(service.tokens, "persist_refresh_token", boom)
    with pytest.raises(ConnectionError):
        service.signup(SignupIn(name="Ann", email="a@x.com", password="secret1"))

    assert session.query(User).filter_by(email="a@x.com").count() == 1


# -------------------------------- Login ----------------------------------- #
def test_login_overwrites_previous_session(service, redis_client):
    user = UserFactory(email="b@x.com", password="secret1")

    first = service.login(LoginIn(email="b@x.com", password="secret1"))
    second = service.login(LoginIn(email="b@x.com", password="secret1"))

    assert redis_client.get(f"refresh_token:{user.id}") == second.tokens.refresh_token
    assert first.user == second.user


@pytest.mark.parametrize(
    ("email", "password"),
    [("b@x.com", "wrong-pw"), ("nobody@x.com", "secret1")],
)
def test_login_failures_are_indistinguishable(service, email, password):
    UserFactory(email="b@x.com", password="secret1")
    with pytest.raises(InvalidCredentialsError) as exc_info:
        service.login(LoginIn(email=email, password=password))
    assert str(exc_info.value) == "Invalid email or password"


# ------------------------------- Refresh ---------------------------------- #
def test_refresh_issues_access_token_without_rotation(service, redis_client):
    result = service.signup(SignupIn(name="Ann", email="a@x.com", password="secret1"))

    access = service.refresh_access_token(result.tokens.refresh_token)

    assert service.tokens.verify_and_decode(access, "a-secret")["userId"] == result.user.id
    assert redis_client.get(f"refresh_token:{result.user.id}") == result.tokens.refresh_token


def test_refresh_without_token(service):
    with pytest.raises(UnauthorizedError, match="No refresh token provided"):
        service.refresh_access_token(None)


def test_refresh_with_bad_signature(service):
    with pytest.raises(InvalidTokenError):
        service.refresh_access_token("garbage")


def test_refresh_after_cache_entry_removed(service, redis_client):
    result = service.signup(SignupIn(name="Ann", email="a@x.com", password="secret1"))
    redis_client.delete(f"refresh_token:{result.user.id}")

    with pytest.raises(ForbiddenError, match="Invalid refresh token"):
        service.refresh_access_token(result.tokens.refresh_token)


# -------------------------------- Logout ---------------------------------- #
def test_logout_revokes_unconditionally(service, redis_client):
    result = service.signup(SignupIn(name="Ann", email="a@x.com", password="secret1"))
    stale = result.tokens.refresh_token
    service.login(LoginIn(email="a@x.com", password="secret1"))

    service.logout(stale)

    assert redis_client.get(f"refresh_token:{result.user.id}") is None


def test_logout_without_token_is_noop(service):
    service.logout(None)
    service.logout("")


def test_logout_with_garbled_token_raises(service):
    with pytest.raises(SessionTeardownError):
        service.logout("garbled")


# ---------------------------- Federated login ----------------------------- #
def test_federated_login_creates_google_account(service, session):
    result = service.federated_login(_profile())

    user = session.get(User, result.user.id)
    assert user.google_id == "g-1"
    assert user.password_hash is None
    assert user.auth_provider == "google"
    assert user.profile_picture == "https://p/g.png"


def test_federated_login_links_existing_local_account(service, session):
    local = UserFactory(email="gina@example.com")

    result = service.federated_login(_profile())

    assert result.user.id == local.id
    assert session.get(User, local.id).google_id == "g-1"
    assert session.query(User).count() == 1


def test_federated_login_refuses_account_linked_elsewhere(service, session):
    local = UserFactory(email="gina@example.com", google_id="g-original")

    with pytest.raises(ConflictError, match="another Google identity"):
        service.federated_login(_profile(subject="g-intruder"))

    assert session.get(User, local.id).google_id == "g-original"
    assert session.query(User).count() == 1


def test_federated_login_reuses_linked_account(service, session):
    first = service.federated_login(_profile())
    again = service.federated_login(_profile(email="changed@example.com"))

    assert again.user.id == first.user.id
    assert session.query(User).count() == 1


# -------------------------------- Profile --------------------------------- #
def test_profile_never_exposes_hash(service):
    user = UserFactory()
    profile = service.profile(user)
    assert profile.id == user.id
    assert profile.cart_items == []
    assert not hasattr(profile, "password_hash")
