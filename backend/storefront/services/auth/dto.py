# storefront/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class SignupIn:
    """
    Input DTO for signup.

    :param name: Display name.
    :param email: Login email (normalized by the model).
    :param password: Raw password (hashed before persistence).
    """

    name: str
    email: str
    password: str


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param email: User email.
    :param password: Raw password (to be verified).
    """

    email: str
    password: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Access and refresh tokens issued together.

    :param access_token: Short-lived JWT signed with the access secret.
    :param refresh_token: Long-lived JWT signed with the refresh secret.
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """Public projection returned by signup/login. Never carries the hash."""

    id: int
    name: str
    email: str
    role: str


@dataclass(frozen=True, slots=True)
class CartItemOut:
    product_id: int
    quantity: int


@dataclass(frozen=True, slots=True)
class UserProfileOut:
    """Full profile of the authenticated user (password hash excluded)."""

    id: int
    name: str
    email: str
    role: str
    auth_provider: str
    profile_picture: str
    cart_items: list[CartItemOut] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class AuthResultOut:
    """Outcome of a successful signup/login: the user plus the cookies to set."""

    user: UserPublicOut
    tokens: TokenPairOut


# ------------------------------ Config DTO -------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    """
    Token emission configuration.

    :param access_secret: Signing key for access tokens.
    :param refresh_secret: Signing key for refresh tokens.
    :param access_expires: Access token lifetime (15 minutes by default).
    :param refresh_expires: Refresh token lifetime (7 days by default).
    """

    access_secret: str
    refresh_secret: str
    access_expires: timedelta = timedelta(minutes=15)
    refresh_expires: timedelta = timedelta(days=7)
