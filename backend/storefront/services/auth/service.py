# storefront/services/auth/service.py
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from storefront.models.user import User
from storefront.services._shared.base import BaseService
from storefront.services._shared.errors import (
    ConflictError,
    ForbiddenError,
    InvalidCredentialsError,
    ServiceError,
    UnauthorizedError,
)
from storefront.services._shared.ports import FederatedProfile
from storefront.services.auth.dto import (
    AuthResultOut,
    CartItemOut,
    LoginIn,
    SignupIn,
    UserProfileOut,
    UserPublicOut,
)
from storefront.services.auth.tokens import USER_ID_CLAIM, TokenService

log = logging.getLogger(__name__)


class SessionTeardownError(RuntimeError):
    """Raised when logout cannot decode the presented refresh token."""


class AuthService(BaseService):
    """
    Signup, login, logout and access-token refresh.

    Each public method is a one-shot transition over the credential store and
    the session cache. Nothing is compensated: a user committed before a
    cache failure keeps existing without a session.
    """

    def __init__(self, *, tokens: TokenService) -> None:
        self.tokens = tokens

    # ------------------------------------------------------------------ #
    # Signup / login
    # ------------------------------------------------------------------ #

    def signup(self, dto: SignupIn) -> AuthResultOut:
        """
        Create a local account and open its session.

        :raises ConflictError: When the email is already registered.
        """
        try:
            with self.uow() as uow:
                if uow.users.exists_by_email(dto.email):
                    raise ConflictError("User already exists")
                try:
                    user = uow.users.create_user(
                        name=dto.name, email=dto.email, password=dto.password
                    )
                except ValueError as exc:
                    raise ServiceError(str(exc)) from exc
                public = self._to_public(user)
        except IntegrityError as exc:
            # Concurrent signup won the unique email constraint
            raise ConflictError("User already exists") from exc

        log.info("user signed up", extra={"user_id": public.id})
        return AuthResultOut(user=public, tokens=self._open_session(public.id))

    def login(self, dto: LoginIn) -> AuthResultOut:
        """
        Verify credentials and open a new session.

        A new login overwrites any refresh token held by another device.

        :raises InvalidCredentialsError: Unknown email or wrong password alike.
        """
        with self.uow() as uow:
            user = uow.users.authenticate(dto.email, dto.password)
            if user is None:
                raise InvalidCredentialsError()
            public = self._to_public(user)

        return AuthResultOut(user=public, tokens=self._open_session(public.id))

    def federated_login(self, profile: FederatedProfile) -> AuthResultOut:
        """
        Sign in with a provider-asserted identity.

        Lookup order: linked ``google_id``, then an existing account with the
        same email (which gets linked), otherwise a new password-less account.

        :raises ConflictError: The email belongs to an account linked to a
            different Google identity.
        """
        with self.uow() as uow:
            user = uow.users.get_by_google_id(profile.subject)
            if user is None:
                user = uow.users.get_by_email(profile.email)
                if user is not None:
                    try:
                        uow.users.link_google_account(
                            user, google_id=profile.subject, picture=profile.picture
                        )
                    except ValueError as exc:
                        log.warning("google link refused", extra={"user_id": user.id})
                        raise ConflictError(str(exc)) from exc
                else:
                    user = uow.users.create_user(
                        name=profile.name,
                        email=profile.email,
                        google_id=profile.subject,
                        profile_picture=profile.picture or "",
                    )
            public = self._to_public(user)

        return AuthResultOut(user=public, tokens=self._open_session(public.id))

    # ------------------------------------------------------------------ #
    # Logout / refresh
    # ------------------------------------------------------------------ #

    def logout(self, refresh_token: str | None) -> None:
        """
        Drop the session entry of the refresh token's owner.

        Without a token this is a no-op. The entry is deleted whether or not it
        still matches ``refresh_token``.

        :raises SessionTeardownError: If the token cannot be verified.
        """
        if not refresh_token:
            return
        try:
            payload = self.tokens.decode_refresh_token(refresh_token)
        except ServiceError as exc:
            raise SessionTeardownError(str(exc)) from exc
        self.tokens.revoke_refresh_token(payload[USER_ID_CLAIM])

    def refresh_access_token(self, refresh_token: str | None) -> str:
        """
        Mint a new access token; the refresh token is not rotated.

        :raises UnauthorizedError: No refresh token presented.
        :raises InvalidTokenError: Bad signature or expired token.
        :raises ForbiddenError: Token differs from the cached one (or none cached).
        """
        if not refresh_token:
            raise UnauthorizedError("No refresh token provided")

        user_id = self.tokens.decode_refresh_token(refresh_token)[USER_ID_CLAIM]
        if not self.tokens.validate_refresh_token(user_id, refresh_token):
            raise ForbiddenError("Invalid refresh token")
        return self.tokens.issue_access_token(user_id)

    # ------------------------------------------------------------------ #
    # Profile
    # ------------------------------------------------------------------ #

    def profile(self, user: User) -> UserProfileOut:
        """Project the user attached by the authorization middleware."""
        return UserProfileOut(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            auth_provider=user.auth_provider,
            profile_picture=user.profile_picture,
            cart_items=[
                CartItemOut(product_id=item.product_id, quantity=item.quantity)
                for item in user.cart_items
            ],
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _open_session(self, user_id: int):
        tokens = self.tokens.issue_token_pair(user_id)
        self.tokens.persist_refresh_token(user_id, tokens.refresh_token)
        return tokens

    @staticmethod
    def _to_public(user: User) -> UserPublicOut:
        return UserPublicOut(id=user.id, name=user.name, email=user.email, role=user.role)
