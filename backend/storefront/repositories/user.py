"""User repository: lookups and explicit account creation."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from storefront.models.user import PROVIDER_GOOGLE, PROVIDER_LOCAL, ROLE_CUSTOMER, User
from storefront.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    It NEVER issues tokens or touches the session cache.
    """

    model = User

    def _filterable_fields(self):
        return {
            "email": User.email,
            "google_id": User.google_id,
            "role": User.role,
        }

    # ---------------------------- Creation ----------------------------

    def create_user(
        self,
        *,
        name: str,
        email: str,
        password: str | None = None,
        google_id: str | None = None,
        profile_picture: str = "",
        role: str = ROLE_CUSTOMER,
    ) -> User:
        """Hash the password (when given) and persist a new user.

        :param name: Display name.
        :param email: Login email; normalized by the model.
        :param password: Raw password. Required unless ``google_id`` is set.
        :param google_id: Federated identity id for Google sign-ups.
        :param profile_picture: Optional avatar URL.
        :param role: Initial role (``customer`` unless seeded otherwise).
        :returns: The flushed user with its primary key assigned.
        :raises ValueError: When neither a password nor a federated id is given,
            or when the password is too short.
        """
        if not password and not google_id:
            raise ValueError("Password is required")

        user = User(
            name=name,
            email=email,
            google_id=google_id,
            profile_picture=profile_picture or "",
            auth_provider=PROVIDER_GOOGLE if google_id and not password else PROVIDER_LOCAL,
            role=role,
        )
        if password:
            user.set_password(password)
        return self.add(user)

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive)."""
        stmt = select(User).where(User.email == email.lower().strip())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def exists_by_email(self, email: str) -> bool:
        """Return ``True`` when a user with the provided email exists."""
        stmt = select(User.id).where(User.email == email.lower().strip())
        return bool(self.session.execute(stmt).first())

    def get_by_google_id(self, google_id: str) -> User | None:
        """Fetch the user linked to a Google account id."""
        return self.find_one(google_id=google_id)

    # ---------------------------- Auth helpers ----------------------------

    def authenticate(self, email: str, password: str) -> User | None:
        """Return the user when ``email``/``password`` match, else ``None``."""
        user = self.get_by_email(email)
        if not user or not user.verify_password(password):
            return None
        return user

    def link_google_account(self, user: User, *, google_id: str, picture: str | None) -> User:
        """Attach a Google identity to an existing local account.

        :raises ValueError: If the account is already linked to another Google id.
        """
        if user.google_id is not None and user.google_id != google_id:
            raise ValueError("Account is already linked to another Google identity")
        user.google_id = google_id
        if picture and not user.profile_picture:
            user.profile_picture = picture
        self.flush()
        return user

    def set_role(self, user: User, role: str) -> User:
        """Change the user's role and flush."""
        user.role = role
        self.flush()
        return user
