"""Account administration use cases that do not touch sessions."""

from __future__ import annotations

from storefront.models.user import ROLE_ADMIN
from storefront.services._shared.base import BaseService
from storefront.services._shared.errors import NotFoundError
from storefront.services.auth.dto import UserPublicOut


class AccountAdminService(BaseService):
    """Role management over the credential store."""

    def promote_to_admin(self, email: str) -> UserPublicOut:
        """
        Grant the admin role to the account registered under ``email``.

        :raises NotFoundError: No such account.
        """
        with self.uow() as uow:
            user = uow.users.get_by_email(email)
            if user is None:
                raise NotFoundError(f"User not found: {email}")
            uow.users.set_role(user, ROLE_ADMIN)
            return UserPublicOut(id=user.id, name=user.name, email=user.email, role=user.role)
