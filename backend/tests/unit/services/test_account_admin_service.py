# tests/unit/services/test_account_admin_service.py
from __future__ import annotations

import pytest
from storefront.models import User
from storefront.services._shared.errors import NotFoundError
from storefront.services.auth.admin import AccountAdminService

from tests.factories.user import UserFactory


def test_promote_to_admin(app, session):
    user = UserFactory(email="boss@example.com")

    out = AccountAdminService().promote_to_admin("Boss@Example.com")

    assert out.role == "admin"
    assert session.get(User, user.id).is_admin


def test_promote_unknown_email(app):
    with pytest.raises(NotFoundError):
        AccountAdminService().promote_to_admin("ghost@example.com")
