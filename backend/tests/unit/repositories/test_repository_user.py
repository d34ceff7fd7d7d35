"""Unit tests for UserRepository."""

import pytest
from storefront.models.user import ROLE_ADMIN
from storefront.repositories.user import UserRepository

from tests.factories.user import UserFactory


class TestUserRepository:
    """Ensure ``UserRepository`` performs core persistence operations."""

    @pytest.fixture()
    def repo(self, session):
        return UserRepository()

    def test_create_user_hashes_password(self, repo, session):
        user = repo.create_user(name="Alice", email="Alice@Example.com", password="secret1")
        session.commit()

        assert user.id is not None
        assert user.email == "alice@example.com"
        assert user.password_hash and user.password_hash != "secret1"
        assert user.auth_provider == "local"

    def test_create_user_requires_password_or_google_id(self, repo):
        with pytest.raises(ValueError, match="Password is required"):
            repo.create_user(name="Nobody", email="nobody@example.com")

    def test_create_google_user_without_password(self, repo, session):
        user = repo.create_user(name="G", email="g@example.com", google_id="g-42")
        session.commit()
        assert user.password_hash is None
        assert user.auth_provider == "google"

    def test_get_by_email_is_case_insensitive(self, repo):
        u = UserFactory(email="bob@example.com")
        assert repo.get_by_email(" BOB@example.com ").id == u.id

    def test_exists_by_email(self, repo):
        UserFactory(email="carl@example.com")
        assert repo.exists_by_email("carl@example.com")
        assert not repo.exists_by_email("nonexistent@example.com")

    def test_authenticate(self, repo):
        u = UserFactory(email="dana@example.com", password="hunter22")
        assert repo.authenticate("dana@example.com", "hunter22").id == u.id
        assert repo.authenticate("dana@example.com", "wrong-pw") is None
        assert repo.authenticate("missing@example.com", "hunter22") is None

    def test_link_google_account_keeps_existing_picture(self, repo):
        u = UserFactory(email="eve@example.com", profile_picture="https://pic/old.png")
        repo.link_google_account(u, google_id="g-7", picture="https://pic/new.png")
        assert repo.get_by_google_id("g-7").id == u.id
        assert u.profile_picture == "https://pic/old.png"

    def test_link_google_account_refuses_other_identity(self, repo):
        u = UserFactory(google_id="g-1")
        with pytest.raises(ValueError, match="another Google identity"):
            repo.link_google_account(u, google_id="g-2", picture=None)
        assert u.google_id == "g-1"

    def test_set_role(self, repo):
        u = UserFactory()
        repo.set_role(u, ROLE_ADMIN)
        assert u.is_admin
        assert repo.find_all(role=ROLE_ADMIN) == [u]
