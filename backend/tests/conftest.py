"""Pytest fixtures building an isolated application per test.

Each test gets a fresh app bound to its own in-memory SQLite database and an
in-memory Redis (fakeredis), so commits made by the unit of work never leak
between cases.
"""

from __future__ import annotations

import os

import fakeredis
import pytest
from storefront.core.config import TestingConfig
from storefront.core.extensions import db as _db
from storefront.factory import create_app
from storefront.services._shared.ports import FederatedProfile

from tests.helpers.fakes import FakeIdentityProvider, FakeImageStorage


@pytest.fixture()
def redis_client():
    """Provide a fresh FakeRedis speaking ``str`` like the production client."""
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture()
def images() -> FakeImageStorage:
    return FakeImageStorage()


@pytest.fixture()
def identity() -> FakeIdentityProvider:
    """Identity provider double asserting a verified Google profile."""
    return FakeIdentityProvider(
        profile=FederatedProfile(
            subject="google-123",
            email="shopper@gmail.com",
            name="Google Shopper",
            picture="https://lh3.googleusercontent.com/a/avatar",
        )
    )


@pytest.fixture()
def app(redis_client, images, identity):
    """Create the Flask app under test with all collaborators replaced by doubles.

    Yields
    ------
    flask.Flask
        Application with tables created, inside an active app context.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    app = create_app(
        TestingConfig,
        cache_client=redis_client,
        image_storage=images,
        identity_provider=identity,
    )
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture()
def session(app):
    """Return the Flask-scoped SQLAlchemy session used by the app code."""
    return _db.session


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk
