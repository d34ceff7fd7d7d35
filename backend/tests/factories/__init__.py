"""Factory Boy helpers wired to the Flask-scoped SQLAlchemy session."""

from __future__ import annotations

import factory
from storefront.core.extensions import db


def _current_session():
    """Return ``db.session``; only valid inside the ``app`` fixture's context."""
    return db.session


class BaseFactory(factory.alchemy.SQLAlchemyModelFactory):
    """Base class persisting through the same session the services use."""

    class Meta:
        abstract = True
        sqlalchemy_session_factory = _current_session
        sqlalchemy_session_persistence = "commit"
