"""
Unit tests for SQLAlchemyUnitOfWork, using factories.
"""

from __future__ import annotations

import pytest
from storefront.models import Product
from storefront.uow import SQLAlchemyUnitOfWork

from tests.factories.product import ProductFactory


class TestSQLAlchemyUnitOfWork:
    def test_commits_on_success(self, session):
        """
        GIVEN a UoW
        WHEN a product is added inside the context and the block exits cleanly
        THEN the row survives a rollback of the outer session.
        """
        with SQLAlchemyUnitOfWork() as uow:
            uow.products.add(ProductFactory.build())

        session.rollback()
        assert session.query(Product).count() == 1

    def test_rolls_back_on_exception(self, session):
        with pytest.raises(RuntimeError), SQLAlchemyUnitOfWork() as uow:
            uow.products.add(ProductFactory.build())
            raise RuntimeError("boom")

        assert session.query(Product).count() == 0
