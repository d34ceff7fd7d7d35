"""Product repository."""

from __future__ import annotations

from sqlalchemy import func, select

from storefront.models.product import Product
from storefront.repositories.base import BaseRepository


class ProductRepository(BaseRepository[Product]):
    """Persistence-only repository for :class:`Product`."""

    model = Product

    def _filterable_fields(self):
        return {
            "category": Product.category,
            "is_featured": Product.is_featured,
        }

    def list_featured(self) -> list[Product]:
        """Return featured products in insertion order."""
        return self.find_all(is_featured=True)

    def list_by_category(self, category: str) -> list[Product]:
        return self.find_all(category=category)

    def sample(self, size: int) -> list[Product]:
        """Return up to ``size`` products in random order."""
        stmt = select(Product).order_by(func.random()).limit(size)
        return list(self.session.execute(stmt).scalars().all())

    def toggle_featured(self, product: Product) -> Product:
        """Flip ``is_featured`` and flush."""
        product.is_featured = not product.is_featured
        self.flush()
        return product
