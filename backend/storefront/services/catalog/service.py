"""
CatalogService
==============

Product CRUD plus the cache-aside ``featured_products`` list.

- Reads of the featured list go to the cache first; a miss loads from the
  database and writes the result back before returning.
- Writes that can change the featured set (toggle, delete of a featured
  product) refresh the cached list.
"""

from __future__ import annotations

import json
import logging

from storefront.models.product import Product
from storefront.services._shared.base import BaseService
from storefront.services._shared.errors import NotFoundError
from storefront.services._shared.ports import ImageStorage, KeyValueCache
from storefront.services.catalog.dto import ProductCreateIn, ProductOut

log = logging.getLogger(__name__)

FEATURED_PRODUCTS_KEY = "featured_products"
IMAGE_FOLDER = "products"
RECOMMENDATION_SIZE = 4


def image_public_id(url: str) -> str:
    """Return the storage id (``products/<name>``) of an uploaded image URL."""
    filename = url.rstrip("/").split("/")[-1]
    return f"{IMAGE_FOLDER}/{filename.split('.')[0]}"


class CatalogService(BaseService):
    """Orchestrates product use cases over the store, cache and image storage."""

    def __init__(self, *, cache: KeyValueCache, images: ImageStorage) -> None:
        self.cache = cache
        self.images = images

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def list_products(self) -> list[ProductOut]:
        with self.uow() as uow:
            return [self._to_out(p) for p in uow.products.find_all()]

    def featured_products(self) -> list[ProductOut]:
        """
        Return featured products, cache first.

        :raises NotFoundError: When no product is featured.
        """
        cached = self.cache.get(FEATURED_PRODUCTS_KEY)
        if cached is not None:
            products = [ProductOut.from_cache(item) for item in json.loads(cached)]
            if not products:
                raise NotFoundError("No featured products found")
            return products

        with self.uow() as uow:
            products = [self._to_out(p) for p in uow.products.list_featured()]
        if not products:
            raise NotFoundError("No featured products found")

        self.cache.set(FEATURED_PRODUCTS_KEY, self._dump(products))
        return products

    def recommended_products(self) -> list[ProductOut]:
        with self.uow() as uow:
            return [self._to_out(p) for p in uow.products.sample(RECOMMENDATION_SIZE)]

    def products_by_category(self, category: str) -> list[ProductOut]:
        with self.uow() as uow:
            return [self._to_out(p) for p in uow.products.list_by_category(category)]

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #

    def create_product(self, dto: ProductCreateIn) -> ProductOut:
        """Upload the optional image, then persist the product."""
        image_url = self.images.upload(dto.image, folder=IMAGE_FOLDER) if dto.image else None
        with self.uow() as uow:
            product = uow.products.add(
                Product(
                    name=dto.name,
                    description=dto.description,
                    price=dto.price,
                    image=image_url,
                    category=dto.category,
                )
            )
            return self._to_out(product)

    def delete_product(self, product_id: int) -> None:
        """
        Delete a product and its image.

        Image removal failures are logged and do not block the deletion.

        :raises NotFoundError: Unknown ``product_id``.
        """
        with self.uow() as uow:
            product = uow.products.get(product_id)
            if product is None:
                raise NotFoundError("Product not found")

            if product.image:
                try:
                    self.images.destroy(image_public_id(product.image))
                    log.info("deleted product image", extra={"endpoint": "delete_product"})
                except Exception:
                    log.warning("error deleting product image %s", product.image, exc_info=True)

            was_featured = product.is_featured
            uow.products.delete(product)

        if was_featured:
            self.refresh_featured_cache()

    def toggle_featured(self, product_id: int) -> ProductOut:
        """
        Flip ``is_featured`` and refresh the cached featured list.

        :raises NotFoundError: Unknown ``product_id``.
        """
        with self.uow() as uow:
            product = uow.products.get(product_id)
            if product is None:
                raise NotFoundError("Product not found")
            uow.products.toggle_featured(product)
            out = self._to_out(product)

        self.refresh_featured_cache()
        return out

    def refresh_featured_cache(self) -> None:
        """
        Rewrite ``featured_products`` from the database; failures are only logged.

        An empty featured set drops the key so reads fall back to the 404 path.
        """
        try:
            with self.uow() as uow:
                products = [self._to_out(p) for p in uow.products.list_featured()]
            if products:
                self.cache.set(FEATURED_PRODUCTS_KEY, self._dump(products))
            else:
                self.cache.delete(FEATURED_PRODUCTS_KEY)
        except Exception:
            log.error("error in featured products cache refresh", exc_info=True)

    # ------------------------------------------------------------------ #
    # Mapping
    # ------------------------------------------------------------------ #

    @staticmethod
    def _dump(products: list[ProductOut]) -> str:
        return json.dumps([p.to_cache() for p in products])

    @staticmethod
    def _to_out(product: Product) -> ProductOut:
        return ProductOut(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            image=product.image,
            category=product.category,
            is_featured=product.is_featured,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )
