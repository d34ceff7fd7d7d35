"""Integration tests for /api/v1/products."""

from __future__ import annotations

import json

import pytest
from storefront.models import Product
from storefront.services.catalog.service import FEATURED_PRODUCTS_KEY

from tests.factories.product import ProductFactory
from tests.factories.user import UserFactory
from tests.helpers.utils import PRODUCTS, login


@pytest.fixture()
def admin_client(client):
    UserFactory(email="admin@x.com", role="admin")
    login(client, "admin@x.com")
    return client


@pytest.fixture()
def customer_client(client):
    UserFactory(email="shopper@x.com")
    login(client, "shopper@x.com")
    return client


class TestAdminGuard:
    def test_anonymous_is_unauthorized(self, client):
        resp = client.get(PRODUCTS)
        assert resp.status_code == 401
        assert resp.get_json() == {"message": "Unauthorized - No access token provided"}

    def test_customer_is_forbidden(self, customer_client):
        resp = customer_client.post(PRODUCTS, json={})
        assert resp.status_code == 403
        assert resp.get_json() == {"message": "Access denied - Admin only"}


class TestAdminEndpoints:
    def test_list_all(self, admin_client):
        ProductFactory.create_batch(3)

        resp = admin_client.get(PRODUCTS)

        assert resp.status_code == 200
        products = resp.get_json()["products"]
        assert len(products) == 3
        assert {"_id", "name", "price", "isFeatured", "createdAt"} <= set(products[0])

    def test_create_with_image(self, admin_client, images):
        resp = admin_client.post(
            PRODUCTS,
            json={
                "name": "Boots",
                "description": "Leather boots",
                "price": 120,
                "category": "shoes",
                "image": "data:image/png;base64,AAAA",
            },
        )

        assert resp.status_code == 201
        body = resp.get_json()
        assert body["name"] == "Boots"
        assert body["isFeatured"] is False
        assert body["image"].startswith("https://res.cloudinary.com/")
        assert images.uploads[0][1] == "products"

    def test_create_validates_payload(self, admin_client):
        resp = admin_client.post(PRODUCTS, json={"name": "x", "price": -3})
        assert resp.status_code == 400
        errors = resp.get_json()["errors"]
        assert {"description", "category", "price"} <= set(errors)

    def test_delete(self, admin_client, images, session):
        p = ProductFactory(image="https://res.cloudinary.com/demo/image/upload/v1/products/abc.jpg")

        resp = admin_client.delete(f"{PRODUCTS}/{p.id}")

        assert resp.status_code == 200
        assert resp.get_json() == {"message": "Product deleted successfully"}
        assert images.destroyed == ["products/abc"]
        assert session.query(Product).count() == 0

    def test_delete_missing(self, admin_client):
        resp = admin_client.delete(f"{PRODUCTS}/404")
        assert resp.status_code == 404
        assert resp.get_json() == {"message": "Product not found"}

    def test_toggle_featured_refreshes_cache(self, admin_client, redis_client):
        p = ProductFactory(is_featured=False)

        resp = admin_client.patch(f"{PRODUCTS}/{p.id}")

        assert resp.status_code == 200
        assert resp.get_json()["isFeatured"] is True
        cached = json.loads(redis_client.get(FEATURED_PRODUCTS_KEY))
        assert [item["id"] for item in cached] == [p.id]

    def test_toggle_off_last_featured_is_not_found(self, admin_client):
        p = ProductFactory(is_featured=False)
        assert admin_client.get(f"{PRODUCTS}/featured").status_code == 404

        admin_client.patch(f"{PRODUCTS}/{p.id}")
        assert admin_client.get(f"{PRODUCTS}/featured").status_code == 200
        admin_client.patch(f"{PRODUCTS}/{p.id}")

        resp = admin_client.get(f"{PRODUCTS}/featured")
        assert resp.status_code == 404
        assert resp.get_json() == {"message": "No featured products found"}


class TestPublicEndpoints:
    def test_featured_none(self, client):
        resp = client.get(f"{PRODUCTS}/featured")
        assert resp.status_code == 404
        assert resp.get_json() == {"message": "No featured products found"}

    def test_featured_served_from_cache(self, client, redis_client):
        p = ProductFactory(is_featured=True, name="Star")

        first = client.get(f"{PRODUCTS}/featured")
        assert first.status_code == 200
        assert [item["_id"] for item in first.get_json()] == [p.id]
        assert redis_client.exists(FEATURED_PRODUCTS_KEY)

        second = client.get(f"{PRODUCTS}/featured")
        assert second.get_json() == first.get_json()

    def test_recommendations_projection(self, client):
        ProductFactory.create_batch(6)

        resp = client.get(f"{PRODUCTS}/recommendations")

        assert resp.status_code == 200
        items = resp.get_json()
        assert len(items) == 4
        assert set(items[0]) == {"_id", "name", "description", "image", "price"}

    def test_by_category(self, client):
        ProductFactory(category="jeans")
        ProductFactory(category="shoes")

        resp = client.get(f"{PRODUCTS}/category/jeans")

        assert resp.status_code == 200
        products = resp.get_json()["products"]
        assert [p["category"] for p in products] == ["jeans"]

    def test_unknown_route(self, client):
        resp = client.get("/api/v1/nothing-here")
        assert resp.status_code == 404
        assert resp.get_json() == {"message": "Route '/api/v1/nothing-here' not found"}
