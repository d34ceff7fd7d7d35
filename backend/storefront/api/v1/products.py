"""Product catalog endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from storefront.api.deps import admin_route, build_catalog_service, json_response, timing
from storefront.schemas import ProductCreateSchema, ProductSchema, RecommendationSchema
from storefront.services.catalog.dto import ProductCreateIn

bp = Blueprint("products", __name__)

product_schema = ProductSchema()
product_list_schema = ProductSchema(many=True)
product_create_schema = ProductCreateSchema()
recommendation_list_schema = RecommendationSchema(many=True)


@bp.get("")
@admin_route
@timing
def list_products():
    products = build_catalog_service().list_products()
    return json_response({"products": product_list_schema.dump(products)})


@bp.get("/featured")
@timing
def featured_products():
    """Return featured products, served from the cache when warm."""

    products = build_catalog_service().featured_products()
    return json_response(product_list_schema.dump(products))


@bp.post("")
@admin_route
@timing
def create_product():
    data = product_create_schema.load(request.get_json(silent=True) or {})
    product = build_catalog_service().create_product(ProductCreateIn(**data))
    return json_response(product_schema.dump(product), status=201)


@bp.delete("/<int:product_id>")
@admin_route
@timing
def delete_product(product_id: int):
    build_catalog_service().delete_product(product_id)
    return json_response({"message": "Product deleted successfully"})


@bp.get("/recommendations")
@timing
def recommended_products():
    products = build_catalog_service().recommended_products()
    return json_response(recommendation_list_schema.dump(products))


@bp.get("/category/<string:category>")
@timing
def products_by_category(category: str):
    products = build_catalog_service().products_by_category(category)
    return json_response({"products": product_list_schema.dump(products)})


@bp.patch("/<int:product_id>")
@admin_route
@timing
def toggle_featured_product(product_id: int):
    """Flip ``isFeatured`` and refresh the cached featured list."""

    product = build_catalog_service().toggle_featured(product_id)
    return json_response(product_schema.dump(product))
