"""Product resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class ProductCreateSchema(Schema):
    """Payload for creating a product from the admin surface."""

    class Meta:
        unknown = EXCLUDE

    name = fields.String(required=True, validate=validate.Length(min=1, max=200))
    description = fields.String(required=True, validate=validate.Length(min=1))
    price = fields.Float(required=True, validate=validate.Range(min=0))
    category = fields.String(required=True, validate=validate.Length(min=1, max=100))
    image = fields.String(load_default=None, allow_none=True)


class ProductSchema(Schema):
    """Public representation of a product."""

    id = fields.Integer(required=True, data_key="_id")
    name = fields.String(required=True)
    description = fields.String(required=True)
    price = fields.Float(required=True)
    image = fields.String(allow_none=True)
    category = fields.String(required=True)
    is_featured = fields.Boolean(data_key="isFeatured")
    created_at = fields.DateTime(data_key="createdAt", allow_none=True)
    updated_at = fields.DateTime(data_key="updatedAt", allow_none=True)


class RecommendationSchema(Schema):
    """Reduced projection used by the recommendations endpoint."""

    id = fields.Integer(required=True, data_key="_id")
    name = fields.String(required=True)
    description = fields.String(required=True)
    image = fields.String(allow_none=True)
    price = fields.Float(required=True)
