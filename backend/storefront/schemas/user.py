"""User resource schemas."""

from __future__ import annotations

from marshmallow import Schema, fields


class UserPublicSchema(Schema):
    """Public projection returned by signup and login."""

    id = fields.Integer(required=True, data_key="_id")
    name = fields.String(required=True)
    email = fields.Email(required=True)
    role = fields.String(required=True)


class CartItemSchema(Schema):
    product_id = fields.Integer(required=True, data_key="product")
    quantity = fields.Integer(required=True)


class ProfileSchema(UserPublicSchema):
    """Authenticated user's own profile. Never carries the password hash."""

    auth_provider = fields.String(data_key="authProvider")
    profile_picture = fields.String(data_key="profilePicture")
    cart_items = fields.List(fields.Nested(CartItemSchema), data_key="cartItems")
    created_at = fields.DateTime(data_key="createdAt", allow_none=True)
    updated_at = fields.DateTime(data_key="updatedAt", allow_none=True)
