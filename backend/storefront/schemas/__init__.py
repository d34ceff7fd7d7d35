"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import LoginSchema, SignupSchema
from .product import ProductCreateSchema, ProductSchema, RecommendationSchema
from .user import ProfileSchema, UserPublicSchema

__all__ = [
    "LoginSchema",
    "SignupSchema",
    "ProductSchema",
    "ProductCreateSchema",
    "RecommendationSchema",
    "ProfileSchema",
    "UserPublicSchema",
]
