"""Catalog product model."""

from __future__ import annotations

from sqlalchemy import Boolean, CheckConstraint, Float, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, validates

from storefront.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin


class Product(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Sellable item.

    Fields
    ------
    name : str
    description : str
    price : float
        Non-negative unit price.
    image : str | None
        Public URL of the uploaded image.
    category : str
        Free-form category slug (``jeans``, ``shoes``...).
    is_featured : bool
        Whether the item appears in the featured list.
    """

    __tablename__ = "products"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    image: Mapped[str | None] = mapped_column(String(512), nullable=True)
    category: Mapped[str] = mapped_column(String(64), nullable=False)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        CheckConstraint("price >= 0", name="price_non_negative"),
        Index("ix_products_category", "category"),
        Index("ix_products_is_featured", "is_featured"),
    )

    @validates("price")
    def _check_price(self, key: str, value: float) -> float:
        if value is None or float(value) < 0:
            raise ValueError("Price must be zero or greater")
        return float(value)
