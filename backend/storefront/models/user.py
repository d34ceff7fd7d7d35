"""Customer identity and cart models."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates
from werkzeug.security import check_password_hash, generate_password_hash

from storefront.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .product import Product

ROLE_CUSTOMER = "customer"
ROLE_ADMIN = "admin"
ROLES = (ROLE_CUSTOMER, ROLE_ADMIN)

PROVIDER_LOCAL = "local"
PROVIDER_GOOGLE = "google"
AUTH_PROVIDERS = (PROVIDER_LOCAL, PROVIDER_GOOGLE)

MIN_PASSWORD_LENGTH = 6


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Shopper or administrator account.

    Fields
    ------
    name : str
        Display name.
    email : str
        Login email. Stored normalized (lowercase, trimmed) and unique.
    password_hash : str | None
        Hashed password. ``None`` for accounts created through Google.
    google_id : str | None
        Federated identity id, unique when present.
    profile_picture : str
        Avatar URL (empty when unknown).
    auth_provider : str
        ``local`` or ``google``.
    role : str
        ``customer`` (default) or ``admin``.
    cart_items : list[CartItem]
        Embedded cart lines.
    """

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    password_hash: Mapped[str | None] = mapped_column(String(254), nullable=True)
    google_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    profile_picture: Mapped[str] = mapped_column(String(512), nullable=False, default="")
    auth_provider: Mapped[str] = mapped_column(String(16), nullable=False, default=PROVIDER_LOCAL)
    role: Mapped[str] = mapped_column(String(16), nullable=False, default=ROLE_CUSTOMER)

    cart_items: Mapped[list[CartItem]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
        UniqueConstraint("google_id", name="uq_users_google_id"),
        CheckConstraint("role IN ('customer', 'admin')", name="role_valid"),
        CheckConstraint("auth_provider IN ('local', 'google')", name="auth_provider_valid"),
    )

    # -------------------- Password API --------------------
    def set_password(self, raw: str) -> None:
        """
        Hash and store ``raw``.

        :raises ValueError: If the password is shorter than six characters.
        """
        if not isinstance(raw, str) or len(raw) < MIN_PASSWORD_LENGTH:
            raise ValueError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )
        self.password_hash = generate_password_hash(raw)

    def verify_password(self, raw: str) -> bool:
        """Return ``True`` when ``raw`` matches the stored hash.

        Accounts without a password (Google sign-ups) never match.
        """
        if not self.password_hash:
            return False
        return bool(check_password_hash(self.password_hash, raw))

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    # -------------------- Validators --------------------
    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """Lowercase/trim the email and reject obviously malformed values."""
        if not value or not isinstance(value, str):
            raise ValueError("Email is required")
        v = value.strip().lower()
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Email format looks invalid")
        return v

    @validates("name")
    def _normalize_name(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Name is required")
        return value.strip()

    @validates("role")
    def _check_role(self, key: str, value: str) -> str:
        if value not in ROLES:
            raise ValueError(f"Unknown role: {value!r}")
        return value


class CartItem(PKMixin, ReprMixin, db.Model):
    """One product line in a user's cart."""

    __tablename__ = "cart_items"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id: Mapped[int] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"), nullable=False
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    user: Mapped[User] = relationship(back_populates="cart_items")
    product: Mapped[Product] = relationship()

    __table_args__ = (
        UniqueConstraint("user_id", "product_id", name="uq_cart_items_user_product"),
        CheckConstraint("quantity >= 1", name="quantity_positive"),
    )
