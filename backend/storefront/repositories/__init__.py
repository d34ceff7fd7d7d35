"""Persistence-only repositories."""

from __future__ import annotations

from .base import BaseRepository
from .product import ProductRepository
from .user import UserRepository

__all__ = ["BaseRepository", "ProductRepository", "UserRepository"]
