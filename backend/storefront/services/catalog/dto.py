"""
DTOs for CatalogService.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True, slots=True)
class ProductCreateIn:
    """
    Input DTO for product creation.

    :param image: Optional image payload (data URI or URL) to upload.
    """

    name: str
    description: str
    price: float
    category: str
    image: str | None = None


@dataclass(frozen=True, slots=True)
class ProductOut:
    """Read model of a product, also the unit stored in the featured cache."""

    id: int
    name: str
    description: str
    price: float
    image: str | None
    category: str
    is_featured: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_cache(self) -> dict[str, Any]:
        data = asdict(self)
        for key in ("created_at", "updated_at"):
            if data[key] is not None:
                data[key] = data[key].isoformat()
        return data

    @classmethod
    def from_cache(cls, data: dict[str, Any]) -> ProductOut:
        values = dict(data)
        for key in ("created_at", "updated_at"):
            if values.get(key):
                values[key] = datetime.fromisoformat(values[key])
        return cls(**values)
