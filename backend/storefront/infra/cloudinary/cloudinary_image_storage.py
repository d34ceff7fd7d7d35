"""Cloudinary adapter for product images."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import cloudinary
import cloudinary.uploader

log = logging.getLogger(__name__)


class CloudinaryImageStorage:
    """Upload and destroy images through the Cloudinary SDK."""

    def __init__(self, *, cloud_name: str, api_key: str, api_secret: str) -> None:
        self.configured = bool(cloud_name and api_key and api_secret)
        if self.configured:
            cloudinary.config(
                cloud_name=cloud_name,
                api_key=api_key,
                api_secret=api_secret,
                secure=True,  # Always use HTTPS
            )
        else:
            log.warning("Cloudinary credentials missing; image uploads will fail")

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> CloudinaryImageStorage:
        return cls(
            cloud_name=config.get("CLOUDINARY_CLOUD_NAME", ""),
            api_key=config.get("CLOUDINARY_API_KEY", ""),
            api_secret=config.get("CLOUDINARY_API_SECRET", ""),
        )

    def upload(self, image: str, *, folder: str) -> str | None:
        if not self.configured:
            raise RuntimeError("Cloudinary is not configured")
        result = cloudinary.uploader.upload(image, folder=folder)
        return result.get("secure_url")

    def destroy(self, public_id: str) -> None:
        if not self.configured:
            raise RuntimeError("Cloudinary is not configured")
        cloudinary.uploader.destroy(public_id)
