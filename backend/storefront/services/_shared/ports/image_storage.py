from __future__ import annotations

from typing import Protocol


class ImageStorage(Protocol):
    """Remote object storage for product images."""

    def upload(self, image: str, *, folder: str) -> str | None:
        """
        Upload ``image`` (data URI, URL or file path) into ``folder``.

        :returns: Public HTTPS URL of the stored asset, or ``None`` when the
            backend did not return one.
        """
        ...

    def destroy(self, public_id: str) -> None:
        """Remove the asset identified by ``public_id`` (``folder/name``)."""
        ...
