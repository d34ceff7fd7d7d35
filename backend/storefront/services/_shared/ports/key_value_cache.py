from __future__ import annotations

from typing import Protocol


class KeyValueCache(Protocol):
    """
    String key/value cache with optional per-key expiry.

    Implementations must overwrite on ``set`` (last write wins) and return
    ``None`` for missing or expired keys.
    """

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str, *, ttl_seconds: int | None = None) -> None: ...

    def delete(self, key: str) -> int: ...

    def ping(self) -> bool: ...
