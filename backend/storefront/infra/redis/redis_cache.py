from __future__ import annotations

from dataclasses import dataclass
from typing import cast

import redis  # type: ignore[import-untyped]
from redis.exceptions import RedisError  # type: ignore[import-untyped]

from storefront.services._shared.ports import KeyValueCache


@dataclass(slots=True)
class RedisKeyValueCache(KeyValueCache):
    """
    Redis-backed string cache.

    :param r: A connected client. ``decode_responses=True`` is expected; bytes
        replies are decoded as UTF-8 otherwise.
    """

    r: redis.Redis

    def get(self, key: str) -> str | None:
        value = self.r.get(key)
        if isinstance(value, bytes | bytearray):
            return value.decode()
        return cast(str | None, value)

    def set(self, key: str, value: str, *, ttl_seconds: int | None = None) -> None:
        # SET overwrites and, without EX, clears any previous TTL
        self.r.set(key, value, ex=ttl_seconds)

    def delete(self, key: str) -> int:
        return cast(int, self.r.delete(key))

    def ping(self) -> bool:
        try:
            return bool(self.r.ping())
        except RedisError:
            return False
