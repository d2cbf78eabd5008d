"""Result cache: Redis with an in-process TTL fallback."""

from __future__ import annotations

import json
import logging
import time
from collections import OrderedDict
from typing import Any

import redis.asyncio as redis

logger = logging.getLogger(__name__)


class LocalTTLCache:
    """Bounded in-process cache with per-entry expiry."""

    def __init__(self, max_entries: int = 1024) -> None:
        self._max_entries = max_entries
        self._entries: OrderedDict[str, tuple[float, Any]] = OrderedDict()

    def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if expires_at <= time.monotonic():
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: Any, ttl: int) -> None:
        self._entries[key] = (time.monotonic() + ttl, value)
        self._entries.move_to_end(key)
        while len(self._entries) > self._max_entries:
            self._entries.popitem(last=False)

    def __len__(self) -> int:
        return len(self._entries)


class ResultCache:
    """JSON get/set with TTL.

    Redis is the primary backend. When it is missing or failing, reads and
    writes fall through to the local cache; a cache failure never reaches
    the caller.
    """

    def __init__(
        self,
        backend: redis.Redis | None = None,
        *,
        prefix: str = "layover",
        local: LocalTTLCache | None = None,
    ) -> None:
        self._redis = backend
        self._prefix = prefix
        self._local = local or LocalTTLCache()

    @classmethod
    def from_url(cls, url: str, **kwargs: Any) -> ResultCache:
        """Create a cache backed by a Redis connection pool."""
        backend = redis.from_url(url, decode_responses=True)
        logger.info("Redis cache initialised: %s", url)
        return cls(backend, **kwargs)

    def _key(self, key: str) -> str:
        return f"{self._prefix}:{key}"

    async def get(self, key: str) -> Any | None:
        """Retrieve a JSON-deserialised value, or None on a miss."""
        full_key = self._key(key)
        if self._redis is not None:
            try:
                raw = await self._redis.get(full_key)
            except Exception as exc:
                logger.warning("Redis get failed for %s, using local cache: %s", full_key, exc)
            else:
                if raw is not None:
                    try:
                        return json.loads(raw)
                    except ValueError:
                        logger.warning("Discarding non-JSON cache entry %s", full_key)
                        return None
        return self._local.get(full_key)

    async def set(self, key: str, value: Any, ttl: int) -> None:
        """Store a JSON-serialisable value with a TTL in seconds."""
        full_key = self._key(key)
        if self._redis is not None:
            try:
                await self._redis.set(full_key, json.dumps(value, default=str), ex=ttl)
            except Exception as exc:
                logger.warning("Redis set failed for %s, using local cache: %s", full_key, exc)
            else:
                return
        self._local.set(full_key, value, ttl)

    async def close(self) -> None:
        """Gracefully close the Redis pool."""
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None
            logger.info("Redis pool closed")
