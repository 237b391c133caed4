import json
import logging
import time
from typing import Any, Dict, Optional, Tuple

from redis import asyncio as aioredis
from redis.exceptions import RedisError

from testhub.app.services.cache import ICache

logger = logging.getLogger(__name__)


class RedisCache(ICache):
    """JSON values in Redis; any Redis failure is treated as a miss"""

    def __init__(self, client: aioredis.Redis, default_ttl: int = 300):
        self.client = client
        self.default_ttl = default_ttl

    @classmethod
    def from_url(cls, url: str) -> "RedisCache":
        return cls(aioredis.from_url(url, decode_responses=True))

    async def get(self, key: str) -> Optional[Any]:
        try:
            data = await self.client.get(key)
        except RedisError as e:
            logger.warning(f"Cache get failed for {key}: {e}")
            return None

        if data is None:
            return None
        try:
            return json.loads(data)
        except ValueError:
            logger.warning(f"Discarding unreadable cache entry {key}")
            return None

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        serialized = json.dumps(value, ensure_ascii=False, default=str)
        try:
            await self.client.set(key, serialized, ex=ttl or self.default_ttl)
        except RedisError as e:
            logger.warning(f"Cache set failed for {key}: {e}")
            return False
        return True

    async def delete(self, *keys: str) -> bool:
        if not keys:
            return True
        try:
            await self.client.delete(*keys)
        except RedisError as e:
            logger.warning(f"Cache invalidation failed for {keys}: {e}")
            return False
        return True


class InMemoryCache(ICache):
    """Process-local cache with per-entry expiry"""

    def __init__(self, default_ttl: int = 300):
        self.default_ttl = default_ttl
        self._entries: Dict[str, Tuple[float, str]] = {}

    async def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None

        expires_at, serialized = entry
        if expires_at <= time.monotonic():
            self._entries.pop(key, None)
            return None
        return json.loads(serialized)

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        expires_at = time.monotonic() + (ttl or self.default_ttl)
        self._entries[key] = (expires_at, json.dumps(value, default=str))
        return True

    async def delete(self, *keys: str) -> bool:
        for key in keys:
            self._entries.pop(key, None)
        return True

    def clear(self) -> None:
        self._entries.clear()
