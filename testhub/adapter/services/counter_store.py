"""
Counter stores for the sliding-window rate limiter.

Each key holds the timestamps of accepted hits. A hit is recorded only
while fewer than ``limit`` timestamps remain inside the window.
"""

import asyncio
import logging
from collections import deque
from typing import Deque, Dict, Tuple
from uuid import uuid4

from redis import asyncio as aioredis
from redis.exceptions import RedisError

from testhub.app.services.rate_limiter import CounterStoreUnavailable, ICounterStore

logger = logging.getLogger(__name__)

# Runs atomically on the Redis server, so concurrent callers on any
# instance see one consistent count per key.
SLIDING_WINDOW_SCRIPT = """
local key = KEYS[1]
local now = tonumber(ARGV[1])
local window = tonumber(ARGV[2])
local limit = tonumber(ARGV[3])
local member = ARGV[4]

redis.call('ZREMRANGEBYSCORE', key, '-inf', now - window)
local count = redis.call('ZCARD', key)
local allowed = 0
if count < limit then
    redis.call('ZADD', key, now, member)
    count = count + 1
    allowed = 1
end
redis.call('EXPIRE', key, math.ceil(window))

local oldest = redis.call('ZRANGE', key, 0, 0, 'WITHSCORES')
local oldest_ts = tostring(now)
if oldest[2] then
    oldest_ts = oldest[2]
end
return {allowed, count, oldest_ts}
"""


class RedisCounterStore(ICounterStore):
    """Shared counter store backed by a Redis sorted set per key"""

    def __init__(self, client: aioredis.Redis):
        self.client = client
        self._script = client.register_script(SLIDING_WINDOW_SCRIPT)

    @classmethod
    def from_url(cls, url: str) -> "RedisCounterStore":
        return cls(aioredis.from_url(url, decode_responses=True))

    async def hit(
        self, key: str, limit: int, window_seconds: int, now: float
    ) -> Tuple[bool, int, float]:
        member = f"{now}:{uuid4().hex}"
        try:
            allowed, count, oldest = await self._script(
                keys=[key], args=[now, window_seconds, limit, member]
            )
        except RedisError as e:
            raise CounterStoreUnavailable(str(e)) from e

        return bool(int(allowed)), int(count), float(oldest)


class InMemoryCounterStore(ICounterStore):
    """
    Process-local counter store.

    Counts are not shared between instances, so a caller spreading requests
    across N instances gets up to N times the limit.
    """

    def __init__(self):
        self._hits: Dict[str, Deque[float]] = {}
        self._lock = asyncio.Lock()

    async def hit(
        self, key: str, limit: int, window_seconds: int, now: float
    ) -> Tuple[bool, int, float]:
        async with self._lock:
            hits = self._hits.setdefault(key, deque())
            while hits and hits[0] <= now - window_seconds:
                hits.popleft()

            allowed = len(hits) < limit
            if allowed:
                hits.append(now)

            oldest = hits[0] if hits else now
            return allowed, len(hits), oldest

    def reset(self) -> None:
        self._hits.clear()
