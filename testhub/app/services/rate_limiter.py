"""
Sliding-window rate limiter.

Counters live in an ICounterStore. The shared (Redis) store is authoritative
across instances; the in-process store is a best-effort fallback used when
the shared store is not configured or not reachable.
"""

import logging
import time
from abc import ABC, abstractmethod
from datetime import UTC, datetime
from typing import Callable, Optional, Tuple

from pydantic import BaseModel

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "ratelimit"


class CounterStoreUnavailable(Exception):
    """The counter store could not be reached."""


class ICounterStore(ABC):
    """Storage for sliding-window hit logs"""

    @abstractmethod
    async def hit(
        self, key: str, limit: int, window_seconds: int, now: float
    ) -> Tuple[bool, int, float]:
        """
        Drop hits older than ``now - window_seconds``, then record a hit at
        ``now`` only if fewer than ``limit`` remain.

        Returns (allowed, hits in window, timestamp of the oldest hit).
        """
        pass


class RateLimitDecision(BaseModel):
    allowed: bool
    limit: int
    remaining: int
    reset_at: datetime


class RateLimiter:
    def __init__(
        self,
        store: ICounterStore,
        fallback: Optional[ICounterStore] = None,
        prefix: str = DEFAULT_PREFIX,
        clock: Callable[[], float] = time.time,
    ):
        self.store = store
        self.fallback = fallback
        self.prefix = prefix
        self.clock = clock

    async def check(self, key: str, limit: int, window_seconds: int) -> RateLimitDecision:
        """
        Count one call against ``key`` and report whether it is allowed.

        Denied calls are not recorded, so repeated denials do not push the
        reset time further out.
        """
        now = self.clock()
        full_key = f"{self.prefix}:{key}"

        try:
            allowed, count, oldest = await self.store.hit(full_key, limit, window_seconds, now)
        except CounterStoreUnavailable:
            if self.fallback is None:
                raise
            logger.warning(
                f"Rate limit store unavailable for {full_key}, using in-process fallback "
                "(not shared across instances)"
            )
            allowed, count, oldest = await self.fallback.hit(
                full_key, limit, window_seconds, now
            )

        return RateLimitDecision(
            allowed=allowed,
            limit=limit,
            remaining=max(0, limit - count),
            reset_at=datetime.fromtimestamp(oldest + window_seconds, UTC),
        )
