from typing import Tuple

from testhub.api.error import RateLimitError
from testhub.app.services.rate_limiter import RateLimitDecision, RateLimiter


async def enforce_rate_limit(
    limiter: RateLimiter, key: str, budget: Tuple[int, int]
) -> RateLimitDecision:
    """
    Count one call against ``key`` with a (limit, window_seconds) budget.

    Raises:
        RateLimitError: 429 once the budget for the window is used up
    """
    limit, window_seconds = budget
    decision = await limiter.check(key, limit, window_seconds)
    if not decision.allowed:
        raise RateLimitError(decision)
    return decision
