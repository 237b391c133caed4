import math
import time
from typing import Dict, Optional

from fastapi import status

from testhub.app.services.rate_limiter import RateLimitDecision
from testhub.libs.result import Error


class ClientError(Exception):
    def __init__(
        self,
        base_error: Error,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.base_error = base_error
        self.status_code = status_code
        self.headers = headers
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


class RateLimitError(ClientError):
    """429 carrying the limiter decision so clients know when to retry"""

    def __init__(self, decision: RateLimitDecision):
        self.remaining = decision.remaining
        self.reset_at = decision.reset_at

        reset_epoch = decision.reset_at.timestamp()
        retry_after = max(1, math.ceil(reset_epoch - time.time()))

        super().__init__(
            Error(
                "RATE_LIMITED",
                "Too many requests. Please try again later.",
                details={
                    "remaining": decision.remaining,
                    "reset_at": decision.reset_at.isoformat(),
                },
            ),
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            headers={
                "Retry-After": str(retry_after),
                "X-RateLimit-Limit": str(decision.limit),
                "X-RateLimit-Remaining": str(decision.remaining),
                "X-RateLimit-Reset": str(int(reset_epoch)),
            },
        )
