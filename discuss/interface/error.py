"""Interface layer errors.

Helpers translating domain errors into HTTP responses.
"""

import math
from datetime import datetime, timezone

from fastapi import HTTPException, status

from discuss.domain.error import RateLimitExceededError


def rate_limited(error: RateLimitExceededError) -> HTTPException:
    """Build the 429 response for an exhausted quota.

    Body carries the quota state; headers follow the common
    X-RateLimit-* convention plus Retry-After (seconds).
    """
    retry_after = max(
        math.ceil((error.reset_at - datetime.now(timezone.utc)).total_seconds()), 0
    )
    return HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail={
            "message": str(error),
            "limit": error.limit,
            "remaining": error.remaining,
            "reset_at": error.reset_at.isoformat(),
        },
        headers={
            "X-RateLimit-Limit": str(error.limit),
            "X-RateLimit-Remaining": str(error.remaining),
            "X-RateLimit-Reset": str(int(error.reset_at.timestamp())),
            "Retry-After": str(retry_after),
        },
    )
