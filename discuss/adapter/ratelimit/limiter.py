"""Fixed-window submission rate limiters.

Each (policy, identity) pair owns a counter that starts on the first attempt
and expires ``window_seconds`` later. Every attempt increments the counter;
attempts beyond ``limit`` are refused until the window resets.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable

import logfire
from redis.asyncio import Redis
from redis.exceptions import RedisError

from discuss.adapter.error import RateLimiterUnavailableError
from discuss.domain.service.moderation import RateLimiter
from discuss.domain.value import RateLimitDecision, RateLimitPolicy

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _decide(
    policy: RateLimitPolicy, count: int, reset_at: datetime
) -> RateLimitDecision:
    return RateLimitDecision(
        allowed=count <= policy.limit,
        limit=policy.limit,
        remaining=max(policy.limit - count, 0),
        reset_at=reset_at,
    )


class RedisRateLimiter(RateLimiter):
    """Rate limiter backed by Redis counters (shared across app instances)."""

    def __init__(
        self,
        client: Redis,
        key_prefix: str = "discuss:rate-limit",
        clock: Clock = utc_now,
    ) -> None:
        """Initialize limiter.

        Args:
            client: Async Redis client
            key_prefix: Namespace for counter keys
            clock: Source of the current time
        """
        self.client = client
        self.key_prefix = key_prefix
        self.clock = clock

    def _key(self, identity: str, policy: RateLimitPolicy) -> str:
        return f"{self.key_prefix}:{policy.name}:{identity}"

    async def check(
        self, identity: str, policy: RateLimitPolicy
    ) -> RateLimitDecision:
        """Count one attempt and decide.

        INCR, EXPIRE NX and TTL run in one MULTI/EXEC so the window is set
        exactly once, by whichever request creates the counter.

        Raises:
            RateLimiterUnavailableError: If Redis cannot be reached
        """
        key = self._key(identity, policy)
        try:
            async with self.client.pipeline(transaction=True) as pipe:
                pipe.incr(key)
                pipe.expire(key, policy.window_seconds, nx=True)
                pipe.ttl(key)
                count, _, ttl = await pipe.execute()
        except RedisError as e:
            logfire.error(
                "Rate limiter backend unavailable",
                policy=policy.name,
                error=str(e),
            )
            raise RateLimiterUnavailableError(
                f"Could not check rate limit '{policy.name}': {e}"
            ) from e

        if ttl is None or ttl < 0:
            ttl = policy.window_seconds

        decision = _decide(
            policy, int(count), self.clock() + timedelta(seconds=int(ttl))
        )
        if not decision.allowed:
            logfire.info(
                "Rate limit reached",
                policy=policy.name,
                identity=identity,
                count=count,
            )
        return decision


class InMemoryRateLimiter(RateLimiter):
    """Process-local rate limiter for tests and single-instance development."""

    def __init__(self, clock: Clock = utc_now) -> None:
        """Initialize limiter.

        Args:
            clock: Source of the current time (injectable for tests)
        """
        self.clock = clock
        self._windows: dict[tuple[str, str], tuple[int, datetime]] = {}

    async def check(
        self, identity: str, policy: RateLimitPolicy
    ) -> RateLimitDecision:
        """Count one attempt and decide."""
        now = self.clock()
        key = (policy.name, identity)
        self._evict_expired(now)

        count, reset_at = self._windows.get(key, (0, now))
        if now >= reset_at:
            # Window expired (or never started): open a fresh one
            count, reset_at = 0, now + timedelta(seconds=policy.window_seconds)

        count += 1
        self._windows[key] = (count, reset_at)
        return _decide(policy, count, reset_at)

    def _evict_expired(self, now: datetime) -> None:
        """Drop windows whose reset time has passed."""
        expired = [k for k, (_, reset_at) in self._windows.items() if now >= reset_at]
        for k in expired:
            del self._windows[k]
