"""Unit tests for the fixed-window rate limiters."""

from datetime import datetime, timedelta, timezone

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from discuss.adapter.error import AdapterError, RateLimiterUnavailableError
from discuss.adapter.ratelimit import InMemoryRateLimiter, RedisRateLimiter
from discuss.domain.value import RateLimitPolicy

COMMENTS = RateLimitPolicy(name="comments", limit=5, window_seconds=60)
VOTES = RateLimitPolicy(name="votes", limit=20, window_seconds=60)


class FakeClock:
    """Manually advanced clock."""

    def __init__(self):
        self.now = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class FakePipeline:
    """Just enough of redis.asyncio's pipeline for the limiter."""

    def __init__(self, store: dict, ttls: dict, error: Exception | None):
        self.store = store
        self.ttls = ttls
        self.error = error
        self.ops = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    def incr(self, key):
        self.ops.append(("incr", key))

    def expire(self, key, seconds, nx=False):
        self.ops.append(("expire", key, seconds, nx))

    def ttl(self, key):
        self.ops.append(("ttl", key))

    async def execute(self):
        if self.error:
            raise self.error
        results = []
        for op in self.ops:
            if op[0] == "incr":
                self.store[op[1]] = self.store.get(op[1], 0) + 1
                results.append(self.store[op[1]])
            elif op[0] == "expire":
                _, key, seconds, nx = op
                set_it = not nx or key not in self.ttls
                if set_it:
                    self.ttls[key] = seconds
                results.append(set_it)
            else:
                results.append(self.ttls.get(op[1], -1))
        return results


class FakeRedis:
    def __init__(self, error: Exception | None = None):
        self.store: dict = {}
        self.ttls: dict = {}
        self.error = error

    def pipeline(self, transaction=True):
        return FakePipeline(self.store, self.ttls, self.error)


class TestInMemoryRateLimiter:
    """Tests for InMemoryRateLimiter."""

    @pytest.mark.asyncio
    async def test_allows_up_to_limit(self):
        """Five attempts pass; remaining counts down to zero."""
        # Arrange
        limiter = InMemoryRateLimiter(clock=FakeClock())

        # Act
        decisions = [await limiter.check("user-1", COMMENTS) for _ in range(5)]

        # Assert
        assert all(d.allowed for d in decisions)
        assert [d.remaining for d in decisions] == [4, 3, 2, 1, 0]

    @pytest.mark.asyncio
    async def test_sixth_attempt_refused_until_reset(self):
        """The window closes at first-attempt time plus window length."""
        # Arrange
        clock = FakeClock()
        start = clock.now
        limiter = InMemoryRateLimiter(clock=clock)
        for _ in range(5):
            await limiter.check("user-1", COMMENTS)

        # Act
        refused = await limiter.check("user-1", COMMENTS)

        # Assert
        assert not refused.allowed
        assert refused.remaining == 0
        assert refused.limit == 5
        assert refused.reset_at == start + timedelta(seconds=60)

    @pytest.mark.asyncio
    async def test_new_window_after_reset(self):
        """Quota is restored once the window has passed."""
        # Arrange
        clock = FakeClock()
        limiter = InMemoryRateLimiter(clock=clock)
        for _ in range(6):
            await limiter.check("user-1", COMMENTS)

        # Act
        clock.advance(60)
        decision = await limiter.check("user-1", COMMENTS)

        # Assert
        assert decision.allowed
        assert decision.remaining == 4

    @pytest.mark.asyncio
    async def test_identities_and_policies_are_independent(self):
        """Counters are keyed by policy and identity."""
        # Arrange
        limiter = InMemoryRateLimiter(clock=FakeClock())
        for _ in range(6):
            await limiter.check("user-1", COMMENTS)

        # Act
        other_user = await limiter.check("user-2", COMMENTS)
        other_policy = await limiter.check("user-1", VOTES)

        # Assert
        assert other_user.allowed
        assert other_policy.allowed
        assert other_policy.remaining == 19

    @pytest.mark.asyncio
    async def test_expired_windows_are_evicted(self):
        """Windows past their reset time are dropped on the next check."""
        # Arrange
        clock = FakeClock()
        limiter = InMemoryRateLimiter(clock=clock)
        for identity in ("user-1", "user-2", "user-3"):
            await limiter.check(identity, COMMENTS)

        # Act
        clock.advance(60)
        decision = await limiter.check("user-4", COMMENTS)

        # Assert
        assert decision.allowed
        assert list(limiter._windows) == [("comments", "user-4")]


class TestRedisRateLimiter:
    """Tests for RedisRateLimiter."""

    @pytest.mark.asyncio
    async def test_counts_in_redis_with_window_expiry(self):
        """One counter per key; the expiry is set only by the first attempt."""
        # Arrange
        redis = FakeRedis()
        clock = FakeClock()
        limiter = RedisRateLimiter(redis, key_prefix="test:rl", clock=clock)

        # Act
        decisions = [await limiter.check("user-1", COMMENTS) for _ in range(6)]

        # Assert
        assert redis.store == {"test:rl:comments:user-1": 6}
        assert redis.ttls == {"test:rl:comments:user-1": 60}
        assert [d.allowed for d in decisions] == [True] * 5 + [False]
        assert decisions[-1].remaining == 0
        assert decisions[-1].reset_at == clock.now + timedelta(seconds=60)

    @pytest.mark.asyncio
    async def test_backend_error_raises_adapter_error(self):
        """Redis failures surface as RateLimiterUnavailableError."""
        # Arrange
        limiter = RedisRateLimiter(FakeRedis(error=RedisConnectionError("refused")))

        # Act & Assert
        with pytest.raises(RateLimiterUnavailableError) as exc_info:
            await limiter.check("user-1", COMMENTS)
        assert isinstance(exc_info.value, AdapterError)
        assert "comments" in str(exc_info.value)
