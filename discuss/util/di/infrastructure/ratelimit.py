"""Rate limiter infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
from redis.asyncio import Redis

from discuss.adapter.ratelimit import RedisRateLimiter
from discuss.config import Settings
from discuss.domain.service import RateLimiter
from discuss.util.di.base import ProviderBase
from discuss.util.observability import instrument_redis


class RateLimitProvider(ProviderBase):
    """Rate limiter component base."""

    __mock_component__ = "ratelimit"


class ProdRateLimitProvider(RateLimitProvider):
    """Production rate limiter provider using Redis."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_redis(self, settings: Settings) -> AsyncIterator[Redis]:
        """Provide Redis client, closed when the container closes."""
        instrument_redis()
        client = Redis.from_url(settings.redis.url, decode_responses=True)
        yield client
        await client.aclose()

    @provide(scope=Scope.APP)
    def get_rate_limiter(self, client: Redis, settings: Settings) -> RateLimiter:
        """Provide Redis-backed fixed-window rate limiter."""
        return RedisRateLimiter(client=client, key_prefix=settings.redis.key_prefix)
