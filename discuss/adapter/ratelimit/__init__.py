"""Submission rate limiting adapter."""

from .limiter import InMemoryRateLimiter, RedisRateLimiter

__all__ = ["InMemoryRateLimiter", "RedisRateLimiter"]
