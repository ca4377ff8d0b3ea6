"""Moderation collaborators consumed by the submission pipeline.

Both are interfaces: implementations live in the adapter layer and are
injected, so the pipeline can be exercised with in-memory doubles.
"""

from discuss.domain.value import PolicyVerdict, RateLimitDecision, RateLimitPolicy


class ContentPolicy:
    """Content filter interface (spam and profanity)."""

    def check(self, text: str) -> PolicyVerdict:
        """Inspect comment text.

        Args:
            text: Comment body to inspect

        Returns:
            Verdict saying whether the text is flagged and why
        """
        raise NotImplementedError


class RateLimiter:
    """Per-identity submission quota interface."""

    async def check(
        self, identity: str, policy: RateLimitPolicy
    ) -> RateLimitDecision:
        """Record one attempt for an identity and decide whether it may proceed.

        Args:
            identity: Stable identifier of the requester (user ID)
            policy: Quota to apply

        Returns:
            Decision with remaining quota and window reset time

        Raises:
            AdapterError: If the limiter backend cannot be consulted
        """
        raise NotImplementedError
