"""Set vote use case."""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import logfire
from pydantic import BaseModel

from discuss.adapter.error import AdapterError
from discuss.config import RateLimitSettings
from discuss.domain.error import AuthenticationRequiredError, RateLimitExceededError
from discuss.domain.service import RateLimiter, VoteService
from discuss.domain.value import CommentId, UserId, VoteDirection


class SetVoteRequest(BaseModel):
    """Set vote request."""

    comment_id: int
    user_id: str | None  # User ID from authenticated user (None if anonymous)
    direction: VoteDirection


class SetVoteResponse(BaseModel):
    """Set vote response."""

    comment_id: int
    upvote_count: int
    downvote_count: int
    viewer_vote: VoteDirection


class SetVoteUseCase:
    """Use case for casting, switching or retracting a vote on a comment."""

    def __init__(
        self,
        vote_service: VoteService,
        rate_limiter: RateLimiter,
        rate_limit_settings: RateLimitSettings,
    ) -> None:
        """Initialize set vote use case.

        Args:
            vote_service: Vote domain service
            rate_limiter: Per-user vote quota
            rate_limit_settings: Quota configuration
        """
        self.vote_service = vote_service
        self.rate_limiter = rate_limiter
        self.rate_limit_settings = rate_limit_settings

    async def execute(self, request: SetVoteRequest) -> SetVoteResponse:
        """Execute set vote flow.

        Repeating the current direction is a no-op that still returns the
        current counts.

        Args:
            request: Set vote request

        Returns:
            Fresh counts and the viewer's resulting vote

        Raises:
            AuthenticationRequiredError: If the voter is anonymous
            RateLimitExceededError: If the voter's quota is used up
            NotFoundError: If the comment does not exist
        """
        if not request.user_id:
            raise AuthenticationRequiredError("vote")

        policy = self.rate_limit_settings.vote_policy
        try:
            decision = await self.rate_limiter.check(request.user_id, policy)
        except AdapterError as e:
            logfire.error(
                "Rate limiter unavailable, rejecting vote",
                user_id=request.user_id,
                error=str(e),
            )
            raise RateLimitExceededError(
                limit=policy.limit,
                remaining=0,
                reset_at=datetime.now(timezone.utc)
                + timedelta(seconds=policy.window_seconds),
            ) from e
        if not decision.allowed:
            raise RateLimitExceededError(
                limit=decision.limit,
                remaining=0,
                reset_at=decision.reset_at,
            )

        counts = await self.vote_service.set_vote(
            comment_id=CommentId(request.comment_id),
            user_id=UserId(UUID(request.user_id)),
            direction=request.direction,
        )
        return SetVoteResponse(
            comment_id=request.comment_id,
            upvote_count=counts.upvote_count,
            downvote_count=counts.downvote_count,
            viewer_vote=request.direction,
        )
