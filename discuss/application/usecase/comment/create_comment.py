"""Create comment use case."""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import logfire
from pydantic import BaseModel

from discuss.adapter.error import AdapterError
from discuss.config import RateLimitSettings
from discuss.domain.error import (
    AuthenticationRequiredError,
    RateLimitExceededError,
    ValidationError,
)
from discuss.domain.service import CommentService, ContentPolicy, RateLimiter
from discuss.domain.value import CommentId, PolicyVerdict, SubjectId, UserId

from .view import CommentView


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    subject_id: int | None
    body: str
    author_id: str | None  # User ID from authenticated user (None if anonymous)
    parent_id: int | None = None  # Parent comment ID for replies


class CreateCommentUseCase:
    """Use case for posting a comment on a subject or replying to one.

    The submission pipeline stops at the first failing step:
    authentication, subject, body bounds, parent resolution, content
    policy, rate limit, persistence.
    """

    def __init__(
        self,
        comment_service: CommentService,
        content_policy: ContentPolicy,
        rate_limiter: RateLimiter,
        rate_limit_settings: RateLimitSettings,
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            content_policy: Spam/profanity filter
            rate_limiter: Per-user submission quota
            rate_limit_settings: Quota configuration
        """
        self.comment_service = comment_service
        self.content_policy = content_policy
        self.rate_limiter = rate_limiter
        self.rate_limit_settings = rate_limit_settings

    async def execute(self, request: CreateCommentRequest) -> CommentView:
        """Execute create comment flow.

        Args:
            request: Create comment request

        Returns:
            The new comment with zero vote and reply counts

        Raises:
            AuthenticationRequiredError: If no author identity is present
            ValidationError: If the body, subject or parent is invalid, or
                the content policy flags the text
            NotFoundError: If the parent comment does not resolve
            RateLimitExceededError: If the author's quota is used up
        """
        if not request.author_id:
            raise AuthenticationRequiredError("post comments")
        if request.subject_id is None:
            raise ValidationError("Subject ID is required")

        subject_id = SubjectId(request.subject_id)
        author_id = UserId(UUID(request.author_id))
        parent_id = (
            CommentId(request.parent_id) if request.parent_id is not None else None
        )

        body = self.comment_service.normalize_body(request.body)
        if parent_id is not None:
            await self.comment_service.get_parent(subject_id, parent_id)

        verdict = self._screen(body, request.author_id)
        if verdict.flagged:
            raise ValidationError(
                "Your comment was flagged as potential spam: "
                f"{verdict.reason}. Please revise and try again."
            )

        await self._consume_quota(request.author_id)

        comment = await self.comment_service.create_comment(
            subject_id=subject_id,
            author_id=author_id,
            text=body,
            parent_id=parent_id,
        )
        return CommentView.fresh(comment)

    def _screen(self, body: str, author_id: str) -> PolicyVerdict:
        """Run the content policy; a broken filter lets the comment through."""
        try:
            return self.content_policy.check(body)
        except Exception as e:
            logfire.warn(
                "Content policy check failed, allowing comment",
                author_id=author_id,
                error=str(e),
            )
            return PolicyVerdict(flagged=False)

    async def _consume_quota(self, author_id: str) -> None:
        """Take one comment slot; an unreachable limiter counts as exhausted."""
        policy = self.rate_limit_settings.comment_policy
        try:
            decision = await self.rate_limiter.check(author_id, policy)
        except AdapterError as e:
            logfire.error(
                "Rate limiter unavailable, rejecting comment",
                author_id=author_id,
                error=str(e),
            )
            raise RateLimitExceededError(
                limit=policy.limit,
                remaining=0,
                reset_at=datetime.now(timezone.utc)
                + timedelta(seconds=policy.window_seconds),
            ) from e

        if not decision.allowed:
            logfire.warn(
                "Comment rate limit exceeded",
                author_id=author_id,
                limit=decision.limit,
                reset_at=decision.reset_at.isoformat(),
            )
            raise RateLimitExceededError(
                limit=decision.limit,
                remaining=0,
                reset_at=decision.reset_at,
            )
