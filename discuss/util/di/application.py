"""Application layer DI providers."""

from dishka import Scope, provide

from discuss.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    ListCommentsUseCase,
)
from discuss.application.usecase.vote import SetVoteUseCase
from discuss.config import RateLimitSettings
from discuss.domain.service import (
    CommentService,
    ContentPolicy,
    JWTService,
    RankingService,
    RateLimiter,
    VoteService,
)
from discuss.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_list_comments_use_case(
        self,
        ranking_service: RankingService,
        jwt_service: JWTService,
    ) -> ListCommentsUseCase:
        """Provide list comments use case."""
        return ListCommentsUseCase(
            ranking_service=ranking_service,
            jwt_service=jwt_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self,
        comment_service: CommentService,
        content_policy: ContentPolicy,
        rate_limiter: RateLimiter,
        rate_limit_settings: RateLimitSettings,
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            comment_service=comment_service,
            content_policy=content_policy,
            rate_limiter=rate_limiter,
            rate_limit_settings=rate_limit_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service)

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_set_vote_use_case(
        self,
        vote_service: VoteService,
        rate_limiter: RateLimiter,
        rate_limit_settings: RateLimitSettings,
    ) -> SetVoteUseCase:
        """Provide set vote use case."""
        return SetVoteUseCase(
            vote_service=vote_service,
            rate_limiter=rate_limiter,
            rate_limit_settings=rate_limit_settings,
        )
