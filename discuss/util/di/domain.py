"""Domain layer DI providers."""

from dishka import Scope, provide

from discuss.config import AuthSettings
from discuss.domain.repository import CommentRepository, VoteRepository
from discuss.domain.service import (
    CommentService,
    JWTService,
    RankingService,
    VoteService,
)
from discuss.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_comment_service(
        self, comment_repository: CommentRepository
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(comment_repository=comment_repository)

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        comment_service: CommentService,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            comment_service=comment_service,
        )

    @provide
    def get_ranking_service(
        self,
        comment_repository: CommentRepository,
        vote_service: VoteService,
    ) -> RankingService:
        """Provide ranking and pagination domain service."""
        return RankingService(
            comment_repository=comment_repository,
            vote_service=vote_service,
        )
