"""List comments use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from discuss.domain.error import ValidationError
from discuss.domain.service import JWTService, RankingService
from discuss.domain.value import CommentId, CommentSortOrder, SubjectId, UserId

from .view import CommentView

DEFAULT_PAGE_SIZE = 5


class ListCommentsRequest(BaseModel):
    """List comments request."""

    subject_id: int
    parent_id: int | None = None  # None lists top-level comments
    sort: CommentSortOrder = CommentSortOrder.RECENT
    page: int = 1
    limit: int | None = None  # None: 5 for top-level, everything for replies
    auth_token: str | None = None  # JWT token for viewer annotation (optional)


class ListCommentsResponse(BaseModel):
    """List comments response."""

    items: list[CommentView]
    total: int
    page: int
    total_pages: int


class ListCommentsUseCase:
    """Use case for reading a page of a subject's discussion."""

    def __init__(
        self,
        ranking_service: RankingService,
        jwt_service: JWTService,
    ) -> None:
        """Initialize list comments use case.

        Args:
            ranking_service: Ranking and pagination domain service
            jwt_service: JWT service for decoding auth tokens
        """
        self.ranking_service = ranking_service
        self.jwt_service = jwt_service

    async def execute(self, request: ListCommentsRequest) -> ListCommentsResponse:
        """Execute list comments flow.

        Top-level comments are paginated (5 per page unless a limit is
        given). Replies are loaded lazily per parent and, without an
        explicit limit, arrive all at once in a single page.

        Args:
            request: List comments request

        Returns:
            One page of annotated comments with totals

        Raises:
            ValidationError: If page or limit is below 1
        """
        viewer = self.jwt_service.get_identity_from_token(request.auth_token)
        viewer_id = UserId(UUID(viewer.user_id)) if viewer else None

        subject_id = SubjectId(request.subject_id)
        parent_id = (
            CommentId(request.parent_id) if request.parent_id is not None else None
        )

        if parent_id is not None and request.limit is None:
            if request.page < 1:
                raise ValidationError("Page must be at least 1")

            replies = await self.ranking_service.list_replies(
                subject_id=subject_id,
                parent_id=parent_id,
                sort=request.sort,
                viewer_id=viewer_id,
            )
            logfire.info(
                "Replies listed",
                subject_id=subject_id,
                parent_id=parent_id,
                total=replies.total,
            )
            # Everything fits on page 1; later pages are past the end
            items = replies.items if request.page == 1 else []
            return ListCommentsResponse(
                items=[CommentView.from_annotated(item) for item in items],
                total=replies.total,
                page=request.page,
                total_pages=1 if replies.total else 0,
            )

        page = await self.ranking_service.list_comments(
            subject_id=subject_id,
            parent_id=parent_id,
            sort=request.sort,
            page=request.page,
            limit=request.limit if request.limit is not None else DEFAULT_PAGE_SIZE,
            viewer_id=viewer_id,
        )
        return ListCommentsResponse(
            items=[CommentView.from_annotated(item) for item in page.items],
            total=page.total,
            page=page.page,
            total_pages=page.total_pages,
        )
