"""Ranking and pagination engine for comment threads.

The engine owns no state. It asks the comment store for an ordered
window of comments, then annotates every comment with counts computed
from the vote ledger and the requesting viewer's own vote.
"""

import logfire

from discuss.domain.error import ValidationError
from discuss.domain.model.comment import Comment
from discuss.domain.model.thread import AnnotatedComment, CommentPage
from discuss.domain.repository import CommentRepository
from discuss.domain.value import (
    CommentId,
    CommentSortOrder,
    SubjectId,
    UserId,
    VoteCounts,
    VoteDirection,
)

from .base import Service
from .vote_service import VoteService


class RankingService(Service):
    """Domain service producing ordered, paginated, viewer-annotated threads."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        vote_service: VoteService,
    ) -> None:
        """Initialize ranking service.

        Args:
            comment_repository: Comment repository
            vote_service: Vote domain service (ledger reads)
        """
        self.comment_repository = comment_repository
        self.vote_service = vote_service

    async def list_comments(
        self,
        subject_id: SubjectId,
        parent_id: CommentId | None = None,
        sort: CommentSortOrder = CommentSortOrder.RECENT,
        page: int = 1,
        limit: int = 5,
        viewer_id: UserId | None = None,
    ) -> CommentPage:
        """List one page of comments under a subject.

        Args:
            subject_id: Subject ID
            parent_id: Parent comment ID, or None for top-level comments
            sort: RECENT or POPULAR
            page: 1-indexed page number
            limit: Page size
            viewer_id: Requesting user, or None for anonymous viewers

        Returns:
            The requested page. A page past the end is empty but still
            reports accurate totals.

        Raises:
            ValidationError: If page or limit is below 1
        """
        if limit < 1:
            raise ValidationError("Limit must be at least 1")
        if page < 1:
            raise ValidationError("Page must be at least 1")

        with logfire.span(
            "ranking_service.list_comments",
            subject_id=subject_id,
            parent_id=parent_id,
            sort=sort.value,
            page=page,
            limit=limit,
        ):
            total = await self.comment_repository.count(subject_id, parent_id)
            offset = (page - 1) * limit

            comments: list[Comment] = []
            if offset < total:
                comments = await self.comment_repository.find_page(
                    subject_id=subject_id,
                    parent_id=parent_id,
                    sort=sort,
                    limit=limit,
                    offset=offset,
                )

            items = await self._annotate(comments, viewer_id)
            logfire.info(
                "Comments page retrieved",
                subject_id=subject_id,
                parent_id=parent_id,
                count=len(items),
                total=total,
            )
            return CommentPage(items=items, total=total, page=page, limit=limit)

    async def list_replies(
        self,
        subject_id: SubjectId,
        parent_id: CommentId,
        sort: CommentSortOrder = CommentSortOrder.RECENT,
        viewer_id: UserId | None = None,
    ) -> CommentPage:
        """List every reply under a parent comment in a single page.

        Args:
            subject_id: Subject ID
            parent_id: Parent comment ID
            sort: RECENT or POPULAR
            viewer_id: Requesting user, or None for anonymous viewers

        Returns:
            A single page holding all replies
        """
        with logfire.span(
            "ranking_service.list_replies",
            subject_id=subject_id,
            parent_id=parent_id,
            sort=sort.value,
        ):
            comments = await self.comment_repository.find_page(
                subject_id=subject_id,
                parent_id=parent_id,
                sort=sort,
            )
            items = await self._annotate(comments, viewer_id)
            logfire.info(
                "Replies retrieved",
                subject_id=subject_id,
                parent_id=parent_id,
                count=len(items),
            )
            return CommentPage(
                items=items,
                total=len(items),
                page=1,
                limit=max(len(items), 1),
            )

    async def _annotate(
        self, comments: list[Comment], viewer_id: UserId | None
    ) -> list[AnnotatedComment]:
        """Join comments with vote counts, reply counts and the viewer's vote."""
        if not comments:
            return []

        comment_ids = [comment.id for comment in comments]
        counts = await self.vote_service.count_votes_for_comments(comment_ids)
        replies = await self.comment_repository.count_replies_for(comment_ids)

        viewer_votes: dict[CommentId, VoteDirection] = {}
        if viewer_id is not None:
            viewer_votes = await self.vote_service.get_user_votes_for_comments(
                user_id=viewer_id,
                comment_ids=comment_ids,
            )

        return [
            AnnotatedComment(
                comment=comment,
                votes=counts.get(comment.id, VoteCounts()),
                reply_count=replies.get(comment.id, 0),
                viewer_vote=viewer_votes.get(comment.id, VoteDirection.NONE),
            )
            for comment in comments
        ]
