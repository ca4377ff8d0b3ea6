"""Vote domain service."""

from datetime import datetime, timezone

import logfire

from discuss.domain.error import NotFoundError
from discuss.domain.model.vote import Vote
from discuss.domain.repository import VoteRepository
from discuss.domain.value import CommentId, UserId, VoteCounts, VoteDirection

from .base import Service
from .comment_service import CommentService


class VoteService(Service):
    """Domain service for the vote ledger.

    A viewer's vote on a comment is a three-state machine (none, up, down)
    where every transition is allowed. Counts are always recomputed from
    the ledger after a change; there is no stored counter to drift.
    """

    def __init__(
        self,
        vote_repository: VoteRepository,
        comment_service: CommentService,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            comment_service: Comment domain service
        """
        self.vote_repository = vote_repository
        self.comment_service = comment_service

    async def set_vote(
        self,
        comment_id: CommentId,
        user_id: UserId,
        direction: VoteDirection,
    ) -> VoteCounts:
        """Move a user's vote on a comment to the requested state.

        - UP/DOWN: upsert the (comment, user) row with that direction
        - NONE: delete the row if present (no-op otherwise)

        Args:
            comment_id: Comment ID
            user_id: Voting user ID
            direction: Target vote state

        Returns:
            Fresh vote counts for the comment after the change

        Raises:
            NotFoundError: If the comment does not exist
        """
        with logfire.span(
            "vote_service.set_vote",
            comment_id=comment_id,
            user_id=str(user_id),
            direction=direction.value,
        ):
            comment = await self.comment_service.get_comment_by_id(comment_id)
            if not comment:
                logfire.warn("Vote on non-existent comment", comment_id=comment_id)
                raise NotFoundError("Comment", str(comment_id))

            if direction == VoteDirection.NONE:
                removed = await self.vote_repository.delete(comment_id, user_id)
                logfire.info(
                    "Vote cleared" if removed else "No vote to clear",
                    comment_id=comment_id,
                    user_id=str(user_id),
                )
            else:
                now = datetime.now(timezone.utc)
                await self.vote_repository.upsert(
                    Vote(
                        comment_id=comment_id,
                        user_id=user_id,
                        direction=direction,
                        created_at=now,
                        updated_at=now,
                    )
                )
                logfire.info(
                    "Vote recorded",
                    comment_id=comment_id,
                    user_id=str(user_id),
                    direction=direction.value,
                )

            counts = await self.vote_repository.count_by_comment(comment_id)
            logfire.info(
                "Vote counts recomputed",
                comment_id=comment_id,
                upvote_count=counts.upvote_count,
                downvote_count=counts.downvote_count,
            )
            return counts

    async def get_viewer_vote(
        self, comment_id: CommentId, user_id: UserId
    ) -> VoteDirection:
        """Get a user's current vote on a comment.

        Args:
            comment_id: Comment ID
            user_id: User ID

        Returns:
            The stored direction, or NONE when the user has not voted
        """
        vote = await self.vote_repository.find(comment_id, user_id)
        return vote.direction if vote else VoteDirection.NONE

    async def count_votes(self, comment_id: CommentId) -> VoteCounts:
        """Aggregate up and down votes for a comment."""
        return await self.vote_repository.count_by_comment(comment_id)

    async def count_votes_for_comments(
        self, comment_ids: list[CommentId]
    ) -> dict[CommentId, VoteCounts]:
        """Aggregate votes for several comments.

        Args:
            comment_ids: Comment IDs

        Returns:
            Mapping of comment ID to counts (zero counts for unvoted comments)
        """
        if not comment_ids:
            return {}
        return await self.vote_repository.count_by_comments(comment_ids)

    async def get_user_votes_for_comments(
        self, user_id: UserId, comment_ids: list[CommentId]
    ) -> dict[CommentId, VoteDirection]:
        """Look up a user's vote on each of several comments.

        Args:
            user_id: User ID
            comment_ids: List of comment IDs to check

        Returns:
            Dictionary mapping comment ID to the user's vote direction
        """
        if not comment_ids:
            return {}

        # Batch query to fetch all votes at once (avoid N+1)
        votes_list = await self.vote_repository.find_by_user_and_comments(
            user_id=user_id,
            comment_ids=comment_ids,
        )
        directions = {vote.comment_id: vote.direction for vote in votes_list}

        return {cid: directions.get(cid, VoteDirection.NONE) for cid in comment_ids}
