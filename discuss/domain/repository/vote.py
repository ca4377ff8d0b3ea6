"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from discuss.domain.model.vote import Vote
from discuss.domain.value import CommentId, UserId, VoteCounts


class VoteRepository(ABC):
    """Repository for Vote entity (the vote ledger).

    Defines the contract for vote persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find(self, comment_id: CommentId, user_id: UserId) -> Optional[Vote]:
        """Find a user's vote on a comment.

        Args:
            comment_id: ID of the comment
            user_id: The user's ID

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def upsert(self, vote: Vote) -> Vote:
        """Insert a vote or replace the direction of an existing one.

        Keyed by (comment_id, user_id); concurrent writes for the same
        pair resolve as last write wins.

        Args:
            vote: The vote to store

        Returns:
            The stored vote
        """
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId, user_id: UserId) -> bool:
        """Delete a user's vote on a comment.

        Args:
            comment_id: ID of the comment
            user_id: The user's ID

        Returns:
            True if a vote was deleted, False if no vote existed
        """
        pass

    @abstractmethod
    async def count_by_comment(self, comment_id: CommentId) -> VoteCounts:
        """Aggregate up and down votes on a comment.

        Args:
            comment_id: ID of the comment

        Returns:
            Vote counts computed from the stored rows
        """
        pass

    @abstractmethod
    async def count_by_comments(
        self, comment_ids: Sequence[CommentId]
    ) -> dict[CommentId, VoteCounts]:
        """Aggregate votes for several comments (batch query).

        Args:
            comment_ids: Comment IDs to aggregate

        Returns:
            Mapping of every requested ID to its counts
        """
        pass

    @abstractmethod
    async def find_by_user_and_comments(
        self,
        user_id: UserId,
        comment_ids: Sequence[CommentId],
    ) -> list[Vote]:
        """Find a user's votes on multiple comments (batch query).

        Args:
            user_id: The user's ID
            comment_ids: List of comment IDs to check

        Returns:
            List of votes by the user on the specified comments
        """
        pass
