"""Comment repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, Sequence

from discuss.domain.model.comment import Comment
from discuss.domain.value import CommentId, CommentSortOrder, SubjectId, UserId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(
        self,
        subject_id: SubjectId,
        author_id: UserId,
        body: str,
        parent_id: Optional[CommentId],
        created_at: datetime,
    ) -> Comment:
        """Insert a new comment and assign its ID.

        IDs are assigned by the store in insertion order, which makes
        them usable as the final tie-break when ordering comments.

        Args:
            subject_id: Subject the thread belongs to
            author_id: Posting user
            body: Already validated comment text
            parent_id: Parent comment for replies (None for top-level)
            created_at: Creation timestamp

        Returns:
            The stored comment
        """
        pass

    @abstractmethod
    async def find_page(
        self,
        subject_id: SubjectId,
        parent_id: Optional[CommentId],
        sort: CommentSortOrder = CommentSortOrder.RECENT,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Comment]:
        """Find comments under a subject with an exact parent match.

        Ordering is total so that pages never overlap or skip rows:
        - RECENT: created_at DESC, id DESC
        - POPULAR: upvote count DESC, created_at DESC, id DESC
          (upvotes are counted from the vote ledger at query time)

        Args:
            subject_id: Subject ID
            parent_id: Parent comment ID, or None for top-level comments only
            sort: Sort order
            limit: Maximum number of comments to return (None for all)
            offset: Number of comments to skip

        Returns:
            Ordered list of comments
        """
        pass

    @abstractmethod
    async def count(
        self, subject_id: SubjectId, parent_id: Optional[CommentId]
    ) -> int:
        """Count comments matching the same filter as find_page.

        Args:
            subject_id: Subject ID
            parent_id: Parent comment ID, or None for top-level comments only

        Returns:
            Number of matching comments
        """
        pass

    @abstractmethod
    async def count_replies(self, comment_id: CommentId) -> int:
        """Count direct replies to a comment.

        Args:
            comment_id: The parent comment ID

        Returns:
            Number of comments whose parent_id is comment_id
        """
        pass

    @abstractmethod
    async def count_replies_for(
        self, comment_ids: Sequence[CommentId]
    ) -> dict[CommentId, int]:
        """Count direct replies for several comments (batch query).

        Args:
            comment_ids: Parent comment IDs

        Returns:
            Mapping of every requested ID to its reply count
        """
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId) -> bool:
        """Delete a comment (hard delete).

        Replies and votes on the comment are removed with it.

        Args:
            comment_id: The comment ID to delete

        Returns:
            True if a comment was deleted, False if it did not exist
        """
        pass
