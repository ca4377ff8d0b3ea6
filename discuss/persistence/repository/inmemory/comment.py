"""In-memory comment repository for testing."""

from datetime import datetime
from typing import Optional, Sequence

from discuss.domain.model.comment import Comment
from discuss.domain.repository.comment import CommentRepository
from discuss.domain.value import (
    CommentId,
    CommentSortOrder,
    SubjectId,
    UserId,
    VoteDirection,
)
from discuss.persistence.repository.inmemory.database import InMemoryDatabase


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self, database: InMemoryDatabase | None = None) -> None:
        self._db = database or InMemoryDatabase()

    def _matching(
        self, subject_id: SubjectId, parent_id: Optional[CommentId]
    ) -> list[Comment]:
        return [
            c
            for c in self._db.comments.values()
            if c.subject_id == subject_id and c.parent_id == parent_id
        ]

    def _upvotes(self, comment_id: CommentId) -> int:
        return sum(
            1
            for v in self._db.votes.values()
            if v.comment_id == comment_id and v.direction == VoteDirection.UP
        )

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._db.comments.get(comment_id)

    async def create(
        self,
        subject_id: SubjectId,
        author_id: UserId,
        body: str,
        parent_id: Optional[CommentId],
        created_at: datetime,
    ) -> Comment:
        """Insert a comment with the next sequential ID."""
        comment = Comment(
            id=self._db.next_comment_id(),
            subject_id=subject_id,
            author_id=author_id,
            body=body,
            parent_id=parent_id,
            created_at=created_at,
        )
        self._db.comments[comment.id] = comment
        return comment

    async def find_page(
        self,
        subject_id: SubjectId,
        parent_id: Optional[CommentId],
        sort: CommentSortOrder = CommentSortOrder.RECENT,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Comment]:
        """Find comments with an exact parent match, in total order."""
        comments = self._matching(subject_id, parent_id)

        if sort == CommentSortOrder.POPULAR:
            comments.sort(
                key=lambda c: (self._upvotes(c.id), c.created_at, c.id),
                reverse=True,
            )
        else:
            comments.sort(key=lambda c: (c.created_at, c.id), reverse=True)

        if limit is None:
            return comments[offset:]
        return comments[offset : offset + limit]

    async def count(
        self, subject_id: SubjectId, parent_id: Optional[CommentId]
    ) -> int:
        """Count comments matching the listing filter."""
        return len(self._matching(subject_id, parent_id))

    async def count_replies(self, comment_id: CommentId) -> int:
        """Count direct replies to a comment."""
        return sum(1 for c in self._db.comments.values() if c.parent_id == comment_id)

    async def count_replies_for(
        self, comment_ids: Sequence[CommentId]
    ) -> dict[CommentId, int]:
        """Count direct replies for several comments."""
        counts: dict[CommentId, int] = {cid: 0 for cid in comment_ids}
        for comment in self._db.comments.values():
            if comment.parent_id in counts:
                counts[comment.parent_id] += 1
        return counts

    async def delete(self, comment_id: CommentId) -> bool:
        """Delete a comment along with its replies and their votes."""
        if comment_id not in self._db.comments:
            return False

        doomed = {comment_id} | {
            c.id for c in self._db.comments.values() if c.parent_id == comment_id
        }
        for cid in doomed:
            del self._db.comments[cid]
        for key in [k for k in self._db.votes if k[0] in doomed]:
            del self._db.votes[key]
        return True
