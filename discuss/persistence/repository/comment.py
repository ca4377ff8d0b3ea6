"""PostgreSQL implementation of Comment repository."""

from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy import and_, delete, desc, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from discuss.domain.model import Comment
from discuss.domain.repository import CommentRepository
from discuss.domain.value import CommentId, CommentSortOrder, SubjectId, UserId
from discuss.persistence.mappers import row_to_comment
from discuss.persistence.tables import comments_table, votes_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _thread_filter(self, subject_id: SubjectId, parent_id: Optional[CommentId]):
        """Exact (subject, parent) match used by listing and counting."""
        if parent_id is None:
            parent_clause = comments_table.c.parent_id.is_(None)
        else:
            parent_clause = comments_table.c.parent_id == parent_id
        return and_(comments_table.c.subject_id == subject_id, parent_clause)

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def create(
        self,
        subject_id: SubjectId,
        author_id: UserId,
        body: str,
        parent_id: Optional[CommentId],
        created_at: datetime,
    ) -> Comment:
        """Insert a comment and return it with its assigned ID."""
        stmt = (
            insert(comments_table)
            .values(
                subject_id=subject_id,
                author_id=author_id,
                body=body,
                parent_id=parent_id,
                created_at=created_at,
            )
            .returning(comments_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_comment(row._asdict())

    async def find_page(
        self,
        subject_id: SubjectId,
        parent_id: Optional[CommentId],
        sort: CommentSortOrder = CommentSortOrder.RECENT,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Comment]:
        """Find comments with an exact parent match, in total order."""
        if sort == CommentSortOrder.POPULAR:
            # Upvotes are counted from the ledger, never stored on the comment
            upvotes = (
                select(
                    votes_table.c.comment_id,
                    func.count().label("upvote_count"),
                )
                .where(votes_table.c.direction == "up")
                .group_by(votes_table.c.comment_id)
                .subquery()
            )
            stmt = (
                select(comments_table)
                .select_from(
                    comments_table.outerjoin(
                        upvotes, upvotes.c.comment_id == comments_table.c.id
                    )
                )
                .where(self._thread_filter(subject_id, parent_id))
                .order_by(
                    desc(func.coalesce(upvotes.c.upvote_count, 0)),
                    desc(comments_table.c.created_at),
                    desc(comments_table.c.id),
                )
            )
        else:
            stmt = (
                select(comments_table)
                .where(self._thread_filter(subject_id, parent_id))
                .order_by(
                    desc(comments_table.c.created_at),
                    desc(comments_table.c.id),
                )
            )

        if limit is not None:
            stmt = stmt.limit(limit)
        if offset:
            stmt = stmt.offset(offset)

        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def count(
        self, subject_id: SubjectId, parent_id: Optional[CommentId]
    ) -> int:
        """Count comments matching the listing filter."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(self._thread_filter(subject_id, parent_id))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_replies(self, comment_id: CommentId) -> int:
        """Count direct replies to a comment."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.parent_id == comment_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_replies_for(
        self, comment_ids: Sequence[CommentId]
    ) -> dict[CommentId, int]:
        """Count direct replies for several comments in one query."""
        counts: dict[CommentId, int] = {cid: 0 for cid in comment_ids}
        if not comment_ids:
            return counts

        stmt = (
            select(comments_table.c.parent_id, func.count())
            .where(comments_table.c.parent_id.in_(comment_ids))
            .group_by(comments_table.c.parent_id)
        )
        result = await self.session.execute(stmt)
        for parent_id, reply_count in result.fetchall():
            counts[CommentId(parent_id)] = reply_count
        return counts

    async def delete(self, comment_id: CommentId) -> bool:
        """Delete a comment (hard delete).

        Replies and votes go with it through ON DELETE CASCADE.
        """
        stmt = delete(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]
