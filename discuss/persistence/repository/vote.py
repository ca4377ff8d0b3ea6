"""PostgreSQL implementation of Vote repository."""

from typing import Optional, Sequence

from sqlalchemy import and_, delete, func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from discuss.domain.model import Vote
from discuss.domain.repository import VoteRepository
from discuss.domain.value import CommentId, UserId, VoteCounts, VoteDirection
from discuss.persistence.mappers import row_to_vote, vote_to_dict
from discuss.persistence.tables import votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find(self, comment_id: CommentId, user_id: UserId) -> Optional[Vote]:
        """Find a user's vote on a comment."""
        stmt = select(votes_table).where(
            and_(
                votes_table.c.comment_id == comment_id,
                votes_table.c.user_id == user_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def upsert(self, vote: Vote) -> Vote:
        """Insert a vote, or switch the direction of an existing one.

        The (comment_id, user_id) primary key makes this a single atomic
        statement, so two concurrent casts by the same user never produce
        two rows.
        """
        vote_dict = vote_to_dict(vote)
        stmt = pg_insert(votes_table).values(**vote_dict)
        stmt = stmt.on_conflict_do_update(
            index_elements=[votes_table.c.comment_id, votes_table.c.user_id],
            set_={
                "direction": stmt.excluded.direction,
                "updated_at": stmt.excluded.updated_at,
            },
        ).returning(votes_table)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_vote(row._asdict())

    async def delete(self, comment_id: CommentId, user_id: UserId) -> bool:
        """Delete a user's vote on a comment."""
        stmt = delete(votes_table).where(
            and_(
                votes_table.c.comment_id == comment_id,
                votes_table.c.user_id == user_id,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def count_by_comment(self, comment_id: CommentId) -> VoteCounts:
        """Aggregate votes on a single comment."""
        counts = await self.count_by_comments([comment_id])
        return counts[comment_id]

    async def count_by_comments(
        self, comment_ids: Sequence[CommentId]
    ) -> dict[CommentId, VoteCounts]:
        """Aggregate votes for several comments in one grouped query."""
        counts: dict[CommentId, VoteCounts] = {cid: VoteCounts() for cid in comment_ids}
        if not comment_ids:
            return counts

        stmt = (
            select(
                votes_table.c.comment_id,
                votes_table.c.direction,
                func.count(),
            )
            .where(votes_table.c.comment_id.in_(comment_ids))
            .group_by(votes_table.c.comment_id, votes_table.c.direction)
        )
        result = await self.session.execute(stmt)

        tallies: dict[CommentId, dict[str, int]] = {}
        for comment_id, direction, total in result.fetchall():
            tallies.setdefault(CommentId(comment_id), {})[direction] = total

        for comment_id, tally in tallies.items():
            counts[comment_id] = VoteCounts(
                upvote_count=tally.get(VoteDirection.UP.value, 0),
                downvote_count=tally.get(VoteDirection.DOWN.value, 0),
            )
        return counts

    async def find_by_user_and_comments(
        self,
        user_id: UserId,
        comment_ids: Sequence[CommentId],
    ) -> list[Vote]:
        """Find a user's votes on multiple comments (batch query)."""
        if not comment_ids:
            return []

        stmt = select(votes_table).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.comment_id.in_(comment_ids),
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]
