"""Integration tests for the Postgres comment and vote repositories.

These run against a real database and are skipped unless DATABASE__URL
points at one. Each test runs in a transaction that is rolled back.
"""

import os
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

from discuss.domain.model import Vote
from discuss.domain.value import CommentSortOrder, SubjectId, VoteDirection
from discuss.persistence.repository import (
    PostgresCommentRepository,
    PostgresVoteRepository,
)
from discuss.persistence.tables import metadata
from tests.conftest import make_user_id

pytestmark = pytest.mark.skipif(
    "DATABASE__URL" not in os.environ,
    reason="DATABASE__URL not set (needs a running Postgres)",
)

T0 = datetime(2026, 1, 1, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def session():
    """Session inside an outer transaction that is always rolled back."""
    engine = create_async_engine(os.environ["DATABASE__URL"])
    async with engine.connect() as connection:
        transaction = await connection.begin()
        await connection.execute(
            text(
                "DO $$ BEGIN CREATE TYPE vote_direction AS ENUM ('up', 'down'); "
                "EXCEPTION WHEN duplicate_object THEN null; END $$;"
            )
        )
        await connection.run_sync(metadata.create_all)
        async with AsyncSession(bind=connection) as session:
            yield session
        await transaction.rollback()
    await engine.dispose()


class TestPostgresCommentRepository:
    """Integration tests for PostgresCommentRepository."""

    @pytest.mark.asyncio
    async def test_create_assigns_increasing_ids(self, session):
        repo = PostgresCommentRepository(session)

        first = await repo.create(SubjectId(42), make_user_id(), "first", None, T0)
        second = await repo.create(SubjectId(42), make_user_id(), "second", None, T0)

        assert second.id > first.id
        assert await repo.find_by_id(first.id) == first

    @pytest.mark.asyncio
    async def test_popular_order_uses_live_upvotes(self, session):
        """Subject 42: popular reorders once B's upvotes are retracted."""
        # Arrange
        comments = PostgresCommentRepository(session)
        votes = PostgresVoteRepository(session)
        a = await comments.create(SubjectId(42), make_user_id(), "A", None, T0)
        b = await comments.create(
            SubjectId(42), make_user_id(), "B", None, T0 + timedelta(minutes=1)
        )
        for direction in ("up", "up", "up", "down"):
            await votes.upsert(
                Vote(comment_id=a.id, user_id=make_user_id(), direction=direction)
            )
        b_voters = [make_user_id() for _ in range(5)]
        for voter in b_voters:
            await votes.upsert(
                Vote(comment_id=b.id, user_id=voter, direction=VoteDirection.UP)
            )

        # Act & Assert
        popular = await comments.find_page(
            SubjectId(42), None, sort=CommentSortOrder.POPULAR
        )
        assert [c.id for c in popular] == [b.id, a.id]

        for voter in b_voters:
            assert await votes.delete(b.id, voter)
        popular = await comments.find_page(
            SubjectId(42), None, sort=CommentSortOrder.POPULAR
        )
        recent = await comments.find_page(SubjectId(42), None)
        assert [c.id for c in popular] == [a.id, b.id]
        assert [c.id for c in recent] == [b.id, a.id]

    @pytest.mark.asyncio
    async def test_counts_and_cascade(self, session):
        """Reply counts are derived and deletes cascade to replies and votes."""
        # Arrange
        comments = PostgresCommentRepository(session)
        votes = PostgresVoteRepository(session)
        parent = await comments.create(SubjectId(42), make_user_id(), "p", None, T0)
        reply = await comments.create(SubjectId(42), make_user_id(), "r", parent.id, T0)
        voter = make_user_id()
        await votes.upsert(
            Vote(comment_id=reply.id, user_id=voter, direction=VoteDirection.UP)
        )
        assert await comments.count(SubjectId(42), None) == 1
        assert await comments.count(SubjectId(42), parent.id) == 1
        assert await comments.count_replies(parent.id) == 1
        assert await comments.count_replies_for([parent.id, reply.id]) == {
            parent.id: 1,
            reply.id: 0,
        }

        # Act
        assert await comments.delete(parent.id)

        # Assert
        assert await comments.find_by_id(reply.id) is None
        assert await votes.find(reply.id, voter) is None
        assert not await comments.delete(parent.id)


class TestPostgresVoteRepository:
    """Integration tests for PostgresVoteRepository."""

    @pytest.mark.asyncio
    async def test_upsert_switches_direction(self, session):
        # Arrange
        comments = PostgresCommentRepository(session)
        votes = PostgresVoteRepository(session)
        comment = await comments.create(SubjectId(42), make_user_id(), "c", None, T0)
        user_id = make_user_id()

        # Act
        await votes.upsert(
            Vote(comment_id=comment.id, user_id=user_id, direction=VoteDirection.UP)
        )
        stored = await votes.upsert(
            Vote(comment_id=comment.id, user_id=user_id, direction=VoteDirection.DOWN)
        )

        # Assert
        assert stored.direction == VoteDirection.DOWN
        counts = await votes.count_by_comment(comment.id)
        assert (counts.upvote_count, counts.downvote_count) == (0, 1)
        mine = await votes.find_by_user_and_comments(user_id, [comment.id])
        assert [v.direction for v in mine] == [VoteDirection.DOWN]
