"""In-memory vote repository for testing."""

from typing import Optional, Sequence

from discuss.domain.model.vote import Vote
from discuss.domain.repository.vote import VoteRepository
from discuss.domain.value import CommentId, UserId, VoteCounts, VoteDirection
from discuss.persistence.repository.inmemory.database import InMemoryDatabase


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self, database: InMemoryDatabase | None = None) -> None:
        self._db = database or InMemoryDatabase()

    async def find(self, comment_id: CommentId, user_id: UserId) -> Optional[Vote]:
        """Find a user's vote on a comment."""
        return self._db.votes.get((comment_id, user_id))

    async def upsert(self, vote: Vote) -> Vote:
        """Insert a vote or replace the direction of the existing one."""
        key = (vote.comment_id, vote.user_id)
        existing = self._db.votes.get(key)
        if existing is not None:
            # Keep the original cast time, like ON CONFLICT DO UPDATE
            vote = vote.model_copy(update={"created_at": existing.created_at})
        self._db.votes[key] = vote
        return vote

    async def delete(self, comment_id: CommentId, user_id: UserId) -> bool:
        """Delete a user's vote on a comment."""
        return self._db.votes.pop((comment_id, user_id), None) is not None

    async def count_by_comment(self, comment_id: CommentId) -> VoteCounts:
        """Aggregate votes on a single comment."""
        counts = await self.count_by_comments([comment_id])
        return counts[comment_id]

    async def count_by_comments(
        self, comment_ids: Sequence[CommentId]
    ) -> dict[CommentId, VoteCounts]:
        """Aggregate votes for several comments."""
        up: dict[CommentId, int] = {cid: 0 for cid in comment_ids}
        down: dict[CommentId, int] = {cid: 0 for cid in comment_ids}
        for vote in self._db.votes.values():
            if vote.comment_id not in up:
                continue
            if vote.direction == VoteDirection.UP:
                up[vote.comment_id] += 1
            else:
                down[vote.comment_id] += 1

        return {
            cid: VoteCounts(upvote_count=up[cid], downvote_count=down[cid])
            for cid in comment_ids
        }

    async def find_by_user_and_comments(
        self,
        user_id: UserId,
        comment_ids: Sequence[CommentId],
    ) -> list[Vote]:
        """Find a user's votes on multiple comments."""
        votes = []
        for comment_id in comment_ids:
            vote = self._db.votes.get((comment_id, user_id))
            if vote is not None:
                votes.append(vote)
        return votes
