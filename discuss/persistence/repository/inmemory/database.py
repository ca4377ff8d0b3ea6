"""Shared in-memory storage for testing.

The comment and vote repositories read each other's rows (popular ordering
needs upvote counts, deleting a comment removes its votes), so both wrap a
single store instead of keeping private dicts.
"""

from itertools import count

from discuss.domain.model import Comment, Vote
from discuss.domain.value import CommentId, UserId


class InMemoryDatabase:
    """Tables for the in-memory repositories."""

    def __init__(self) -> None:
        self.comments: dict[CommentId, Comment] = {}
        self.votes: dict[tuple[CommentId, UserId], Vote] = {}
        self._ids = count(1)

    def next_comment_id(self) -> CommentId:
        """Next identity value, increasing in insertion order."""
        return CommentId(next(self._ids))
