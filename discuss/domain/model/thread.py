"""Read-side views over comment threads.

These are produced by the ranking engine by joining comments with the
vote ledger and reply counts. They are never persisted.
"""

import math

from pydantic import Field

from discuss.domain.model.comment import Comment
from discuss.domain.model.common import DomainModel
from discuss.domain.value import VoteCounts, VoteDirection


class AnnotatedComment(DomainModel):
    """A comment together with its derived counts and the viewer's vote."""

    comment: Comment
    votes: VoteCounts = VoteCounts()
    reply_count: int = Field(default=0, ge=0)
    viewer_vote: VoteDirection = VoteDirection.NONE


class CommentPage(DomainModel):
    """One page of an ordered comment listing."""

    items: list[AnnotatedComment]
    total: int = Field(ge=0)
    page: int = Field(ge=1)
    limit: int = Field(ge=1)

    @property
    def total_pages(self) -> int:
        """Number of pages needed to show every matching comment."""
        return math.ceil(self.total / self.limit)
