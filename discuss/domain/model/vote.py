"""Vote entity.

Votes are the ledger rows behind comment scores. Each user holds at most
one directional vote per comment.
"""

from datetime import datetime, timezone

from pydantic import Field, field_validator

from discuss.domain.model.common import DomainModel
from discuss.domain.value import CommentId, UserId, VoteDirection


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - Identity is the (comment_id, user_id) pair (database primary key)
    - Direction is up or down; retracting a vote deletes the row
    - Casting a new direction replaces the previous one
    """

    comment_id: CommentId
    user_id: UserId
    direction: VoteDirection
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("direction")
    @classmethod
    def validate_direction(cls, v: VoteDirection) -> VoteDirection:
        """Stored votes are always directional."""
        if v == VoteDirection.NONE:
            raise ValueError("A stored vote must be 'up' or 'down'")
        return v
