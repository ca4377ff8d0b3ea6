"""Domain value objects for pack discussions.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from datetime import datetime
from enum import Enum

from pydantic import Field, field_validator

from discuss.domain.value.common import ValueObject


class VoteDirection(str, Enum):
    """Direction of a user's vote on a comment.

    ``NONE`` is only ever a request or a read result. The ledger never
    stores it: retracting a vote deletes the row.
    """

    UP = "up"
    DOWN = "down"
    NONE = "none"


class CommentSortOrder(str, Enum):
    """Sort order for comment listings."""

    RECENT = "recent"  # created_at DESC, id DESC
    POPULAR = "popular"  # upvotes DESC, created_at DESC, id DESC


class VoteCounts(ValueObject):
    """Aggregated vote totals for a single comment."""

    upvote_count: int = Field(default=0, ge=0)
    downvote_count: int = Field(default=0, ge=0)

    @property
    def score(self) -> int:
        """Net score (upvotes minus downvotes)."""
        return self.upvote_count - self.downvote_count


class PolicyVerdict(ValueObject):
    """Outcome of running text through the content policy."""

    flagged: bool
    reason: str | None = None


class RateLimitPolicy(ValueObject):
    """Fixed-window quota applied to one kind of action."""

    name: str
    limit: int = Field(ge=1)
    window_seconds: int = Field(ge=1)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate policy name is usable as a key prefix."""
        if not v or ":" in v:
            raise ValueError("Policy name must be non-empty and contain no ':'")
        return v


class RateLimitDecision(ValueObject):
    """Result of consulting the rate limiter for one request."""

    allowed: bool
    limit: int
    remaining: int = Field(ge=0)
    reset_at: datetime
