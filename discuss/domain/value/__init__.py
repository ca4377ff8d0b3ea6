"""Domain value objects for pack discussions."""

from discuss.domain.value.identifiers import CommentId, SubjectId, UserId
from discuss.domain.value.types import (
    CommentSortOrder,
    PolicyVerdict,
    RateLimitDecision,
    RateLimitPolicy,
    VoteCounts,
    VoteDirection,
)

__all__ = [
    # Identifiers
    "CommentId",
    "SubjectId",
    "UserId",
    # Types
    "CommentSortOrder",
    "PolicyVerdict",
    "RateLimitDecision",
    "RateLimitPolicy",
    "VoteCounts",
    "VoteDirection",
]
