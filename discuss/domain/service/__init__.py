"""Domain services."""

from .base import Service
from .comment_service import CommentService
from .jwt_service import JWTService
from .moderation import ContentPolicy, RateLimiter
from .ranking_service import RankingService
from .vote_service import VoteService

__all__ = [
    "CommentService",
    "ContentPolicy",
    "JWTService",
    "RankingService",
    "RateLimiter",
    "Service",
    "VoteService",
]
