"""PostgreSQL repository implementations."""

from discuss.persistence.repository.comment import PostgresCommentRepository
from discuss.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresCommentRepository",
    "PostgresVoteRepository",
]
