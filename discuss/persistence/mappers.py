"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from discuss.domain.model import Comment, Vote
from discuss.domain.value import (
    CommentId,
    SubjectId,
    UserId,
    VoteDirection,
)


def _as_uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    parent_id = row.get("parent_id")
    return Comment(
        id=CommentId(row["id"]),
        subject_id=SubjectId(row["subject_id"]),
        author_id=UserId(_as_uuid(row["author_id"])),
        body=row["body"],
        parent_id=CommentId(parent_id) if parent_id is not None else None,
        created_at=row["created_at"],
    )


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model.

    Args:
        row: Database row as dict

    Returns:
        Vote domain model
    """
    return Vote(
        comment_id=CommentId(row["comment_id"]),
        user_id=UserId(_as_uuid(row["user_id"])),
        direction=VoteDirection(row["direction"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict.

    Args:
        vote: Vote domain model

    Returns:
        Dict suitable for database insertion
    """
    data = vote.model_dump()
    data["direction"] = vote.direction.value
    return data
