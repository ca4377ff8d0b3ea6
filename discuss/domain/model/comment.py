"""Comment entity.

Comments are discussions attached to a catalog subject (a texture pack).
Threads are one level deep: top-level comments and their direct replies.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from discuss.domain.model.common import DomainModel
from discuss.domain.value import CommentId, SubjectId, UserId

# Bounds on the trimmed comment body
COMMENT_MIN_LENGTH = 1
COMMENT_MAX_LENGTH = 500


class Comment(DomainModel):
    """Comment entity.

    Represents a comment on a subject or a reply to a top-level comment.

    Threading is managed through:
    - parent_id: Direct parent comment (None for top-level)

    Vote and reply counts are never stored on the comment; they are
    derived from the vote ledger and the store at read time.
    """

    id: CommentId
    subject_id: SubjectId
    author_id: UserId
    body: str = Field(min_length=COMMENT_MIN_LENGTH, max_length=COMMENT_MAX_LENGTH)
    parent_id: Optional[CommentId] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_reply(self) -> bool:
        """Whether this comment answers another comment."""
        return self.parent_id is not None
