"""Domain models for pack discussions."""

from discuss.domain.model.comment import (
    COMMENT_MAX_LENGTH,
    COMMENT_MIN_LENGTH,
    Comment,
)
from discuss.domain.model.thread import AnnotatedComment, CommentPage
from discuss.domain.model.vote import Vote

__all__ = [
    "AnnotatedComment",
    "Comment",
    "CommentPage",
    "COMMENT_MAX_LENGTH",
    "COMMENT_MIN_LENGTH",
    "Vote",
]
