"""Comment use cases."""

from .create_comment import CreateCommentRequest, CreateCommentUseCase
from .delete_comment import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
)
from .list_comments import (
    ListCommentsRequest,
    ListCommentsResponse,
    ListCommentsUseCase,
)
from .view import CommentView

__all__ = [
    "CommentView",
    "CreateCommentRequest",
    "CreateCommentUseCase",
    "DeleteCommentRequest",
    "DeleteCommentResponse",
    "DeleteCommentUseCase",
    "ListCommentsRequest",
    "ListCommentsResponse",
    "ListCommentsUseCase",
]
