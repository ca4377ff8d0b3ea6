"""Delete comment use case."""

from uuid import UUID

from pydantic import BaseModel

from discuss.domain.error import AuthenticationRequiredError
from discuss.domain.service import CommentService
from discuss.domain.value import CommentId, UserId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: int
    requester_id: str | None  # User ID from authenticated user (None if anonymous)
    is_moderator: bool = False


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    message: str
    comment_id: int


class DeleteCommentUseCase:
    """Use case for removing a comment (author or moderator only)."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize delete comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Args:
            request: Delete comment request

        Returns:
            Confirmation message

        Raises:
            AuthenticationRequiredError: If the requester is anonymous
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the requester is neither author nor moderator
        """
        if not request.requester_id:
            raise AuthenticationRequiredError("delete comments")

        deleted = await self.comment_service.delete_comment(
            comment_id=CommentId(request.comment_id),
            requester_id=UserId(UUID(request.requester_id)),
            is_moderator=request.is_moderator,
        )
        return DeleteCommentResponse(
            message="Comment deleted successfully",
            comment_id=deleted.id,
        )
