"""Comment domain service."""

from datetime import datetime, timezone

import logfire

from discuss.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from discuss.domain.model.comment import COMMENT_MAX_LENGTH, Comment
from discuss.domain.repository import CommentRepository
from discuss.domain.value import CommentId, SubjectId, UserId

from .base import Service


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(self, comment_repository: CommentRepository) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
        """
        self.comment_repository = comment_repository

    @staticmethod
    def normalize_body(text: str | None) -> str:
        """Trim a comment body and check its length bounds.

        Args:
            text: Raw comment text

        Returns:
            Trimmed text

        Raises:
            ValidationError: If empty after trimming or too long
        """
        body = (text or "").strip()
        if not body:
            raise ValidationError("Comment cannot be empty")
        if len(body) > COMMENT_MAX_LENGTH:
            raise ValidationError(
                f"Comment is too long (max {COMMENT_MAX_LENGTH} characters)"
            )
        return body

    async def get_parent(
        self, subject_id: SubjectId, parent_id: CommentId
    ) -> Comment:
        """Resolve the parent of a reply.

        Args:
            subject_id: Subject the reply is posted under
            parent_id: Parent comment ID

        Returns:
            The parent comment

        Raises:
            NotFoundError: If the parent does not exist under this subject
            ValidationError: If the parent is itself a reply
        """
        parent = await self.comment_repository.find_by_id(parent_id)
        if not parent:
            logfire.warn(
                "Parent comment not found",
                parent_id=parent_id,
                subject_id=subject_id,
            )
            raise NotFoundError("Parent comment", str(parent_id))
        if parent.subject_id != subject_id:
            logfire.warn(
                "Parent comment does not belong to subject",
                parent_id=parent_id,
                parent_subject_id=parent.subject_id,
                target_subject_id=subject_id,
            )
            raise NotFoundError("Parent comment", str(parent_id))
        if parent.is_reply:
            logfire.warn(
                "Reply to a reply rejected",
                parent_id=parent_id,
                grandparent_id=parent.parent_id,
            )
            raise ValidationError("Replies cannot be nested more than one level")
        return parent

    async def create_comment(
        self,
        subject_id: SubjectId,
        author_id: UserId,
        text: str,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Create a comment on a subject or reply to a top-level comment.

        Args:
            subject_id: Subject ID
            author_id: Author user ID
            text: Comment text
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            Created comment with its store-assigned ID

        Raises:
            ValidationError: If the body is out of bounds or the parent is a reply
            NotFoundError: If the parent comment is missing
        """
        with logfire.span(
            "comment_service.create_comment",
            subject_id=subject_id,
            author_id=str(author_id),
            parent_id=parent_id,
        ):
            body = self.normalize_body(text)
            if parent_id is not None:
                await self.get_parent(subject_id, parent_id)

            saved = await self.comment_repository.create(
                subject_id=subject_id,
                author_id=author_id,
                body=body,
                parent_id=parent_id,
                created_at=datetime.now(timezone.utc),
            )
            logfire.info(
                "Comment created",
                comment_id=saved.id,
                subject_id=subject_id,
                is_reply=saved.is_reply,
            )
            return saved

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment | None:
        """Get a comment by ID.

        Args:
            comment_id: Comment ID

        Returns:
            Comment if found, None otherwise
        """
        with logfire.span("comment_service.get_comment_by_id", comment_id=comment_id):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment:
                logfire.info("Comment found", comment_id=comment_id)
            else:
                logfire.warn("Comment not found", comment_id=comment_id)
            return comment

    async def count_replies(self, comment_id: CommentId) -> int:
        """Count direct replies to a comment."""
        return await self.comment_repository.count_replies(comment_id)

    async def delete_comment(
        self,
        comment_id: CommentId,
        requester_id: UserId,
        is_moderator: bool = False,
    ) -> Comment:
        """Delete a comment on behalf of its author or a moderator.

        Replies and votes go with it; the parent's reply count is derived
        and therefore drops on the next read without any update here.

        Args:
            comment_id: Comment ID
            requester_id: User asking for the deletion
            is_moderator: Whether the requester may delete anyone's comment

        Returns:
            The deleted comment

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the requester is neither author nor moderator
        """
        with logfire.span(
            "comment_service.delete_comment",
            comment_id=comment_id,
            requester_id=str(requester_id),
            is_moderator=is_moderator,
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment is None:
                raise NotFoundError("Comment", str(comment_id))

            if comment.author_id != requester_id and not is_moderator:
                logfire.warn(
                    "Unauthorized comment deletion attempt",
                    comment_id=comment_id,
                    requester_id=str(requester_id),
                )
                raise NotAuthorizedError("comment", str(comment_id), str(requester_id))

            deleted = await self.comment_repository.delete(comment_id)
            if not deleted:
                # Removed concurrently between lookup and delete
                raise NotFoundError("Comment", str(comment_id))

            logfire.info(
                "Comment deleted",
                comment_id=comment_id,
                subject_id=comment.subject_id,
                by_moderator=comment.author_id != requester_id,
            )
            return comment
