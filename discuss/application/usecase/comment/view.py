"""Comment representation shared by the comment use cases."""

from datetime import datetime

from pydantic import BaseModel

from discuss.domain.model import AnnotatedComment, Comment
from discuss.domain.value import VoteDirection


class CommentView(BaseModel):
    """Comment as returned to clients, with derived counts."""

    id: int
    subject_id: int
    parent_id: int | None
    author_id: str
    body: str
    created_at: datetime
    upvote_count: int
    downvote_count: int
    reply_count: int
    viewer_vote: VoteDirection

    @classmethod
    def from_annotated(cls, item: AnnotatedComment) -> "CommentView":
        """Build a view from a ranked, annotated comment."""
        comment = item.comment
        return cls(
            id=comment.id,
            subject_id=comment.subject_id,
            parent_id=comment.parent_id,
            author_id=str(comment.author_id),
            body=comment.body,
            created_at=comment.created_at,
            upvote_count=item.votes.upvote_count,
            downvote_count=item.votes.downvote_count,
            reply_count=item.reply_count,
            viewer_vote=item.viewer_vote,
        )

    @classmethod
    def fresh(cls, comment: Comment) -> "CommentView":
        """View of a comment that was just created (nothing derived yet)."""
        return cls.from_annotated(AnnotatedComment(comment=comment))
