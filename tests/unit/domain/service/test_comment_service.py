"""Unit tests for CommentService."""

import pytest

from discuss.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from discuss.domain.model import Vote
from discuss.domain.repository import CommentRepository, VoteRepository
from discuss.domain.service import CommentService
from discuss.domain.value import CommentId, SubjectId, VoteDirection
from tests.conftest import MAX_LENGTH_BODY, make_user_id
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no services needed
unit_env = create_env_fixture()


class TestNormalizeBody:
    """Tests for body trimming and length bounds."""

    def test_trims_surrounding_whitespace(self):
        """Leading and trailing whitespace should be removed."""
        assert CommentService.normalize_body("  nice pack  \n") == "nice pack"

    def test_whitespace_only_body_rejected(self):
        """A body that trims to nothing is empty."""
        with pytest.raises(ValidationError, match="cannot be empty"):
            CommentService.normalize_body("   \t\n ")

    def test_missing_body_rejected(self):
        """None is treated like an empty body."""
        with pytest.raises(ValidationError, match="cannot be empty"):
            CommentService.normalize_body(None)

    def test_max_length_body_accepted(self):
        """Exactly 500 characters is allowed."""
        assert len(MAX_LENGTH_BODY) == 500
        assert CommentService.normalize_body(MAX_LENGTH_BODY) == MAX_LENGTH_BODY

    def test_over_max_length_body_rejected(self):
        """501 characters is one too many."""
        with pytest.raises(ValidationError, match="too long"):
            CommentService.normalize_body(MAX_LENGTH_BODY + "x")

    def test_length_is_measured_after_trimming(self):
        """Padding does not count toward the limit."""
        padded = "   " + MAX_LENGTH_BODY + "   "
        assert CommentService.normalize_body(padded) == MAX_LENGTH_BODY


class TestCreateComment:
    """Tests for create_comment method."""

    @pytest.mark.asyncio
    async def test_create_top_level_comment(self, unit_env):
        """Top-level comments have no parent and get a store-assigned ID."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        author_id = make_user_id()

        # Act
        comment = await comment_service.create_comment(
            subject_id=SubjectId(42),
            author_id=author_id,
            text="  Great shaders  ",
        )

        # Assert
        assert comment.id == 1
        assert comment.subject_id == 42
        assert comment.author_id == author_id
        assert comment.body == "Great shaders"
        assert comment.parent_id is None
        assert not comment.is_reply

    @pytest.mark.asyncio
    async def test_ids_increase_in_insertion_order(self, unit_env):
        """Later comments get larger IDs."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        author_id = make_user_id()

        # Act
        first = await comment_service.create_comment(SubjectId(1), author_id, "first")
        second = await comment_service.create_comment(SubjectId(2), author_id, "second")

        # Assert
        assert second.id > first.id

    @pytest.mark.asyncio
    async def test_create_reply(self, unit_env):
        """A reply points at a top-level comment on the same subject."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        parent = await comment_service.create_comment(
            SubjectId(42), make_user_id(), "Parent comment"
        )

        # Act
        reply = await comment_service.create_comment(
            SubjectId(42), make_user_id(), "Agreed", parent_id=parent.id
        )

        # Assert
        assert reply.parent_id == parent.id
        assert reply.is_reply
        assert await comment_service.count_replies(parent.id) == 1

    @pytest.mark.asyncio
    async def test_reply_to_reply_rejected(self, unit_env):
        """Threads are one level deep."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        parent = await comment_service.create_comment(
            SubjectId(42), make_user_id(), "Parent comment"
        )
        reply = await comment_service.create_comment(
            SubjectId(42), make_user_id(), "Reply", parent_id=parent.id
        )

        # Act & Assert
        with pytest.raises(ValidationError, match="more than one level"):
            await comment_service.create_comment(
                SubjectId(42), make_user_id(), "Nested", parent_id=reply.id
            )
        assert await comment_repo.count(SubjectId(42), reply.id) == 0

    @pytest.mark.asyncio
    async def test_missing_parent_raises_not_found(self, unit_env):
        """Replying to a comment that does not exist fails."""
        # Arrange
        comment_service = await unit_env.get(CommentService)

        # Act & Assert
        with pytest.raises(NotFoundError, match="Parent comment not found"):
            await comment_service.create_comment(
                SubjectId(42), make_user_id(), "Hello?", parent_id=CommentId(999)
            )

    @pytest.mark.asyncio
    async def test_parent_on_other_subject_raises_not_found(self, unit_env):
        """A parent from another subject does not resolve."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        parent = await comment_service.create_comment(
            SubjectId(7), make_user_id(), "On pack seven"
        )

        # Act & Assert
        with pytest.raises(NotFoundError):
            await comment_service.create_comment(
                SubjectId(42), make_user_id(), "Wrong thread", parent_id=parent.id
            )
        assert await comment_repo.count(SubjectId(42), parent.id) == 0

    @pytest.mark.asyncio
    async def test_invalid_body_is_not_stored(self, unit_env):
        """Validation runs before anything is written."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)

        # Act & Assert
        with pytest.raises(ValidationError):
            await comment_service.create_comment(SubjectId(42), make_user_id(), "  ")
        assert await comment_repo.count(SubjectId(42), None) == 0


class TestGetCommentById:
    """Tests for get_comment_by_id method."""

    @pytest.mark.asyncio
    async def test_returns_existing_comment(self, unit_env):
        """Stored comments are found by ID."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        created = await comment_service.create_comment(
            SubjectId(42), make_user_id(), "Findable"
        )

        # Act
        found = await comment_service.get_comment_by_id(created.id)

        # Assert
        assert found == created

    @pytest.mark.asyncio
    async def test_returns_none_for_unknown_id(self, unit_env):
        """Unknown IDs return None instead of raising."""
        comment_service = await unit_env.get(CommentService)
        assert await comment_service.get_comment_by_id(CommentId(12345)) is None


class TestDeleteComment:
    """Tests for delete_comment method."""

    @pytest.mark.asyncio
    async def test_author_can_delete(self, unit_env):
        """Authors may delete their own comments."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        author_id = make_user_id()
        comment = await comment_service.create_comment(
            SubjectId(42), author_id, "Regrettable"
        )

        # Act
        deleted = await comment_service.delete_comment(comment.id, author_id)

        # Assert
        assert deleted.id == comment.id
        assert await comment_service.get_comment_by_id(comment.id) is None

    @pytest.mark.asyncio
    async def test_moderator_can_delete_any_comment(self, unit_env):
        """Moderators may delete other users' comments."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment = await comment_service.create_comment(
            SubjectId(42), make_user_id(), "Off topic"
        )

        # Act
        await comment_service.delete_comment(
            comment.id, make_user_id(), is_moderator=True
        )

        # Assert
        assert await comment_service.get_comment_by_id(comment.id) is None

    @pytest.mark.asyncio
    async def test_other_user_cannot_delete(self, unit_env):
        """Non-authors without moderation rights are refused."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment = await comment_service.create_comment(
            SubjectId(42), make_user_id(), "Mine"
        )

        # Act & Assert
        with pytest.raises(NotAuthorizedError):
            await comment_service.delete_comment(comment.id, make_user_id())
        assert await comment_service.get_comment_by_id(comment.id) is not None

    @pytest.mark.asyncio
    async def test_unknown_comment_raises_not_found(self, unit_env):
        """Deleting a missing comment fails."""
        comment_service = await unit_env.get(CommentService)
        with pytest.raises(NotFoundError, match="Comment not found"):
            await comment_service.delete_comment(CommentId(404), make_user_id())

    @pytest.mark.asyncio
    async def test_delete_removes_replies_and_votes(self, unit_env):
        """Replies and votes go with the deleted comment."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        vote_repo = await unit_env.get(VoteRepository)
        author_id = make_user_id()
        voter_id = make_user_id()
        parent = await comment_service.create_comment(
            SubjectId(42), author_id, "Parent comment"
        )
        reply = await comment_service.create_comment(
            SubjectId(42), make_user_id(), "Reply", parent_id=parent.id
        )
        await vote_repo.upsert(
            Vote(comment_id=parent.id, user_id=voter_id, direction=VoteDirection.UP)
        )
        await vote_repo.upsert(
            Vote(comment_id=reply.id, user_id=voter_id, direction=VoteDirection.DOWN)
        )

        # Act
        await comment_service.delete_comment(parent.id, author_id)

        # Assert
        assert await comment_service.get_comment_by_id(reply.id) is None
        assert await vote_repo.find(parent.id, voter_id) is None
        assert await vote_repo.find(reply.id, voter_id) is None

    @pytest.mark.asyncio
    async def test_deleting_reply_drops_parent_reply_count(self, unit_env):
        """Reply counts are derived, so they fall as soon as a reply is gone."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        replier_id = make_user_id()
        parent = await comment_service.create_comment(
            SubjectId(42), make_user_id(), "Parent comment"
        )
        reply = await comment_service.create_comment(
            SubjectId(42), replier_id, "Reply", parent_id=parent.id
        )
        assert await comment_service.count_replies(parent.id) == 1

        # Act
        await comment_service.delete_comment(reply.id, replier_id)

        # Assert
        assert await comment_service.count_replies(parent.id) == 0
