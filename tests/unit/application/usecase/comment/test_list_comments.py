"""Unit tests for ListCommentsUseCase."""

import pytest

from discuss.application.usecase.comment.list_comments import (
    ListCommentsRequest,
    ListCommentsUseCase,
)
from discuss.domain.error import ValidationError
from discuss.domain.service import CommentService, JWTService, VoteService
from discuss.domain.value import CommentSortOrder, SubjectId, VoteDirection
from tests.conftest import make_token, make_user_id
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no services needed
unit_env = create_env_fixture()


async def _post(unit_env, count: int, subject_id: int = 42, parent_id=None):
    comment_service = await unit_env.get(CommentService)
    return [
        await comment_service.create_comment(
            SubjectId(subject_id), make_user_id(), f"comment {i}", parent_id=parent_id
        )
        for i in range(count)
    ]


class TestListCommentsUseCase:
    """Tests for ListCommentsUseCase."""

    @pytest.mark.asyncio
    async def test_defaults_to_five_recent_top_level_comments(self, unit_env):
        """Page 1, recent order, 5 per page."""
        # Arrange
        use_case = await unit_env.get(ListCommentsUseCase)
        comments = await _post(unit_env, 7)

        # Act
        response = await use_case.execute(ListCommentsRequest(subject_id=42))

        # Assert
        assert [item.id for item in response.items] == [
            c.id for c in reversed(comments)
        ][:5]
        assert response.total == 7
        assert response.page == 1
        assert response.total_pages == 2

    @pytest.mark.asyncio
    async def test_explicit_page_and_limit(self, unit_env):
        """Callers can choose the page window."""
        # Arrange
        use_case = await unit_env.get(ListCommentsUseCase)
        await _post(unit_env, 7)

        # Act
        response = await use_case.execute(
            ListCommentsRequest(subject_id=42, page=2, limit=3)
        )

        # Assert
        assert len(response.items) == 3
        assert response.page == 2
        assert response.total_pages == 3

    @pytest.mark.asyncio
    async def test_zero_limit_rejected(self, unit_env):
        """A limit of 0 is invalid."""
        use_case = await unit_env.get(ListCommentsUseCase)
        with pytest.raises(ValidationError):
            await use_case.execute(ListCommentsRequest(subject_id=42, limit=0))

    @pytest.mark.asyncio
    async def test_replies_come_back_all_at_once(self, unit_env):
        """Reply listing ignores the top-level page size."""
        # Arrange
        use_case = await unit_env.get(ListCommentsUseCase)
        (parent,) = await _post(unit_env, 1)
        await _post(unit_env, 8, parent_id=parent.id)

        # Act
        response = await use_case.execute(
            ListCommentsRequest(subject_id=42, parent_id=parent.id)
        )

        # Assert
        assert len(response.items) == 8
        assert response.total == 8
        assert response.total_pages == 1
        assert all(item.parent_id == parent.id for item in response.items)

    @pytest.mark.asyncio
    async def test_replies_past_first_page_are_empty(self, unit_env):
        """Everything lives on page 1 for replies."""
        # Arrange
        use_case = await unit_env.get(ListCommentsUseCase)
        (parent,) = await _post(unit_env, 1)
        await _post(unit_env, 2, parent_id=parent.id)

        # Act
        response = await use_case.execute(
            ListCommentsRequest(subject_id=42, parent_id=parent.id, page=2)
        )

        # Assert
        assert response.items == []
        assert response.total == 2
        assert response.total_pages == 1

    @pytest.mark.asyncio
    async def test_replies_with_limit_are_paginated(self, unit_env):
        """An explicit limit pages replies like top-level comments."""
        # Arrange
        use_case = await unit_env.get(ListCommentsUseCase)
        (parent,) = await _post(unit_env, 1)
        await _post(unit_env, 4, parent_id=parent.id)

        # Act
        response = await use_case.execute(
            ListCommentsRequest(subject_id=42, parent_id=parent.id, limit=3)
        )

        # Assert
        assert len(response.items) == 3
        assert response.total_pages == 2

    @pytest.mark.asyncio
    async def test_reply_counts_on_top_level_items(self, unit_env):
        """Top-level items report how many replies they have."""
        # Arrange
        use_case = await unit_env.get(ListCommentsUseCase)
        (parent,) = await _post(unit_env, 1)
        await _post(unit_env, 3, parent_id=parent.id)

        # Act
        response = await use_case.execute(ListCommentsRequest(subject_id=42))

        # Assert
        assert response.items[0].reply_count == 3

    @pytest.mark.asyncio
    async def test_viewer_vote_from_token(self, unit_env):
        """A valid token annotates items with the viewer's vote."""
        # Arrange
        use_case = await unit_env.get(ListCommentsUseCase)
        vote_service = await unit_env.get(VoteService)
        jwt_service = await unit_env.get(JWTService)
        liked, ignored = await _post(unit_env, 2)
        viewer_id = make_user_id()
        await vote_service.set_vote(liked.id, viewer_id, VoteDirection.UP)
        token = jwt_service.create_token(str(viewer_id), "viewer")

        # Act
        response = await use_case.execute(
            ListCommentsRequest(
                subject_id=42, sort=CommentSortOrder.POPULAR, auth_token=token
            )
        )

        # Assert
        assert [item.id for item in response.items] == [liked.id, ignored.id]
        assert response.items[0].viewer_vote == VoteDirection.UP
        assert response.items[0].upvote_count == 1
        assert response.items[1].viewer_vote == VoteDirection.NONE

    @pytest.mark.asyncio
    async def test_invalid_token_reads_anonymously(self, unit_env):
        """A bad token is not an error for reads."""
        # Arrange
        use_case = await unit_env.get(ListCommentsUseCase)
        vote_service = await unit_env.get(VoteService)
        (comment,) = await _post(unit_env, 1)
        viewer_id = make_user_id()
        await vote_service.set_vote(comment.id, viewer_id, VoteDirection.UP)

        # Act
        response = await use_case.execute(
            ListCommentsRequest(subject_id=42, auth_token=make_token(viewer_id) + "x")
        )

        # Assert
        assert response.items[0].viewer_vote == VoteDirection.NONE
