"""Comment routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, status
from pydantic import BaseModel

from discuss.application.usecase.comment import (
    CommentView,
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    ListCommentsRequest,
    ListCommentsResponse,
    ListCommentsUseCase,
)
from discuss.domain.error import (
    AuthenticationRequiredError,
    NotAuthorizedError,
    NotFoundError,
    RateLimitExceededError,
    ValidationError,
)
from discuss.domain.service import JWTService
from discuss.domain.value import CommentSortOrder
from discuss.interface.error import rate_limited

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment.

    Body bounds are checked by the comment service so that clients get
    the same messages whatever the entry point.
    """

    body: str
    parent_id: int | None = None  # Parent comment ID for replies


@router.get("/subjects/{subject_id}/comments", response_model=ListCommentsResponse)
async def list_comments(
    subject_id: int,
    list_comments_use_case: FromDishka[ListCommentsUseCase],
    parent_id: int | None = None,
    sort: CommentSortOrder = CommentSortOrder.RECENT,
    page: int = 1,
    limit: int | None = None,
    auth_token: str | None = Cookie(default=None),
) -> ListCommentsResponse:
    """List comments on a subject.

    Without parent_id, returns a page of top-level comments (5 per page
    by default). With parent_id, returns that comment's replies; all of
    them at once unless a limit is given.

    If authenticated, each comment carries the viewer's own vote.

    Args:
        subject_id: Subject (texture pack) ID
        list_comments_use_case: List comments use case from DI
        parent_id: Parent comment ID to list replies of
        sort: "recent" or "popular"
        page: 1-indexed page number
        limit: Page size
        auth_token: JWT token from cookie (optional)

    Returns:
        Page of comments with totals
    """
    try:
        request = ListCommentsRequest(
            subject_id=subject_id,
            parent_id=parent_id,
            sort=sort,
            page=page,
            limit=limit,
            auth_token=auth_token,
        )
        return await list_comments_use_case.execute(request)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except Exception as e:
        logfire.error("Unexpected error listing comments", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch comments",
        )


@router.post(
    "/subjects/{subject_id}/comments",
    response_model=CommentView,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    subject_id: int,
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CommentView:
    """Create a comment on a subject or reply to a top-level comment.

    Requires authentication.

    Args:
        subject_id: Subject (texture pack) ID
        request: Comment creation data
        create_comment_use_case: Create comment use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Created comment with zero counts

    Raises:
        HTTPException: If not authenticated, invalid, flagged or rate limited
    """
    identity = jwt_service.get_identity_from_token(auth_token)

    try:
        use_case_request = CreateCommentRequest(
            subject_id=subject_id,
            body=request.body,
            author_id=identity.user_id if identity else None,
            parent_id=request.parent_id,
        )
        return await create_comment_use_case.execute(use_case_request)
    except AuthenticationRequiredError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )
    except NotFoundError as e:
        logfire.warn("Comment creation failed - parent not found", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except RateLimitExceededError as e:
        raise rate_limited(e)
    except Exception as e:
        logfire.error("Unexpected error creating comment", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create comment",
        )


@router.delete("/comments/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: int,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeleteCommentResponse:
    """Delete a comment, its replies and their votes.

    Only the comment author or a moderator can delete.

    Args:
        comment_id: Comment ID
        delete_comment_use_case: Delete comment use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Confirmation message

    Raises:
        HTTPException: If not authenticated, not authorized, or not found
    """
    identity = jwt_service.get_identity_from_token(auth_token)

    try:
        request = DeleteCommentRequest(
            comment_id=comment_id,
            requester_id=identity.user_id if identity else None,
            is_moderator=identity.is_moderator if identity else False,
        )
        return await delete_comment_use_case.execute(request)
    except AuthenticationRequiredError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )
    except NotAuthorizedError as e:
        logfire.warn("Unauthorized comment deletion attempt", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to delete this comment",
        )
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except Exception as e:
        logfire.error("Unexpected error deleting comment", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete comment",
        )
