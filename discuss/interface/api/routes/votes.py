"""Vote routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, status
from pydantic import BaseModel

from discuss.application.usecase.vote import (
    SetVoteRequest,
    SetVoteResponse,
    SetVoteUseCase,
)
from discuss.domain.error import (
    AuthenticationRequiredError,
    NotFoundError,
    RateLimitExceededError,
)
from discuss.domain.service import JWTService
from discuss.domain.value import VoteDirection
from discuss.interface.error import rate_limited

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


class SetVoteAPIRequest(BaseModel):
    """API request for voting on a comment."""

    direction: VoteDirection  # "up", "down" or "none" to retract


@router.put("/comments/{comment_id}/vote", response_model=SetVoteResponse)
async def set_vote(
    comment_id: int,
    request: SetVoteAPIRequest,
    set_vote_use_case: FromDishka[SetVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> SetVoteResponse:
    """Set the caller's vote on a comment.

    Requires authentication. Idempotent: repeating a direction changes
    nothing.

    Args:
        comment_id: Comment ID
        request: Target vote direction
        set_vote_use_case: Set vote use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Fresh counts and the caller's resulting vote

    Raises:
        HTTPException: If not authenticated, rate limited, or comment not found
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)

    try:
        use_case_request = SetVoteRequest(
            comment_id=comment_id,
            user_id=user_id,
            direction=request.direction,
        )
        return await set_vote_use_case.execute(use_case_request)
    except AuthenticationRequiredError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except RateLimitExceededError as e:
        raise rate_limited(e)
    except Exception as e:
        logfire.error("Unexpected error processing vote", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to process vote",
        )
