"""Vote routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from colloquy.application.usecase.vote import (
    CastVoteRequest,
    CastVoteUseCase,
    RemoveVoteRequest,
    RemoveVoteUseCase,
    VoteResponse,
)
from colloquy.domain.error import DomainError
from colloquy.domain.service import JWTService
from colloquy.interface.api.auth import credential, require_principal
from colloquy.interface.error import to_http_exception

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


class CastVoteAPIRequest(BaseModel):
    """API request for casting a vote."""

    value: int  # +1 or -1


@router.put("/comments/{comment_id}/vote", response_model=VoteResponse)
async def cast_vote(
    comment_id: str,
    request: CastVoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    token: str | None = Depends(credential),
) -> VoteResponse:
    """Cast or change a vote on a comment.

    Repeating the current vote is a no-op. Requires authentication.

    Args:
        comment_id: Comment UUID
        request: Vote value
        cast_vote_use_case: Cast vote use case from DI
        jwt_service: JWT service for token verification (injected)
        token: Credential

    Returns:
        Updated comment node with the caller's vote

    Raises:
        HTTPException: 401 unauthenticated, 400 invalid value, 404 missing
            comment, 409 unresolved conflict
    """
    try:
        principal = require_principal(jwt_service, token)
        use_case_request = CastVoteRequest(
            comment_id=comment_id,
            user_id=str(principal.user_id),
            value=request.value,
        )
        return await cast_vote_use_case.execute(use_case_request)
    except DomainError as e:
        raise to_http_exception(e)


@router.delete("/comments/{comment_id}/vote", response_model=VoteResponse)
async def remove_vote(
    comment_id: str,
    remove_vote_use_case: FromDishka[RemoveVoteUseCase],
    jwt_service: FromDishka[JWTService],
    token: str | None = Depends(credential),
) -> VoteResponse:
    """Remove the caller's vote from a comment.

    Requires authentication.

    Raises:
        HTTPException: 401 unauthenticated, 404 missing comment, 409 no vote
    """
    try:
        principal = require_principal(jwt_service, token)
        use_case_request = RemoveVoteRequest(
            comment_id=comment_id, user_id=str(principal.user_id)
        )
        return await remove_vote_use_case.execute(use_case_request)
    except DomainError as e:
        raise to_http_exception(e)
