"""Comment routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from colloquy.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
    GetRepliesRequest,
    GetRepliesResponse,
    GetRepliesUseCase,
)
from colloquy.domain.error import DomainError
from colloquy.domain.service import JWTService
from colloquy.interface.api.auth import credential, require_principal
from colloquy.interface.error import to_http_exception

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    content: str = Field(max_length=10000)
    parent_id: str | None = None  # Parent comment ID for replies


@router.get("/contents/{content_id}/comments", response_model=GetCommentsResponse)
async def get_comments(
    content_id: str,
    get_comments_use_case: FromDishka[GetCommentsUseCase],
    jwt_service: FromDishka[JWTService],
    order: str = Query(default="recency"),
    page: int = Query(default=1),
    page_size: int | None = Query(default=None),
    token: str | None = Depends(credential),
) -> GetCommentsResponse:
    """Get one page of the comment forest for a content item.

    Top-level comments and their replies use the selected order; the level
    below uses recency. If authenticated, each node carries the caller's vote.

    Args:
        content_id: Content item UUID
        get_comments_use_case: Get comments use case from DI
        jwt_service: JWT service for token verification (injected)
        order: recency, ratingHigh or ratingLow
        page: 1-based page number
        page_size: Top-level comments per page
        token: Credential (optional)

    Returns:
        Forest page with pagination metadata
    """
    principal = jwt_service.get_principal_from_token(token)
    try:
        request = GetCommentsRequest(
            content_id=content_id,
            order=order,
            page=page,
            page_size=page_size,
            viewer_id=str(principal.user_id) if principal else None,
        )
        return await get_comments_use_case.execute(request)
    except DomainError as e:
        logfire.warn("Comment listing rejected", content_id=content_id, error=str(e))
        raise to_http_exception(e)


@router.get("/comments/{comment_id}/replies", response_model=GetRepliesResponse)
async def get_replies(
    comment_id: str,
    get_replies_use_case: FromDishka[GetRepliesUseCase],
    jwt_service: FromDishka[JWTService],
    order: str = Query(default="recency"),
    token: str | None = Depends(credential),
) -> GetRepliesResponse:
    """Load the direct replies of a comment (deeper thread levels)."""
    principal = jwt_service.get_principal_from_token(token)
    try:
        request = GetRepliesRequest(
            comment_id=comment_id,
            order=order,
            viewer_id=str(principal.user_id) if principal else None,
        )
        return await get_replies_use_case.execute(request)
    except DomainError as e:
        raise to_http_exception(e)


@router.post(
    "/contents/{content_id}/comments",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    content_id: str,
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    token: str | None = Depends(credential),
) -> CreateCommentResponse:
    """Create a comment on a content item or reply to another comment.

    Requires authentication.

    Args:
        content_id: Content item UUID
        request: Comment text and optional parent ID
        create_comment_use_case: Create comment use case from DI
        jwt_service: JWT service for token verification (injected)
        token: Credential

    Returns:
        Created comment node

    Raises:
        HTTPException: 401 unauthenticated, 400 invalid, 404 missing target
    """
    try:
        principal = require_principal(jwt_service, token)
        use_case_request = CreateCommentRequest(
            content_id=content_id,
            author_id=str(principal.user_id),
            author_handle=str(principal.handle),
            content=request.content,
            parent_id=request.parent_id,
        )
        return await create_comment_use_case.execute(use_case_request)
    except DomainError as e:
        logfire.warn("Comment creation failed", content_id=content_id, error=str(e))
        raise to_http_exception(e)
