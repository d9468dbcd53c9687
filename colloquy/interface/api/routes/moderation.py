"""Report and moderation routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from colloquy.application.usecase.moderation import (
    HideCommentRequest,
    HideCommentResponse,
    HideCommentUseCase,
    ListReportedRequest,
    ListReportedResponse,
    ListReportedUseCase,
    ReportCommentRequest,
    ReportCommentResponse,
    ReportCommentUseCase,
)
from colloquy.domain.error import DomainError
from colloquy.domain.service import JWTService
from colloquy.interface.api.auth import credential, require_principal
from colloquy.interface.error import to_http_exception

router = APIRouter(tags=["moderation"], route_class=DishkaRoute)


class ReportCommentAPIRequest(BaseModel):
    """API request for reporting a comment."""

    reason: str = Field(max_length=1000)


@router.post(
    "/comments/{comment_id}/reports",
    response_model=ReportCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def report_comment(
    comment_id: str,
    request: ReportCommentAPIRequest,
    report_comment_use_case: FromDishka[ReportCommentUseCase],
    jwt_service: FromDishka[JWTService],
    token: str | None = Depends(credential),
) -> ReportCommentResponse:
    """Report a comment for moderator review.

    Requires authentication. Hidden comments can still be reported.

    Raises:
        HTTPException: 401 unauthenticated, 400 empty reason, 404 missing comment
    """
    try:
        principal = require_principal(jwt_service, token)
        use_case_request = ReportCommentRequest(
            comment_id=comment_id,
            reporter_id=str(principal.user_id),
            reason=request.reason,
        )
        return await report_comment_use_case.execute(use_case_request)
    except DomainError as e:
        logfire.warn("Report failed", comment_id=comment_id, error=str(e))
        raise to_http_exception(e)


@router.get("/moderation/comments", response_model=ListReportedResponse)
async def list_reported(
    list_reported_use_case: FromDishka[ListReportedUseCase],
    jwt_service: FromDishka[JWTService],
    page: int = Query(default=1),
    page_size: int | None = Query(default=None),
    token: str | None = Depends(credential),
) -> ListReportedResponse:
    """List reported comments, most reported first.

    Requires the moderator role.

    Raises:
        HTTPException: 401 unauthenticated, 403 not a moderator
    """
    try:
        principal = require_principal(jwt_service, token)
        request = ListReportedRequest(
            user_id=str(principal.user_id),
            role=principal.role,
            page=page,
            page_size=page_size,
        )
        return await list_reported_use_case.execute(request)
    except DomainError as e:
        raise to_http_exception(e)


@router.put("/moderation/comments/{comment_id}/hide", response_model=HideCommentResponse)
async def hide_comment(
    comment_id: str,
    hide_comment_use_case: FromDishka[HideCommentUseCase],
    jwt_service: FromDishka[JWTService],
    token: str | None = Depends(credential),
) -> HideCommentResponse:
    """Hide a comment from standard listings.

    Requires the moderator role. Hiding twice is a no-op.

    Raises:
        HTTPException: 401 unauthenticated, 403 not a moderator, 404 missing
    """
    try:
        principal = require_principal(jwt_service, token)
        request = HideCommentRequest(
            comment_id=comment_id,
            user_id=str(principal.user_id),
            role=principal.role,
        )
        return await hide_comment_use_case.execute(request)
    except DomainError as e:
        logfire.warn("Hide failed", comment_id=comment_id, error=str(e))
        raise to_http_exception(e)
