"""List reported comments use case."""

from pydantic import BaseModel

from colloquy.application.usecase.comment.node import CommentNodeResponse
from colloquy.domain.service import ModerationService
from colloquy.domain.value import UserRole

from ..base import BaseUseCase, require_moderator


class ListReportedRequest(BaseModel):
    """List reported comments request."""

    user_id: str  # Moderator ID from authenticated principal
    role: UserRole
    page: int = 1
    page_size: int | None = None


class ReportedCommentItem(BaseModel):
    """Reported comment with its live report count."""

    comment: CommentNodeResponse
    report_count: int


class ListReportedResponse(BaseModel):
    """List reported comments response."""

    comments: list[ReportedCommentItem]
    total: int
    page: int
    page_size: int
    total_pages: int


class ListReportedUseCase(BaseUseCase):
    """Use case for the moderator review queue."""

    def __init__(self, moderation_service: ModerationService) -> None:
        """Initialize list reported use case.

        Args:
            moderation_service: Moderation domain service
        """
        self.moderation_service = moderation_service

    async def execute(self, request: ListReportedRequest) -> ListReportedResponse:
        """Execute list reported flow.

        Args:
            request: List reported request

        Returns:
            Page of reported comments, most reported first, hidden included

        Raises:
            NotAuthorizedError: If the caller is not a moderator
            ValidationError: If pagination is invalid
        """
        require_moderator(request.user_id, request.role, "list reported comments")

        page = await self.moderation_service.list_reported(
            page=request.page, page_size=request.page_size
        )

        return ListReportedResponse(
            comments=[
                ReportedCommentItem(
                    comment=CommentNodeResponse.from_comment(item.comment),
                    report_count=item.report_count,
                )
                for item in page.items
            ],
            total=page.total,
            page=page.page,
            page_size=page.page_size,
            total_pages=page.total_pages,
        )
