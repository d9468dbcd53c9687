"""Report comment use case."""

from datetime import datetime

from pydantic import BaseModel

from colloquy.domain.service import ModerationService
from colloquy.domain.value import CommentId, UserId

from ..base import BaseUseCase, parse_id


class ReportCommentRequest(BaseModel):
    """Report comment request."""

    comment_id: str  # UUID string
    reporter_id: str  # User ID from authenticated principal
    reason: str


class ReportCommentResponse(BaseModel):
    """Report comment response."""

    report_id: str
    comment_id: str
    reason: str
    report_count: int
    created_at: datetime


class ReportCommentUseCase(BaseUseCase):
    """Use case for reporting a comment to moderators."""

    def __init__(self, moderation_service: ModerationService) -> None:
        """Initialize report comment use case.

        Args:
            moderation_service: Moderation domain service
        """
        self.moderation_service = moderation_service

    async def execute(self, request: ReportCommentRequest) -> ReportCommentResponse:
        """Execute report comment flow.

        Args:
            request: Report comment request

        Returns:
            Confirmation with the comment's current report count

        Raises:
            ValidationError: If ids are malformed or the reason is empty
            NotFoundError: If the comment does not exist
        """
        comment_id = CommentId(parse_id(request.comment_id, "comment_id"))
        reporter_id = UserId(parse_id(request.reporter_id, "reporter_id"))

        report = await self.moderation_service.report(
            comment_id, reporter_id, request.reason
        )
        report_count = await self.moderation_service.count_reports(comment_id)

        return ReportCommentResponse(
            report_id=str(report.id),
            comment_id=str(report.comment_id),
            reason=report.reason,
            report_count=report_count,
            created_at=report.created_at,
        )
