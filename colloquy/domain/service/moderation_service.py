"""Moderation domain service (reports and hiding)."""

import math
from dataclasses import dataclass
from datetime import datetime
from uuid import uuid4

import logfire

from colloquy.config import ModerationSettings
from colloquy.domain.error import NotFoundError, ValidationError
from colloquy.domain.model.comment import Comment
from colloquy.domain.model.report import Report, ReportedComment
from colloquy.domain.repository import (
    CommentRepository,
    ReportRepository,
    TransactionManager,
)
from colloquy.domain.value import CommentId, ReportId, UserId

from .base import Service

MAX_REASON_LENGTH = 1000


@dataclass
class ReportedPage:
    """One page of the reported-comments listing."""

    items: list[ReportedComment]
    total: int
    page: int
    page_size: int
    total_pages: int


class ModerationService(Service):
    """Domain service for filing reports and hiding comments.

    Role checks happen in the application layer; this service trusts its
    caller.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        report_repository: ReportRepository,
        transactions: TransactionManager,
        settings: ModerationSettings,
    ) -> None:
        """Initialize moderation service.

        Args:
            comment_repository: Comment repository
            report_repository: Report repository
            transactions: Transaction manager
            settings: Moderation settings
        """
        self.comment_repository = comment_repository
        self.report_repository = report_repository
        self.transactions = transactions
        self.settings = settings

    async def report(
        self, comment_id: CommentId, reporter_id: UserId, reason: str
    ) -> Report:
        """File a report against a comment.

        Reporting a hidden comment is allowed. Repeated reports by the same
        user are all recorded.

        Args:
            comment_id: Reported comment
            reporter_id: Reporting user
            reason: Free-text reason, stored trimmed

        Returns:
            Created report

        Raises:
            ValidationError: If the reason is empty or too long
            NotFoundError: If the comment does not exist
        """
        with logfire.span(
            "moderation_service.report",
            comment_id=str(comment_id),
            reporter_id=str(reporter_id),
        ):
            text = reason.strip()
            if not text:
                raise ValidationError("reason", "Reason cannot be empty")
            if len(text) > MAX_REASON_LENGTH:
                raise ValidationError(
                    "reason", f"Reason must be at most {MAX_REASON_LENGTH} characters"
                )

            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                logfire.warn("Report on non-existent comment", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))

            report = Report(
                id=ReportId(uuid4()),
                comment_id=comment_id,
                reporter_id=reporter_id,
                reason=text,
                created_at=datetime.now(),
            )
            async with self.transactions.atomic():
                saved = await self.report_repository.save(report)

            logfire.info(
                "Comment reported",
                report_id=str(saved.id),
                comment_id=str(comment_id),
                reporter_id=str(reporter_id),
            )
            return saved

    async def count_reports(self, comment_id: CommentId) -> int:
        """Current report count of a comment (0 when never reported)."""
        return await self.report_repository.count_by_comment(
            comment_id, distinct_reporters=self.settings.count_distinct_reporters
        )

    async def list_reported(
        self, page: int = 1, page_size: int | None = None
    ) -> ReportedPage:
        """List reported comments, most reported first.

        Args:
            page: 1-based page number
            page_size: Comments per page (settings default when None)

        Returns:
            Page of reported comments with pagination metadata

        Raises:
            ValidationError: If page or page_size is out of range
        """
        if page_size is None:
            page_size = self.settings.default_page_size
        if page < 1:
            raise ValidationError("page", "Page must be at least 1")
        if page_size < 1 or page_size > self.settings.max_page_size:
            raise ValidationError(
                "page_size",
                f"Page size must be between 1 and {self.settings.max_page_size}",
            )

        with logfire.span(
            "moderation_service.list_reported", page=page, page_size=page_size
        ):
            total = await self.report_repository.count_reported()
            items = await self.report_repository.find_reported(
                limit=page_size,
                offset=(page - 1) * page_size,
                distinct_reporters=self.settings.count_distinct_reporters,
            )
            logfire.info("Reported comments listed", count=len(items), total=total)
            return ReportedPage(
                items=items,
                total=total,
                page=page,
                page_size=page_size,
                total_pages=math.ceil(total / page_size),
            )

    async def hide(self, comment_id: CommentId) -> Comment:
        """Hide a comment from standard listings.

        Idempotent: hiding an already hidden comment changes nothing.
        Reports, votes and rating score are kept.

        Args:
            comment_id: Comment to hide

        Returns:
            The hidden comment

        Raises:
            NotFoundError: If the comment does not exist
        """
        with logfire.span("moderation_service.hide", comment_id=str(comment_id)):
            async with self.transactions.atomic():
                comment = await self.comment_repository.find_by_id_for_update(
                    comment_id
                )
                if not comment:
                    logfire.warn("Hide non-existent comment", comment_id=str(comment_id))
                    raise NotFoundError("Comment", str(comment_id))
                if comment.hidden:
                    logfire.info("Comment already hidden", comment_id=str(comment_id))
                    return comment
                hidden = await self.comment_repository.set_hidden(comment_id)

            if not hidden:
                raise NotFoundError("Comment", str(comment_id))
            logfire.info("Comment hidden", comment_id=str(comment_id))
            return hidden
