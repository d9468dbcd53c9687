"""Report entity.

Reports flag a comment for moderator review. They are append-only.
"""

from datetime import datetime

from pydantic import Field

from colloquy.domain.model.comment import Comment
from colloquy.domain.model.common import DomainModel
from colloquy.domain.value import CommentId, ReportId, UserId


class Report(DomainModel):
    """Report entity.

    A reporter may file several reports on the same comment; nothing is
    deduplicated at write time.
    """

    id: ReportId
    comment_id: CommentId
    reporter_id: UserId
    reason: str = Field(min_length=1, max_length=1000)
    created_at: datetime = Field(default_factory=datetime.now)


class ReportedComment(DomainModel):
    """Comment annotated with its live report count (moderation listing)."""

    comment: Comment
    report_count: int = Field(ge=1)
