"""Domain model entities for Colloquy."""

from colloquy.domain.model.comment import Comment
from colloquy.domain.model.content import Content
from colloquy.domain.model.report import Report, ReportedComment
from colloquy.domain.model.vote import Vote

__all__ = [
    "Comment",
    "Content",
    "Report",
    "ReportedComment",
    "Vote",
]
