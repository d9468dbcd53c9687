"""PostgreSQL repository implementations."""

from colloquy.persistence.repository.comment import PostgresCommentRepository
from colloquy.persistence.repository.content import PostgresContentRepository
from colloquy.persistence.repository.report import PostgresReportRepository
from colloquy.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresCommentRepository",
    "PostgresContentRepository",
    "PostgresReportRepository",
    "PostgresVoteRepository",
]
