"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .content import InMemoryContentRepository
from .database import InMemoryDatabase, InMemoryTransactionManager
from .report import InMemoryReportRepository
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryContentRepository",
    "InMemoryDatabase",
    "InMemoryReportRepository",
    "InMemoryTransactionManager",
    "InMemoryVoteRepository",
]
