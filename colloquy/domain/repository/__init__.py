"""Repository interfaces for Colloquy domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from colloquy.domain.repository.comment import CommentRepository
from colloquy.domain.repository.content import ContentRepository
from colloquy.domain.repository.report import ReportRepository
from colloquy.domain.repository.transaction import TransactionManager
from colloquy.domain.repository.vote import VoteRepository

__all__ = [
    "CommentRepository",
    "ContentRepository",
    "ReportRepository",
    "TransactionManager",
    "VoteRepository",
]
