"""Domain value objects for Colloquy."""

from colloquy.domain.value.identifiers import (
    CommentId,
    ContentId,
    ReportId,
    UserId,
)
from colloquy.domain.value.types import (
    CommentOrder,
    Handle,
    Principal,
    UserRole,
    VoteValue,
)

__all__ = [
    # Identifiers
    "UserId",
    "ContentId",
    "CommentId",
    "ReportId",
    # Types
    "CommentOrder",
    "Handle",
    "Principal",
    "UserRole",
    "VoteValue",
]
