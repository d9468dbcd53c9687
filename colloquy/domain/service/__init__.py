"""Domain services."""

from .base import Service
from .comment_service import CommentService
from .jwt_service import JWTService
from .moderation_service import ModerationService, ReportedPage
from .reputation_service import ReputationService, VoteOutcome
from .thread_service import CommentNode, Forest, ThreadService

__all__ = [
    "CommentNode",
    "CommentService",
    "Forest",
    "JWTService",
    "ModerationService",
    "ReportedPage",
    "ReputationService",
    "Service",
    "ThreadService",
    "VoteOutcome",
]
