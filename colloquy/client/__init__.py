"""Client-side cache and API client for comment threads."""

from .api import (
    ClientError,
    CommentsAPIError,
    CommentsClient,
    ForestPage,
    OutcomeUnknownError,
    TransportError,
    VoteResult,
)
from .reducer import (
    CachedComment,
    Forest,
    ThreadState,
    insert_reply,
    patch_hidden,
    patch_vote,
    visible,
)
from .session import ThreadSession

__all__ = [
    "CachedComment",
    "ClientError",
    "CommentsAPIError",
    "CommentsClient",
    "Forest",
    "ForestPage",
    "OutcomeUnknownError",
    "ThreadSession",
    "ThreadState",
    "TransportError",
    "VoteResult",
    "insert_reply",
    "patch_hidden",
    "patch_vote",
    "visible",
]
