"""Remove vote use case."""

from pydantic import BaseModel

from colloquy.domain.service import ReputationService
from colloquy.domain.value import CommentId, UserId

from ..base import BaseUseCase, parse_id
from .cast_vote import VoteResponse


class RemoveVoteRequest(BaseModel):
    """Remove vote request."""

    comment_id: str  # UUID string
    user_id: str  # User ID from authenticated principal


class RemoveVoteUseCase(BaseUseCase):
    """Use case for removing a vote from a comment."""

    def __init__(self, reputation_service: ReputationService) -> None:
        """Initialize remove vote use case.

        Args:
            reputation_service: Reputation domain service
        """
        self.reputation_service = reputation_service

    async def execute(self, request: RemoveVoteRequest) -> VoteResponse:
        """Execute remove vote flow.

        Args:
            request: Remove vote request

        Returns:
            Vote response with ``user_vote`` 0

        Raises:
            ValidationError: If ids are malformed
            NotFoundError: If the comment does not exist
            NoExistingVoteError: If the user has no vote on the comment
        """
        comment_id = CommentId(parse_id(request.comment_id, "comment_id"))
        user_id = UserId(parse_id(request.user_id, "user_id"))

        outcome = await self.reputation_service.remove_vote(user_id, comment_id)
        return VoteResponse.from_outcome(outcome)
