"""Cast vote use case."""

from pydantic import BaseModel

from colloquy.application.usecase.comment.node import CommentNodeResponse
from colloquy.domain.service import ReputationService, VoteOutcome
from colloquy.domain.value import CommentId, UserId

from ..base import BaseUseCase, parse_id


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    comment_id: str  # UUID string
    user_id: str  # User ID from authenticated principal
    value: int  # +1 or -1


class VoteResponse(BaseModel):
    """Vote response: the updated node, the caller's vote and the delta."""

    comment: CommentNodeResponse
    user_vote: int
    delta: int

    @classmethod
    def from_outcome(cls, outcome: VoteOutcome) -> "VoteResponse":
        """Build a response from a domain vote outcome."""
        return cls(
            comment=CommentNodeResponse.from_comment(outcome.comment, outcome.user_vote),
            user_vote=int(outcome.user_vote) if outcome.user_vote else 0,
            delta=outcome.delta,
        )


class CastVoteUseCase(BaseUseCase):
    """Use case for casting or changing a vote on a comment."""

    def __init__(self, reputation_service: ReputationService) -> None:
        """Initialize cast vote use case.

        Args:
            reputation_service: Reputation domain service
        """
        self.reputation_service = reputation_service

    async def execute(self, request: CastVoteRequest) -> VoteResponse:
        """Execute cast vote flow.

        Args:
            request: Cast vote request

        Returns:
            Vote response with the new rating score

        Raises:
            ValidationError: If ids are malformed or the value is not +1/-1
            NotFoundError: If the comment does not exist
            ConflictError: If the write could not be serialized after retrying
        """
        comment_id = CommentId(parse_id(request.comment_id, "comment_id"))
        user_id = UserId(parse_id(request.user_id, "user_id"))

        outcome = await self.reputation_service.cast_or_change_vote(
            user_id, comment_id, request.value
        )
        return VoteResponse.from_outcome(outcome)
