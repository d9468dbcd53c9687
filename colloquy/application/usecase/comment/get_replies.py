"""Get replies use case."""

from pydantic import BaseModel

from colloquy.domain.service import CommentService, ReputationService
from colloquy.domain.value import CommentId, UserId

from ..base import BaseUseCase, parse_id
from .get_comments import parse_order
from .node import CommentNodeResponse


class GetRepliesRequest(BaseModel):
    """Get replies request."""

    comment_id: str  # UUID string
    order: str = "recency"
    viewer_id: str | None = None  # Authenticated reader (optional)


class GetRepliesResponse(BaseModel):
    """Get replies response."""

    comment_id: str
    replies: list[CommentNodeResponse]


class GetRepliesUseCase(BaseUseCase):
    """Use case for loading one further level of a thread."""

    def __init__(
        self,
        comment_service: CommentService,
        reputation_service: ReputationService,
    ) -> None:
        """Initialize get replies use case.

        Args:
            comment_service: Comment domain service
            reputation_service: Reputation service for reader vote state
        """
        self.comment_service = comment_service
        self.reputation_service = reputation_service

    async def execute(self, request: GetRepliesRequest) -> GetRepliesResponse:
        """Execute get replies flow.

        Args:
            request: Get replies request

        Returns:
            Direct visible replies, without their own replies

        Raises:
            ValidationError: If ids or order are invalid
            NotFoundError: If the comment does not exist
        """
        comment_id = CommentId(parse_id(request.comment_id, "comment_id"))
        order = parse_order(request.order)

        replies = await self.comment_service.list_replies(comment_id, order=order)

        user_votes = {}
        if request.viewer_id and replies:
            viewer_id = UserId(parse_id(request.viewer_id, "viewer_id"))
            user_votes = await self.reputation_service.get_user_votes(
                viewer_id, [reply.id for reply in replies]
            )

        return GetRepliesResponse(
            comment_id=str(comment_id),
            replies=[
                CommentNodeResponse.from_comment(reply, user_votes.get(reply.id))
                for reply in replies
            ],
        )
