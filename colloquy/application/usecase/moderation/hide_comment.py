"""Hide comment use case."""

from pydantic import BaseModel

from colloquy.application.usecase.comment.node import CommentNodeResponse
from colloquy.domain.service import ModerationService
from colloquy.domain.value import CommentId, UserRole

from ..base import BaseUseCase, parse_id, require_moderator


class HideCommentRequest(BaseModel):
    """Hide comment request."""

    comment_id: str  # UUID string
    user_id: str  # Moderator ID from authenticated principal
    role: UserRole


class HideCommentResponse(BaseModel):
    """Hide comment response."""

    comment: CommentNodeResponse


class HideCommentUseCase(BaseUseCase):
    """Use case for hiding a comment from standard listings."""

    def __init__(self, moderation_service: ModerationService) -> None:
        """Initialize hide comment use case.

        Args:
            moderation_service: Moderation domain service
        """
        self.moderation_service = moderation_service

    async def execute(self, request: HideCommentRequest) -> HideCommentResponse:
        """Execute hide comment flow.

        Raises:
            NotAuthorizedError: If the caller is not a moderator
            ValidationError: If the comment id is malformed
            NotFoundError: If the comment does not exist
        """
        require_moderator(request.user_id, request.role, "hide comments")
        comment_id = CommentId(parse_id(request.comment_id, "comment_id"))

        comment = await self.moderation_service.hide(comment_id)
        return HideCommentResponse(comment=CommentNodeResponse.from_comment(comment))
