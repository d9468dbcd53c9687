"""Create comment use case."""

from pydantic import BaseModel

from colloquy.domain.service import CommentService
from colloquy.domain.value import CommentId, ContentId, UserId
from colloquy.domain.value.types import Handle

from ..base import BaseUseCase, parse_id
from .node import CommentNodeResponse


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    content_id: str  # UUID string
    author_id: str  # User ID from authenticated principal
    author_handle: str  # Handle from authenticated principal
    content: str
    parent_id: str | None = None  # Parent comment ID for replies


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    comment: CommentNodeResponse


class CreateCommentUseCase(BaseUseCase):
    """Use case for creating a comment or a reply."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Args:
            request: Create comment request

        Returns:
            Created comment as a node without replies

        Raises:
            ValidationError: If ids are malformed or the text is invalid
            NotFoundError: If the content item or parent is missing
        """
        content_id = ContentId(parse_id(request.content_id, "content_id"))
        author_id = UserId(parse_id(request.author_id, "author_id"))
        parent_id = (
            CommentId(parse_id(request.parent_id, "parent_id"))
            if request.parent_id
            else None
        )

        comment = await self.comment_service.create_comment(
            content_id=content_id,
            author_id=author_id,
            author_handle=Handle(request.author_handle),
            content=request.content,
            parent_id=parent_id,
        )

        return CreateCommentResponse(comment=CommentNodeResponse.from_comment(comment))
