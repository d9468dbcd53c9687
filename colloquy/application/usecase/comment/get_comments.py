"""Get comments use case."""

import logfire
from pydantic import BaseModel

from colloquy.domain.error import ConflictError, StoreUnavailableError, ValidationError
from colloquy.domain.service import ThreadService
from colloquy.domain.value import CommentOrder, ContentId, UserId

from ..base import BaseUseCase, parse_id
from .node import CommentNodeResponse


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    content_id: str  # UUID string
    order: str = CommentOrder.RECENCY.value
    page: int = 1
    page_size: int | None = None
    viewer_id: str | None = None  # Authenticated reader (optional)


class GetCommentsResponse(BaseModel):
    """Get comments response.

    ``error`` is set when the listing could not be read; the forest is then
    empty.
    """

    content_id: str
    comments: list[CommentNodeResponse]
    total: int
    page: int
    page_size: int
    total_pages: int
    error: str | None = None


def parse_order(value: str) -> CommentOrder:
    """Parse an ordering name, rejecting unknown values."""
    try:
        return CommentOrder(value)
    except ValueError:
        allowed = ", ".join(o.value for o in CommentOrder)
        raise ValidationError("order", f"Order must be one of: {allowed}")


class GetCommentsUseCase(BaseUseCase):
    """Use case for reading the comment forest of a content item."""

    def __init__(self, thread_service: ThreadService) -> None:
        """Initialize get comments use case.

        Args:
            thread_service: Tree assembly domain service
        """
        self.thread_service = thread_service

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Store failures degrade to an empty forest with an error indicator.

        Args:
            request: Get comments request

        Returns:
            Forest page with pagination metadata and reader vote state

        Raises:
            ValidationError: If ids, order or pagination are invalid
        """
        content_id = ContentId(parse_id(request.content_id, "content_id"))
        order = parse_order(request.order)
        viewer_id = (
            UserId(parse_id(request.viewer_id, "viewer_id"))
            if request.viewer_id
            else None
        )

        try:
            forest = await self.thread_service.build_forest(
                content_id,
                order=order,
                page=request.page,
                page_size=request.page_size,
                viewer_id=viewer_id,
            )
        except (StoreUnavailableError, ConflictError) as e:
            logfire.error(
                "Comment listing failed", content_id=str(content_id), error=str(e)
            )
            page_size = request.page_size
            if page_size is None:
                page_size = (
                    self.thread_service.comment_service.settings.default_page_size
                )
            return GetCommentsResponse(
                content_id=str(content_id),
                comments=[],
                total=0,
                page=request.page,
                page_size=page_size,
                total_pages=0,
                error="Comments are temporarily unavailable",
            )

        return GetCommentsResponse(
            content_id=str(content_id),
            comments=[CommentNodeResponse.from_node(node) for node in forest.nodes],
            total=forest.total,
            page=forest.page,
            page_size=forest.page_size,
            total_pages=forest.total_pages,
        )
