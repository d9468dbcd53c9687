"""Comment domain service (comment store)."""

from datetime import datetime
from typing import Sequence
from uuid import uuid4

import logfire

from colloquy.config import CommentSettings
from colloquy.domain.error import NotFoundError, ValidationError
from colloquy.domain.model.comment import Comment
from colloquy.domain.repository import (
    CommentRepository,
    ContentRepository,
    TransactionManager,
)
from colloquy.domain.value import CommentId, CommentOrder, ContentId, UserId
from colloquy.domain.value.types import Handle

from .base import Service


class CommentService(Service):
    """Domain service for creating and listing comments."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        content_repository: ContentRepository,
        transactions: TransactionManager,
        settings: CommentSettings,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            content_repository: Content repository (existence check)
            transactions: Transaction manager
            settings: Comment settings
        """
        self.comment_repository = comment_repository
        self.content_repository = content_repository
        self.transactions = transactions
        self.settings = settings

    async def create_comment(
        self,
        content_id: ContentId,
        author_id: UserId,
        author_handle: Handle,
        content: str,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Create a comment on a content item or reply to another comment.

        Args:
            content_id: Content item ID
            author_id: Author user ID
            author_handle: Author handle
            content: Comment text, stored trimmed
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            Created comment

        Raises:
            ValidationError: If the text is empty or too long, or the parent
                belongs to another content item
            NotFoundError: If the content item or parent comment is missing
        """
        with logfire.span(
            "comment_service.create_comment",
            content_id=str(content_id),
            author_id=str(author_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            text = content.strip()
            if not text:
                raise ValidationError("content", "Content cannot be empty")
            if len(text) > self.settings.max_length:
                raise ValidationError(
                    "content",
                    f"Content must be at most {self.settings.max_length} characters",
                )

            content_item = await self.content_repository.find_by_id(content_id)
            if not content_item or not content_item.accepts_comments:
                logfire.warn("Comment on missing content", content_id=str(content_id))
                raise NotFoundError("Content", str(content_id))

            if parent_id:
                parent = await self.comment_repository.find_by_id(parent_id)
                if not parent or parent.hidden:
                    logfire.warn(
                        "Parent comment not found",
                        parent_id=str(parent_id),
                        content_id=str(content_id),
                    )
                    raise NotFoundError("Comment", str(parent_id))
                if parent.content_id != content_id:
                    logfire.warn(
                        "Parent comment does not belong to content",
                        parent_id=str(parent_id),
                        parent_content_id=str(parent.content_id),
                        target_content_id=str(content_id),
                    )
                    raise ValidationError(
                        "parent_id", "Parent comment does not belong to this content"
                    )

            comment = Comment(
                id=CommentId(uuid4()),
                content_id=content_id,
                author_id=author_id,
                author_handle=author_handle,
                content=text,
                parent_id=parent_id,
                rating_score=0,
                hidden=False,
                created_at=datetime.now(),
            )

            async with self.transactions.atomic():
                saved = await self.comment_repository.save(comment)

            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                content_id=str(content_id),
                top_level=saved.is_top_level,
            )
            return saved

    async def get_comment(self, comment_id: CommentId) -> Comment:
        """Get a comment by ID.

        Args:
            comment_id: Comment ID

        Returns:
            The comment (hidden or not)

        Raises:
            NotFoundError: If the comment does not exist
        """
        with logfire.span("comment_service.get_comment", comment_id=str(comment_id)):
            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                logfire.warn("Comment not found", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))
            return comment

    async def list_top_level(
        self,
        content_id: ContentId,
        page: int = 1,
        page_size: int | None = None,
        order: CommentOrder = CommentOrder.RECENCY,
    ) -> tuple[list[Comment], int]:
        """List one page of visible top-level comments.

        Args:
            content_id: Content item ID
            page: 1-based page number
            page_size: Comments per page (settings default when None)
            order: Ordering criterion

        Returns:
            Tuple of (page of comments, total visible top-level comments)

        Raises:
            ValidationError: If page or page_size is out of range
        """
        if page_size is None:
            page_size = self.settings.default_page_size
        self._validate_page(page, page_size)

        with logfire.span(
            "comment_service.list_top_level",
            content_id=str(content_id),
            page=page,
            page_size=page_size,
            order=order.value,
        ):
            total = await self.comment_repository.count_top_level(content_id)
            comments = await self.comment_repository.find_top_level(
                content_id,
                order=order,
                limit=page_size,
                offset=(page - 1) * page_size,
            )
            logfire.info(
                "Top-level comments listed",
                content_id=str(content_id),
                count=len(comments),
                total=total,
            )
            return comments, total

    async def list_replies(
        self,
        comment_id: CommentId,
        order: CommentOrder = CommentOrder.RECENCY,
        include_hidden: bool = False,
    ) -> list[Comment]:
        """List the direct replies of a comment.

        A hidden comment's replies are unreachable from standard listings,
        so the standard path returns nothing for a hidden parent.

        Args:
            comment_id: Parent comment ID
            order: Ordering criterion
            include_hidden: Moderation path, returns hidden replies too

        Returns:
            Ordered replies

        Raises:
            NotFoundError: If the parent comment does not exist
        """
        with logfire.span(
            "comment_service.list_replies",
            comment_id=str(comment_id),
            order=order.value,
            include_hidden=include_hidden,
        ):
            parent = await self.get_comment(comment_id)
            if parent.hidden and not include_hidden:
                logfire.info(
                    "Replies of hidden comment omitted", comment_id=str(comment_id)
                )
                return []
            return await self.comment_repository.find_children(
                [comment_id], order=order, include_hidden=include_hidden
            )

    async def list_replies_for(
        self,
        parent_ids: Sequence[CommentId],
        order: CommentOrder = CommentOrder.RECENCY,
    ) -> dict[CommentId, list[Comment]]:
        """List visible replies of many comments in one query.

        Args:
            parent_ids: Parent comment IDs
            order: Ordering criterion within each parent

        Returns:
            Mapping parent ID -> ordered replies (every parent ID present)
        """
        grouped: dict[CommentId, list[Comment]] = {pid: [] for pid in parent_ids}
        if not parent_ids:
            return grouped

        replies = await self.comment_repository.find_children(parent_ids, order=order)
        for reply in replies:
            if reply.parent_id in grouped:
                grouped[reply.parent_id].append(reply)
        return grouped

    def _validate_page(self, page: int, page_size: int) -> None:
        if page < 1:
            raise ValidationError("page", "Page must be at least 1")
        if page_size < 1 or page_size > self.settings.max_page_size:
            raise ValidationError(
                "page_size",
                f"Page size must be between 1 and {self.settings.max_page_size}",
            )
