"""Thread domain service (tree assembler)."""

import math
from dataclasses import dataclass, field

import logfire

from colloquy.domain.model.comment import Comment
from colloquy.domain.value import CommentId, CommentOrder, ContentId, UserId, VoteValue

from .base import Service
from .comment_service import CommentService
from .reputation_service import ReputationService


@dataclass
class CommentNode:
    """Node in an assembled comment forest.

    Holds a comment, its already-ordered replies and, for authenticated
    readers, the reader's own vote on the comment.
    """

    comment: Comment
    replies: list["CommentNode"] = field(default_factory=list)
    user_vote: VoteValue | None = None


@dataclass
class Forest:
    """One page of top-level comments with nested replies."""

    nodes: list[CommentNode]
    total: int
    page: int
    page_size: int
    total_pages: int


class ThreadService(Service):
    """Materializes the visible comment forest of a content item.

    Expansion is eager but bounded: top-level comments, their replies in the
    selected order, and one further level in recency order. Deeper levels
    are loaded with ``CommentService.list_replies``.
    """

    def __init__(
        self,
        comment_service: CommentService,
        reputation_service: ReputationService,
    ) -> None:
        """Initialize thread service.

        Args:
            comment_service: Comment domain service
            reputation_service: Reputation service for reader vote state
        """
        self.comment_service = comment_service
        self.reputation_service = reputation_service

    async def build_forest(
        self,
        content_id: ContentId,
        order: CommentOrder = CommentOrder.RECENCY,
        page: int = 1,
        page_size: int | None = None,
        viewer_id: UserId | None = None,
    ) -> Forest:
        """Build one page of the comment forest for a content item.

        Args:
            content_id: Content item ID
            order: Ordering for top-level comments and their direct replies
            page: 1-based page number
            page_size: Top-level comments per page
            viewer_id: Authenticated reader, to annotate their own votes

        Returns:
            Forest with pagination metadata (empty nodes when no comments)
        """
        with logfire.span(
            "thread_service.build_forest",
            content_id=str(content_id),
            order=order.value,
            page=page,
        ):
            top_level, total = await self.comment_service.list_top_level(
                content_id, page=page, page_size=page_size, order=order
            )
            if page_size is None:
                page_size = self.comment_service.settings.default_page_size
            total_pages = math.ceil(total / page_size)

            if not top_level:
                return Forest(
                    nodes=[],
                    total=total,
                    page=page,
                    page_size=page_size,
                    total_pages=total_pages,
                )

            replies = await self.comment_service.list_replies_for(
                [c.id for c in top_level], order=order
            )
            reply_ids = [r.id for group in replies.values() for r in group]
            nested = await self.comment_service.list_replies_for(
                reply_ids, order=CommentOrder.RECENCY
            )

            user_votes: dict[CommentId, VoteValue] = {}
            if viewer_id:
                all_ids = (
                    [c.id for c in top_level]
                    + reply_ids
                    + [r.id for group in nested.values() for r in group]
                )
                user_votes = await self.reputation_service.get_user_votes(
                    viewer_id, all_ids
                )

            def to_node(comment: Comment, children: list[CommentNode]) -> CommentNode:
                return CommentNode(
                    comment=comment,
                    replies=children,
                    user_vote=user_votes.get(comment.id),
                )

            nodes = [
                to_node(
                    top,
                    [
                        to_node(reply, [to_node(leaf, []) for leaf in nested[reply.id]])
                        for reply in replies[top.id]
                    ],
                )
                for top in top_level
            ]

            logfire.info(
                "Forest built",
                content_id=str(content_id),
                top_level=len(nodes),
                replies=len(reply_ids),
                total=total,
            )
            return Forest(
                nodes=nodes,
                total=total,
                page=page,
                page_size=page_size,
                total_pages=total_pages,
            )
