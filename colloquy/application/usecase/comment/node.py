"""Comment node response model shared by comment and vote use cases."""

from datetime import datetime

from pydantic import BaseModel, Field

from colloquy.domain.model import Comment
from colloquy.domain.service import CommentNode
from colloquy.domain.value import VoteValue


class CommentNodeResponse(BaseModel):
    """Comment with its loaded replies.

    ``user_vote`` is the caller's own vote: 1, -1, or 0 for none.
    """

    comment_id: str
    content_id: str
    author_id: str
    author_handle: str
    content: str
    parent_id: str | None
    rating_score: int
    hidden: bool
    created_at: datetime
    user_vote: int = 0
    replies: list["CommentNodeResponse"] = Field(default_factory=list)

    @classmethod
    def from_comment(
        cls, comment: Comment, user_vote: VoteValue | None = None
    ) -> "CommentNodeResponse":
        """Build a leaf node from a comment."""
        return cls(
            comment_id=str(comment.id),
            content_id=str(comment.content_id),
            author_id=str(comment.author_id),
            author_handle=str(comment.author_handle),
            content=comment.content,
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            rating_score=comment.rating_score,
            hidden=comment.hidden,
            created_at=comment.created_at,
            user_vote=int(user_vote) if user_vote else 0,
        )

    @classmethod
    def from_node(cls, node: CommentNode) -> "CommentNodeResponse":
        """Build a node and its loaded subtree from an assembled forest node."""
        response = cls.from_comment(node.comment, node.user_vote)
        response.replies = [cls.from_node(child) for child in node.replies]
        return response
