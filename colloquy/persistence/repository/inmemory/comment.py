"""In-memory comment repository for testing."""

from typing import Optional, Sequence

from colloquy.domain.model.comment import Comment
from colloquy.domain.repository.comment import CommentRepository
from colloquy.domain.value import CommentId, CommentOrder, ContentId

from .database import InMemoryDatabase


def sort_comments(comments: list[Comment], order: CommentOrder) -> list[Comment]:
    """Sort comments the way the SQL ORDER BY does."""
    # Newest first is the tie break for every ordering; sorts are stable
    ordered = sorted(comments, key=lambda c: c.created_at, reverse=True)
    if order == CommentOrder.RATING_HIGH:
        ordered.sort(key=lambda c: c.rating_score, reverse=True)
    elif order == CommentOrder.RATING_LOW:
        ordered.sort(key=lambda c: c.rating_score)
    return ordered


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self, database: InMemoryDatabase | None = None) -> None:
        self.database = database or InMemoryDatabase()

    @property
    def _comments(self) -> dict[CommentId, Comment]:
        return self.database.comments

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_id_for_update(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID (the transaction lock covers the row)."""
        return self._comments.get(comment_id)

    async def find_top_level(
        self,
        content_id: ContentId,
        order: CommentOrder = CommentOrder.RECENCY,
        limit: int = 10,
        offset: int = 0,
        include_hidden: bool = False,
    ) -> list[Comment]:
        """Find one page of top-level comments for a content item."""
        comments = [
            c
            for c in self._comments.values()
            if c.content_id == content_id and c.parent_id is None
        ]

        # Filter hidden
        if not include_hidden:
            comments = [c for c in comments if not c.hidden]

        return sort_comments(comments, order)[offset : offset + limit]

    async def count_top_level(
        self, content_id: ContentId, include_hidden: bool = False
    ) -> int:
        """Count top-level comments for a content item."""
        return sum(
            1
            for c in self._comments.values()
            if c.content_id == content_id
            and c.parent_id is None
            and (include_hidden or not c.hidden)
        )

    async def find_children(
        self,
        parent_ids: Sequence[CommentId],
        order: CommentOrder = CommentOrder.RECENCY,
        include_hidden: bool = False,
    ) -> list[Comment]:
        """Find direct replies of one or more comments."""
        parents = set(parent_ids)
        comments = [c for c in self._comments.values() if c.parent_id in parents]

        # Filter hidden
        if not include_hidden:
            comments = [c for c in comments if not c.hidden]

        return sort_comments(comments, order)

    async def save(self, comment: Comment) -> Comment:
        """Insert a comment."""
        self._comments[comment.id] = comment
        return comment

    async def set_rating_score(
        self, comment_id: CommentId, rating_score: int
    ) -> Optional[Comment]:
        """Persist a recomputed rating score."""
        comment = self._comments.get(comment_id)
        if not comment:
            return None
        # Create updated comment (since comments are immutable)
        updated = comment.model_copy(update={"rating_score": rating_score})
        self._comments[comment_id] = updated
        return updated

    async def set_hidden(self, comment_id: CommentId) -> Optional[Comment]:
        """Mark a comment hidden."""
        comment = self._comments.get(comment_id)
        if not comment:
            return None
        updated = comment.model_copy(update={"hidden": True})
        self._comments[comment_id] = updated
        return updated
