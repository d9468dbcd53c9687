"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from colloquy.domain.model.comment import Comment
from colloquy.domain.value import CommentId, CommentOrder, ContentId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.

    Every listing method excludes hidden comments unless ``include_hidden``
    is set; only the moderation path sets it.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID, hidden or not.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_id_for_update(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID and lock its row until the transaction ends.

        Concurrent writers on the same comment serialize behind this lock.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_top_level(
        self,
        content_id: ContentId,
        order: CommentOrder = CommentOrder.RECENCY,
        limit: int = 10,
        offset: int = 0,
        include_hidden: bool = False,
    ) -> List[Comment]:
        """Find one page of top-level comments for a content item.

        Args:
            content_id: The content item
            order: Ordering criterion
            limit: Maximum number of comments to return
            offset: Number of comments to skip
            include_hidden: Whether to include hidden comments

        Returns:
            Ordered page of top-level comments
        """
        pass

    @abstractmethod
    async def count_top_level(
        self, content_id: ContentId, include_hidden: bool = False
    ) -> int:
        """Count top-level comments for a content item.

        Args:
            content_id: The content item
            include_hidden: Whether to include hidden comments

        Returns:
            Number of top-level comments
        """
        pass

    @abstractmethod
    async def find_children(
        self,
        parent_ids: Sequence[CommentId],
        order: CommentOrder = CommentOrder.RECENCY,
        include_hidden: bool = False,
    ) -> List[Comment]:
        """Find the direct replies of one or more comments (batch query).

        Args:
            parent_ids: Parent comment IDs
            order: Ordering criterion, applied across the whole result
            include_hidden: Whether to include hidden comments

        Returns:
            Ordered list of replies; callers group them by parent_id
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment.

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def set_rating_score(
        self, comment_id: CommentId, rating_score: int
    ) -> Optional[Comment]:
        """Persist a recomputed rating score.

        Args:
            comment_id: The comment ID
            rating_score: New score (sum of the vote ledger)

        Returns:
            Updated comment, None if it does not exist
        """
        pass

    @abstractmethod
    async def set_hidden(self, comment_id: CommentId) -> Optional[Comment]:
        """Mark a comment hidden.

        Args:
            comment_id: The comment ID

        Returns:
            Updated comment, None if it does not exist
        """
        pass
