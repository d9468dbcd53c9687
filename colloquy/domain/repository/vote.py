"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from colloquy.domain.model.vote import Vote
from colloquy.domain.value import CommentId, UserId, VoteValue


class VoteRepository(ABC):
    """Repository for the vote ledger.

    Defines the contract for vote persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find(self, user_id: UserId, comment_id: CommentId) -> Optional[Vote]:
        """Find a user's vote on a comment.

        Args:
            user_id: The user's ID
            comment_id: The comment's ID

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_comment(self, comment_id: CommentId) -> List[Vote]:
        """Find all votes on a comment.

        Args:
            comment_id: The comment's ID

        Returns:
            List of votes on the comment
        """
        pass

    @abstractmethod
    async def find_by_user_and_comments(
        self,
        user_id: UserId,
        comment_ids: Sequence[CommentId],
    ) -> List[Vote]:
        """Find a user's votes on multiple comments (batch query).

        Args:
            user_id: The user's ID
            comment_ids: Comment IDs to check

        Returns:
            List of votes by the user on the specified comments
        """
        pass

    @abstractmethod
    async def save(self, vote: Vote) -> Vote:
        """Insert a vote.

        Args:
            vote: The vote to save

        Returns:
            The saved vote

        Raises:
            ConflictError: If a vote already exists for this user/comment
        """
        pass

    @abstractmethod
    async def update_value(
        self, user_id: UserId, comment_id: CommentId, value: VoteValue
    ) -> Optional[Vote]:
        """Change the value of an existing vote in place.

        Args:
            user_id: The user's ID
            comment_id: The comment's ID
            value: New vote value

        Returns:
            Updated vote, None if no vote existed
        """
        pass

    @abstractmethod
    async def delete(self, user_id: UserId, comment_id: CommentId) -> bool:
        """Delete a user's vote on a comment.

        Args:
            user_id: The user's ID
            comment_id: The comment's ID

        Returns:
            True if a vote was deleted, False if no vote existed
        """
        pass

    @abstractmethod
    async def sum_for_comment(self, comment_id: CommentId) -> int:
        """Sum the values of all live votes on a comment.

        Args:
            comment_id: The comment's ID

        Returns:
            Sum of vote values (0 when there are none)
        """
        pass
