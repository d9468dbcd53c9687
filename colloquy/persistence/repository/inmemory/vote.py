"""In-memory vote repository for testing."""

from datetime import datetime
from typing import Optional, Sequence

from colloquy.domain.error import ConflictError
from colloquy.domain.model.vote import Vote
from colloquy.domain.repository.vote import VoteRepository
from colloquy.domain.value import CommentId, UserId, VoteValue

from .database import InMemoryDatabase


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self, database: InMemoryDatabase | None = None) -> None:
        self.database = database or InMemoryDatabase()

    @property
    def _votes(self) -> dict[tuple[UserId, CommentId], Vote]:
        return self.database.votes

    async def find(self, user_id: UserId, comment_id: CommentId) -> Optional[Vote]:
        """Find a user's vote on a comment."""
        return self._votes.get((user_id, comment_id))

    async def find_by_comment(self, comment_id: CommentId) -> list[Vote]:
        """Find all votes on a comment."""
        return [v for v in self._votes.values() if v.comment_id == comment_id]

    async def find_by_user_and_comments(
        self,
        user_id: UserId,
        comment_ids: Sequence[CommentId],
    ) -> list[Vote]:
        """Find a user's votes on multiple comments."""
        return [
            self._votes[(user_id, cid)]
            for cid in comment_ids
            if (user_id, cid) in self._votes
        ]

    async def save(self, vote: Vote) -> Vote:
        """Insert a vote, rejecting duplicates like the primary key does."""
        key = (vote.user_id, vote.comment_id)
        if key in self._votes:
            raise ConflictError(
                f"Vote already exists for user {vote.user_id} on {vote.comment_id}"
            )
        self._votes[key] = vote
        return vote

    async def update_value(
        self, user_id: UserId, comment_id: CommentId, value: VoteValue
    ) -> Optional[Vote]:
        """Change the value of an existing vote in place."""
        vote = self._votes.get((user_id, comment_id))
        if not vote:
            return None
        updated = vote.model_copy(update={"value": value, "updated_at": datetime.now()})
        self._votes[(user_id, comment_id)] = updated
        return updated

    async def delete(self, user_id: UserId, comment_id: CommentId) -> bool:
        """Delete a user's vote on a comment."""
        return self._votes.pop((user_id, comment_id), None) is not None

    async def sum_for_comment(self, comment_id: CommentId) -> int:
        """Sum the values of all live votes on a comment."""
        return sum(
            int(v.value) for v in self._votes.values() if v.comment_id == comment_id
        )
