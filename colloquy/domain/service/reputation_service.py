"""Reputation domain service (vote aggregation)."""

from dataclasses import dataclass
from datetime import datetime
from typing import Awaitable, Callable, Sequence

import logfire

from colloquy.config import ReputationSettings
from colloquy.domain.error import (
    ConflictError,
    NoExistingVoteError,
    NotFoundError,
    ValidationError,
)
from colloquy.domain.model.comment import Comment
from colloquy.domain.model.vote import Vote
from colloquy.domain.repository import (
    CommentRepository,
    TransactionManager,
    VoteRepository,
)
from colloquy.domain.value import CommentId, UserId, VoteValue

from .base import Service


@dataclass
class VoteOutcome:
    """Result of a vote mutation.

    Carries the caller's own resulting vote so clients can render their
    button state without a second read.
    """

    comment: Comment
    user_vote: VoteValue | None
    delta: int


class ReputationService(Service):
    """Applies votes to the ledger and keeps rating scores consistent.

    Each mutation runs in one atomic unit that locks the comment row,
    writes the vote row and persists the score recomputed from the ledger.
    Two writers on the same comment therefore serialize in the store.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        vote_repository: VoteRepository,
        transactions: TransactionManager,
        settings: ReputationSettings,
    ) -> None:
        """Initialize reputation service.

        Args:
            comment_repository: Comment repository
            vote_repository: Vote repository
            transactions: Transaction manager
            settings: Reputation settings (conflict retries)
        """
        self.comment_repository = comment_repository
        self.vote_repository = vote_repository
        self.transactions = transactions
        self.settings = settings

    async def cast_or_change_vote(
        self, user_id: UserId, comment_id: CommentId, value: int
    ) -> VoteOutcome:
        """Cast a vote, or change an existing vote's value.

        Same value as the existing vote is a no-op (delta 0).

        Args:
            user_id: Voting user
            comment_id: Comment ID
            value: +1 or -1

        Returns:
            Vote outcome with the updated comment

        Raises:
            ValidationError: If value is not +1 or -1
            NotFoundError: If the comment does not exist
            ConflictError: If the write still conflicts after retrying
        """
        vote_value = self._parse_value(value)

        with logfire.span(
            "reputation_service.cast_or_change_vote",
            comment_id=str(comment_id),
            user_id=str(user_id),
            value=int(vote_value),
        ):
            outcome = await self._run_atomic(
                "cast_or_change_vote",
                lambda: self._cast_or_change(user_id, comment_id, vote_value),
            )
            logfire.info(
                "Vote applied",
                comment_id=str(comment_id),
                user_id=str(user_id),
                delta=outcome.delta,
                rating_score=outcome.comment.rating_score,
            )
            return outcome

    async def remove_vote(self, user_id: UserId, comment_id: CommentId) -> VoteOutcome:
        """Remove a user's vote from a comment.

        Args:
            user_id: Voting user
            comment_id: Comment ID

        Returns:
            Vote outcome with the updated comment and no user vote

        Raises:
            NotFoundError: If the comment does not exist
            NoExistingVoteError: If the user has no vote on the comment
            ConflictError: If the write still conflicts after retrying
        """
        with logfire.span(
            "reputation_service.remove_vote",
            comment_id=str(comment_id),
            user_id=str(user_id),
        ):
            outcome = await self._run_atomic(
                "remove_vote", lambda: self._remove(user_id, comment_id)
            )
            logfire.info(
                "Vote removed",
                comment_id=str(comment_id),
                user_id=str(user_id),
                delta=outcome.delta,
                rating_score=outcome.comment.rating_score,
            )
            return outcome

    async def get_user_votes(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> dict[CommentId, VoteValue]:
        """Look up a user's votes on many comments.

        Args:
            user_id: User ID
            comment_ids: Comment IDs to check

        Returns:
            Mapping comment ID -> vote value, only for comments voted on
        """
        if not comment_ids:
            return {}

        # Batch query to fetch all votes at once (avoid N+1)
        votes = await self.vote_repository.find_by_user_and_comments(
            user_id=user_id, comment_ids=comment_ids
        )
        return {vote.comment_id: vote.value for vote in votes}

    async def _cast_or_change(
        self, user_id: UserId, comment_id: CommentId, value: VoteValue
    ) -> VoteOutcome:
        comment = await self._lock_comment(comment_id)

        existing = await self.vote_repository.find(user_id, comment_id)
        if existing is None:
            now = datetime.now()
            await self.vote_repository.save(
                Vote(
                    user_id=user_id,
                    comment_id=comment_id,
                    value=value,
                    created_at=now,
                    updated_at=now,
                )
            )
            delta = int(value)
        elif existing.value != value:
            await self.vote_repository.update_value(user_id, comment_id, value)
            # Drop the old contribution and add the new one
            delta = 2 * int(value)
        else:
            logfire.debug(
                "Repeated vote with same value", comment_id=str(comment_id)
            )
            return VoteOutcome(comment=comment, user_vote=value, delta=0)

        updated = await self._persist_score(comment_id)
        return VoteOutcome(comment=updated, user_vote=value, delta=delta)

    async def _remove(self, user_id: UserId, comment_id: CommentId) -> VoteOutcome:
        await self._lock_comment(comment_id)

        existing = await self.vote_repository.find(user_id, comment_id)
        if existing is None or not await self.vote_repository.delete(
            user_id, comment_id
        ):
            logfire.warn(
                "No vote to remove", comment_id=str(comment_id), user_id=str(user_id)
            )
            raise NoExistingVoteError(str(comment_id), str(user_id))

        updated = await self._persist_score(comment_id)
        return VoteOutcome(comment=updated, user_vote=None, delta=-int(existing.value))

    async def _lock_comment(self, comment_id: CommentId) -> Comment:
        comment = await self.comment_repository.find_by_id_for_update(comment_id)
        if not comment:
            logfire.warn("Vote on non-existent comment", comment_id=str(comment_id))
            raise NotFoundError("Comment", str(comment_id))
        return comment

    async def _persist_score(self, comment_id: CommentId) -> Comment:
        score = await self.vote_repository.sum_for_comment(comment_id)
        updated = await self.comment_repository.set_rating_score(comment_id, score)
        if not updated:
            raise NotFoundError("Comment", str(comment_id))
        return updated

    async def _run_atomic(
        self, operation: str, work: Callable[[], Awaitable[VoteOutcome]]
    ) -> VoteOutcome:
        attempts = self.settings.conflict_retries + 1
        for attempt in range(1, attempts + 1):
            try:
                async with self.transactions.atomic():
                    return await work()
            except ConflictError as e:
                if attempt == attempts:
                    logfire.error(
                        "Vote conflict not resolved",
                        operation=operation,
                        attempts=attempts,
                        error=str(e),
                    )
                    raise
                logfire.warn(
                    "Vote conflict, retrying", operation=operation, attempt=attempt
                )
        raise ConflictError(f"{operation} did not run")  # pragma: no cover

    @staticmethod
    def _parse_value(value: int) -> VoteValue:
        if isinstance(value, bool):
            raise ValidationError("value", "Vote value must be 1 or -1")
        try:
            return VoteValue(value)
        except ValueError:
            raise ValidationError("value", "Vote value must be 1 or -1")
