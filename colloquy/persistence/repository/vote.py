"""PostgreSQL implementation of Vote repository."""

from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy import and_, delete, func, insert, select, update

from colloquy.domain.model import Vote
from colloquy.domain.repository import VoteRepository
from colloquy.domain.value import CommentId, UserId, VoteValue
from colloquy.persistence.mappers import row_to_vote, vote_to_dict
from colloquy.persistence.repository.base import PostgresRepository
from colloquy.persistence.tables import votes_table


class PostgresVoteRepository(PostgresRepository, VoteRepository):
    """PostgreSQL implementation of VoteRepository.

    A duplicate insert violates the primary key and surfaces as
    ConflictError.
    """

    def _identity(self, user_id: UserId, comment_id: CommentId):
        return and_(
            votes_table.c.user_id == user_id,
            votes_table.c.comment_id == comment_id,
        )

    async def find(self, user_id: UserId, comment_id: CommentId) -> Optional[Vote]:
        """Find a user's vote on a comment."""
        stmt = select(votes_table).where(self._identity(user_id, comment_id))
        result = await self._execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def find_by_comment(self, comment_id: CommentId) -> List[Vote]:
        """Find all votes on a comment."""
        stmt = select(votes_table).where(votes_table.c.comment_id == comment_id)
        result = await self._execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def find_by_user_and_comments(
        self,
        user_id: UserId,
        comment_ids: Sequence[CommentId],
    ) -> List[Vote]:
        """Find a user's votes on multiple comments (batch query)."""
        if not comment_ids:
            return []

        stmt = select(votes_table).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.comment_id.in_(comment_ids),
            )
        )
        result = await self._execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def save(self, vote: Vote) -> Vote:
        """Insert a vote."""
        stmt = insert(votes_table).values(**vote_to_dict(vote))
        await self._execute(stmt)
        await self.session.flush()
        return vote

    async def update_value(
        self, user_id: UserId, comment_id: CommentId, value: VoteValue
    ) -> Optional[Vote]:
        """Change the value of an existing vote in place."""
        stmt = (
            update(votes_table)
            .where(self._identity(user_id, comment_id))
            .values(value=int(value), updated_at=datetime.now())
            .returning(votes_table)
        )
        result = await self._execute(stmt)
        row = result.fetchone()

        if row is None:
            return None

        await self.session.flush()
        return row_to_vote(row._asdict())

    async def delete(self, user_id: UserId, comment_id: CommentId) -> bool:
        """Delete a user's vote on a comment."""
        stmt = delete(votes_table).where(self._identity(user_id, comment_id))
        result = await self._execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def sum_for_comment(self, comment_id: CommentId) -> int:
        """Sum the values of all live votes on a comment."""
        stmt = select(func.coalesce(func.sum(votes_table.c.value), 0)).where(
            votes_table.c.comment_id == comment_id
        )
        result = await self._execute(stmt)
        return int(result.scalar() or 0)
