"""PostgreSQL implementation of Comment repository."""

from typing import List, Optional, Sequence

from sqlalchemy import asc, desc, func, select, update

from colloquy.domain.model import Comment
from colloquy.domain.repository import CommentRepository
from colloquy.domain.value import CommentId, CommentOrder, ContentId
from colloquy.persistence.mappers import comment_to_dict, row_to_comment
from colloquy.persistence.repository.base import PostgresRepository
from colloquy.persistence.tables import comments_table


def _order_by(order: CommentOrder) -> list:
    """Build ORDER BY clauses for a comment ordering."""
    if order == CommentOrder.RATING_HIGH:
        return [desc(comments_table.c.rating_score), desc(comments_table.c.created_at)]
    if order == CommentOrder.RATING_LOW:
        return [asc(comments_table.c.rating_score), desc(comments_table.c.created_at)]
    return [desc(comments_table.c.created_at)]


class PostgresCommentRepository(PostgresRepository, CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self._execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_id_for_update(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID with a row lock (SELECT ... FOR UPDATE)."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.id == comment_id)
            .with_for_update()
        )
        result = await self._execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_top_level(
        self,
        content_id: ContentId,
        order: CommentOrder = CommentOrder.RECENCY,
        limit: int = 10,
        offset: int = 0,
        include_hidden: bool = False,
    ) -> List[Comment]:
        """Find one page of top-level comments for a content item."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.content_id == content_id)
            .where(comments_table.c.parent_id.is_(None))
        )

        if not include_hidden:
            stmt = stmt.where(comments_table.c.hidden.is_(False))

        stmt = stmt.order_by(*_order_by(order)).limit(limit).offset(offset)

        result = await self._execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def count_top_level(
        self, content_id: ContentId, include_hidden: bool = False
    ) -> int:
        """Count top-level comments for a content item."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.content_id == content_id)
            .where(comments_table.c.parent_id.is_(None))
        )

        if not include_hidden:
            stmt = stmt.where(comments_table.c.hidden.is_(False))

        result = await self._execute(stmt)
        return result.scalar() or 0

    async def find_children(
        self,
        parent_ids: Sequence[CommentId],
        order: CommentOrder = CommentOrder.RECENCY,
        include_hidden: bool = False,
    ) -> List[Comment]:
        """Find direct replies of one or more comments."""
        if not parent_ids:
            return []

        stmt = select(comments_table).where(
            comments_table.c.parent_id.in_(parent_ids)
        )

        if not include_hidden:
            stmt = stmt.where(comments_table.c.hidden.is_(False))

        stmt = stmt.order_by(*_order_by(order))

        result = await self._execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        stmt = comments_table.insert().values(**comment_to_dict(comment))
        await self._execute(stmt)
        await self.session.flush()
        return comment

    async def set_rating_score(
        self, comment_id: CommentId, rating_score: int
    ) -> Optional[Comment]:
        """Persist a recomputed rating score."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(rating_score=rating_score)
            .returning(comments_table)
        )
        result = await self._execute(stmt)
        row = result.fetchone()

        if row is None:
            return None

        await self.session.flush()
        return row_to_comment(row._asdict())

    async def set_hidden(self, comment_id: CommentId) -> Optional[Comment]:
        """Mark a comment hidden."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(hidden=True)
            .returning(comments_table)
        )
        result = await self._execute(stmt)
        row = result.fetchone()

        if row is None:
            return None

        await self.session.flush()
        return row_to_comment(row._asdict())
