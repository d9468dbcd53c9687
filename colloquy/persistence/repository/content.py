"""PostgreSQL implementation of Content repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert

from colloquy.domain.model import Content
from colloquy.domain.repository import ContentRepository
from colloquy.domain.value import ContentId
from colloquy.persistence.mappers import content_to_dict, row_to_content
from colloquy.persistence.repository.base import PostgresRepository
from colloquy.persistence.tables import contents_table


class PostgresContentRepository(PostgresRepository, ContentRepository):
    """PostgreSQL implementation of ContentRepository."""

    async def find_by_id(self, content_id: ContentId) -> Optional[Content]:
        """Find a content item by ID."""
        stmt = select(contents_table).where(contents_table.c.id == content_id)
        result = await self._execute(stmt)
        row = result.fetchone()
        return row_to_content(row._asdict()) if row else None

    async def save(self, content: Content) -> Content:
        """Save a content item (upsert on id)."""
        content_dict = content_to_dict(content)
        stmt = insert(contents_table).values(**content_dict)
        stmt = stmt.on_conflict_do_update(
            index_elements=[contents_table.c.id],
            set_={k: v for k, v in content_dict.items() if k != "id"},
        )
        await self._execute(stmt)
        await self.session.flush()
        return content
