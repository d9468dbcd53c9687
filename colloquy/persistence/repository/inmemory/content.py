"""In-memory content repository for testing."""

from typing import Optional

from colloquy.domain.model.content import Content
from colloquy.domain.repository.content import ContentRepository
from colloquy.domain.value import ContentId

from .database import InMemoryDatabase


class InMemoryContentRepository(ContentRepository):
    """In-memory implementation of ContentRepository for testing."""

    def __init__(self, database: InMemoryDatabase | None = None) -> None:
        self.database = database or InMemoryDatabase()

    async def find_by_id(self, content_id: ContentId) -> Optional[Content]:
        """Find a content item by ID."""
        return self.database.contents.get(content_id)

    async def save(self, content: Content) -> Content:
        """Save or update a content item."""
        self.database.contents[content.id] = content
        return content
