"""Content repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from colloquy.domain.model.content import Content
from colloquy.domain.value import ContentId


class ContentRepository(ABC):
    """Read access to the content items comments attach to."""

    @abstractmethod
    async def find_by_id(self, content_id: ContentId) -> Optional[Content]:
        """Find a content item by ID.

        Args:
            content_id: The content item's ID

        Returns:
            The content item if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, content: Content) -> Content:
        """Save a content item (create or update).

        Args:
            content: The content item

        Returns:
            The saved content item
        """
        pass
