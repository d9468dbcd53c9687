"""Content entity.

The published item that comments attach to. Its publishing workflow lives
elsewhere; this service only checks that an item exists and is published.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from colloquy.domain.model.common import DomainModel
from colloquy.domain.value import ContentId


class Content(DomainModel):
    """Content item that accepts comments."""

    id: ContentId
    title: str = Field(min_length=1, max_length=300)
    published: bool = True
    created_at: datetime = Field(default_factory=datetime.now)
    deleted_at: Optional[datetime] = None

    @property
    def accepts_comments(self) -> bool:
        """Whether new comments may be attached to this item."""
        return self.published and self.deleted_at is None
