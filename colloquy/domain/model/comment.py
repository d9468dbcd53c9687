"""Comment entity.

Comments are threaded discussions attached to a published content item.
The tree is stored flat: each comment points at its parent by id, and the
nested view is materialized at read time with a bounded depth.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from colloquy.domain.model.common import DomainModel
from colloquy.domain.value import CommentId, ContentId, UserId
from colloquy.domain.value.types import Handle


class Comment(DomainModel):
    """Comment entity.

    Represents a top-level comment on a content item or a reply to another
    comment.

    - parent_id: Direct parent comment (None for top-level), never changes
    - rating_score: Sum of live vote values, written only by vote aggregation
    - hidden: Set by moderators; hidden comments leave standard listings
    """

    id: CommentId
    content_id: ContentId
    author_id: UserId
    author_handle: Handle
    content: str = Field(min_length=1, max_length=10000)
    parent_id: Optional[CommentId] = None
    rating_score: int = 0
    hidden: bool = False
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_top_level(self) -> bool:
        """Whether this comment has no parent comment."""
        return self.parent_id is None
