"""Vote entity.

Votes are the ledger behind comment rating scores. Each user holds at most
one live vote per comment.
"""

from datetime import datetime

from pydantic import Field

from colloquy.domain.model.common import DomainModel
from colloquy.domain.value import CommentId, UserId, VoteValue


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - Identity is (user_id, comment_id), enforced by the primary key
    - Value is +1 or -1; removing a vote deletes the row
    - Changing a vote updates the row in place
    """

    user_id: UserId
    comment_id: CommentId
    value: VoteValue
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
