"""Domain value objects for Colloquy.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum, IntEnum

from pydantic import field_validator

from colloquy.domain.value.common import RootValueObject, ValueObject
from colloquy.domain.value.identifiers import UserId


class VoteValue(IntEnum):
    """Value of a vote on a comment.

    "No vote" is not a value: it is the absence of a vote row.
    """

    UP = 1
    DOWN = -1


class CommentOrder(str, Enum):
    """Ordering applied to comment listings at every tree level."""

    RECENCY = "recency"  # created_at DESC
    RATING_HIGH = "ratingHigh"  # rating_score DESC, created_at DESC
    RATING_LOW = "ratingLow"  # rating_score ASC, created_at DESC

    @classmethod
    def _missing_(cls, value: object) -> "CommentOrder | None":
        # Older clients send "ratinghigh" / "ratinglow"
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.lower():
                    return member
        return None


class UserRole(str, Enum):
    """Role carried by an authenticated principal."""

    MEMBER = "member"
    MODERATOR = "moderator"


class Handle(RootValueObject[str]):
    """Display handle of a comment author."""

    @field_validator("root")
    @classmethod
    def validate_handle_format(cls, v: str) -> str:
        """Validate handle is not empty and within length limits."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Handle must be 1-255 characters")
        return v


class Principal(ValueObject):
    """Authenticated caller, as answered by the identity provider."""

    user_id: UserId
    handle: Handle
    role: UserRole = UserRole.MEMBER

    @property
    def is_moderator(self) -> bool:
        """Whether the caller may use moderation operations."""
        return self.role == UserRole.MODERATOR
