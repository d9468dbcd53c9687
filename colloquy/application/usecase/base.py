"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any
from uuid import UUID

from colloquy.domain.error import NotAuthorizedError, ValidationError
from colloquy.domain.value import UserRole


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


def parse_id(value: str, field: str) -> UUID:
    """Parse a UUID string from a request.

    Raises:
        ValidationError: If the value is not a UUID
    """
    try:
        return UUID(value)
    except (ValueError, TypeError):
        raise ValidationError(field, f"Malformed identifier: {value!r}")


def require_moderator(user_id: str, role: UserRole, operation: str) -> None:
    """Reject callers without the moderator role.

    Raises:
        NotAuthorizedError: If the caller is not a moderator
    """
    if role != UserRole.MODERATOR:
        raise NotAuthorizedError(operation, user_id)
