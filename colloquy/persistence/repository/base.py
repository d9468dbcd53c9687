"""Shared base for PostgreSQL repositories."""

from typing import Any

from sqlalchemy.engine import Result
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from colloquy.persistence.transaction import translate_store_error


class PostgresRepository:
    """Base for repositories bound to the request-scoped session.

    Driver errors leave the repository as domain errors
    (ConflictError, StoreUnavailableError) where a mapping exists.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _execute(self, stmt: Any) -> Result:
        try:
            return await self.session.execute(stmt)
        except DBAPIError as e:
            translated = translate_store_error(e)
            if translated is e:
                raise
            raise translated from e
