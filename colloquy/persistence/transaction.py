"""PostgreSQL transaction manager.

Atomic units run inside the request-scoped session. A failed unit rolls back
alone and can be retried while the request continues. A unit that completes
is committed before control returns to the caller.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import logfire
from sqlalchemy.exc import DBAPIError, IntegrityError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from colloquy.domain.error import ConflictError, StoreUnavailableError
from colloquy.domain.repository import TransactionManager

# serialization_failure, deadlock_detected
RETRYABLE_SQLSTATES = frozenset({"40001", "40P01"})


def _sqlstate(error: DBAPIError) -> str | None:
    """Extract the SQLSTATE code from a wrapped driver error."""
    orig = error.orig
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code is None and orig is not None:
        # asyncpg errors are chained behind the SQLAlchemy adapter
        code = getattr(orig.__cause__, "sqlstate", None)
    return code


def translate_store_error(error: DBAPIError) -> Exception:
    """Map a SQLAlchemy driver error to a domain error.

    Args:
        error: Error raised by the driver

    Returns:
        ConflictError, StoreUnavailableError, or the original error
    """
    if isinstance(error, IntegrityError):
        return ConflictError(f"Duplicate or conflicting write: {error.orig}")
    if _sqlstate(error) in RETRYABLE_SQLSTATES:
        return ConflictError(f"Serialization failure: {error.orig}")
    if isinstance(error, (OperationalError, InterfaceError)) or (
        error.connection_invalidated
    ):
        return StoreUnavailableError(f"Database unavailable: {error.orig}")
    return error


class PostgresTransactionManager(TransactionManager):
    """PostgreSQL implementation of TransactionManager.

    The outermost atomic unit commits the request transaction before it
    exits, so a caller only sees a result once the store has made it
    durable. Nested units are savepoints.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize transaction manager with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session
        self._depth = 0

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        """Run the block inside a savepoint, translating driver errors.

        Raises:
            ConflictError: On duplicate keys or serialization failures
            StoreUnavailableError: If the connection or commit fails
        """
        outermost = self._depth == 0
        self._depth += 1
        try:
            async with self.session.begin_nested():
                yield
            if outermost:
                await self._commit()
        except DBAPIError as e:
            translated = translate_store_error(e)
            if translated is e:
                raise
            logfire.warn(
                "Atomic unit rolled back",
                error_type=type(translated).__name__,
                error=str(e.orig),
            )
            raise translated from e
        finally:
            self._depth -= 1

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except DBAPIError:
            await self.session.rollback()
            raise
        logfire.debug("Atomic unit committed")
