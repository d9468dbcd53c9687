"""Unit tests for PostgresTransactionManager.

A recording stand-in replaces the SQLAlchemy session so the commit
boundary can be checked without a database.
"""

from contextlib import asynccontextmanager

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from colloquy.domain.error import ConflictError, StoreUnavailableError
from colloquy.persistence.transaction import PostgresTransactionManager


class RecordingSession:
    """Session stand-in that records the calls the manager makes."""

    def __init__(self, commit_error: Exception | None = None):
        self.calls: list[str] = []
        self.commit_error = commit_error

    @asynccontextmanager
    async def begin_nested(self):
        self.calls.append("savepoint")
        try:
            yield
        except Exception:
            self.calls.append("rollback_savepoint")
            raise
        self.calls.append("release_savepoint")

    async def commit(self):
        self.calls.append("commit")
        if self.commit_error is not None:
            raise self.commit_error

    async def rollback(self):
        self.calls.append("rollback")


class TestAtomic:
    """Tests for atomic units."""

    @pytest.mark.asyncio
    async def test_unit_is_committed_before_returning(self):
        session = RecordingSession()
        transactions = PostgresTransactionManager(session)

        async with transactions.atomic():
            session.calls.append("write")
        session.calls.append("caller_continues")

        assert session.calls == [
            "savepoint",
            "write",
            "release_savepoint",
            "commit",
            "caller_continues",
        ]

    @pytest.mark.asyncio
    async def test_nested_unit_commits_only_once(self):
        session = RecordingSession()
        transactions = PostgresTransactionManager(session)

        async with transactions.atomic():
            async with transactions.atomic():
                session.calls.append("write")

        assert session.calls.count("commit") == 1
        assert session.calls[-1] == "commit"

    @pytest.mark.asyncio
    async def test_failed_commit_surfaces_as_store_unavailable(self):
        """A lost connection at commit must reach the caller."""
        session = RecordingSession(
            commit_error=OperationalError("COMMIT", {}, Exception("connection lost"))
        )
        transactions = PostgresTransactionManager(session)

        with pytest.raises(StoreUnavailableError):
            async with transactions.atomic():
                session.calls.append("write")

        assert session.calls[-2:] == ["commit", "rollback"]

    @pytest.mark.asyncio
    async def test_integrity_error_in_unit_is_conflict(self):
        session = RecordingSession()
        transactions = PostgresTransactionManager(session)

        with pytest.raises(ConflictError):
            async with transactions.atomic():
                raise IntegrityError("INSERT", {}, Exception("duplicate key"))

        assert "commit" not in session.calls
        assert "rollback_savepoint" in session.calls

    @pytest.mark.asyncio
    async def test_manager_is_reusable_after_failure(self):
        session = RecordingSession()
        transactions = PostgresTransactionManager(session)

        with pytest.raises(ConflictError):
            async with transactions.atomic():
                raise IntegrityError("INSERT", {}, Exception("duplicate key"))
        async with transactions.atomic():
            pass

        assert session.calls[-1] == "commit"
