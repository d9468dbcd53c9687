"""Shared state behind the in-memory repositories."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

from colloquy.domain.model import Comment, Content, Report, Vote
from colloquy.domain.repository import TransactionManager
from colloquy.domain.value import CommentId, ContentId, UserId


@dataclass
class InMemoryDatabase:
    """Tables of the in-memory store.

    All in-memory repositories of one container share a single instance,
    so writes made through one repository are visible to the others.
    """

    contents: dict[ContentId, Content] = field(default_factory=dict)
    comments: dict[CommentId, Comment] = field(default_factory=dict)
    votes: dict[tuple[UserId, CommentId], Vote] = field(default_factory=dict)
    reports: list[Report] = field(default_factory=list)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    def snapshot(self) -> tuple:
        # Models are immutable, so shallow copies are enough
        return (
            dict(self.contents),
            dict(self.comments),
            dict(self.votes),
            list(self.reports),
        )

    def restore(self, snapshot: tuple) -> None:
        self.contents, self.comments, self.votes, self.reports = snapshot


class InMemoryTransactionManager(TransactionManager):
    """In-memory implementation of TransactionManager for testing.

    Atomic units are serialized by the database lock, standing in for the
    row lock, and roll back to a snapshot when the block raises.
    """

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        """Run the block serialized, restoring state on error."""
        async with self.database.lock:
            snapshot = self.database.snapshot()
            try:
                yield
            except BaseException:
                self.database.restore(snapshot)
                raise
