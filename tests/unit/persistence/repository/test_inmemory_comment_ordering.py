"""Unit tests for in-memory comment ordering.

The in-memory repository must sort exactly like the SQL ORDER BY clauses,
since every service test relies on it.
"""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from colloquy.domain.value import CommentOrder, ContentId
from colloquy.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryDatabase,
)
from colloquy.persistence.repository.inmemory.comment import sort_comments
from tests.conftest import make_comment

BASE = datetime(2024, 6, 1, 12, 0)


def scored(content_id, score, minutes):
    return make_comment(
        content_id, rating_score=score, created_at=BASE + timedelta(minutes=minutes)
    )


class TestSortComments:
    """Tests for sort_comments."""

    def test_recency_newest_first(self):
        content_id = ContentId(uuid4())
        old, mid, new = (
            scored(content_id, 5, 0),
            scored(content_id, 0, 1),
            scored(content_id, -5, 2),
        )

        assert sort_comments([old, new, mid], CommentOrder.RECENCY) == [new, mid, old]

    def test_rating_high_ties_newest_first(self):
        content_id = ContentId(uuid4())
        older_top, newer_top, low = (
            scored(content_id, 2, 0),
            scored(content_id, 2, 1),
            scored(content_id, -1, 2),
        )

        assert sort_comments(
            [low, older_top, newer_top], CommentOrder.RATING_HIGH
        ) == [newer_top, older_top, low]

    def test_rating_low_ties_newest_first(self):
        content_id = ContentId(uuid4())
        older_top, newer_top, low = (
            scored(content_id, 2, 0),
            scored(content_id, 2, 1),
            scored(content_id, -1, 2),
        )

        assert sort_comments(
            [older_top, low, newer_top], CommentOrder.RATING_LOW
        ) == [low, newer_top, older_top]


class TestInMemoryCommentRepository:
    """Tests for the shared-database repository behaviour."""

    @pytest.mark.asyncio
    async def test_repositories_share_one_database(self):
        database = InMemoryDatabase()
        writer = InMemoryCommentRepository(database)
        reader = InMemoryCommentRepository(database)
        comment = scored(ContentId(uuid4()), 0, 0)

        await writer.save(comment)

        assert await reader.find_by_id(comment.id) == comment

    @pytest.mark.asyncio
    async def test_set_rating_score_and_hidden(self):
        repo = InMemoryCommentRepository()
        comment = await repo.save(scored(ContentId(uuid4()), 0, 0))

        rescored = await repo.set_rating_score(comment.id, 7)
        hidden = await repo.set_hidden(comment.id)

        assert rescored.rating_score == 7
        assert hidden.hidden is True
        assert hidden.rating_score == 7
        assert await repo.set_hidden(uuid4()) is None

    @pytest.mark.asyncio
    async def test_count_top_level_include_hidden(self):
        repo = InMemoryCommentRepository()
        content_id = ContentId(uuid4())
        await repo.save(make_comment(content_id))
        await repo.save(make_comment(content_id, hidden=True))

        assert await repo.count_top_level(content_id) == 1
        assert await repo.count_top_level(content_id, include_hidden=True) == 2
