"""Unit tests for ModerationService."""

from uuid import uuid4

import pytest

from colloquy.config import ModerationSettings
from colloquy.domain.error import NotFoundError, ValidationError
from colloquy.domain.service import ModerationService, ThreadService
from colloquy.domain.value import CommentId, UserId
from colloquy.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryDatabase,
    InMemoryReportRepository,
    InMemoryTransactionManager,
)
from tests.conftest import (
    make_comment,
    make_content,
    minutes_ago,
    seed_comments,
    seed_content,
)
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


class TestReport:
    """Tests for report and count_reports methods."""

    @pytest.mark.asyncio
    async def test_report_is_recorded_and_counted(self, unit_env):
        """Filing a report stores the trimmed reason and bumps the count."""
        service = await unit_env.get(ModerationService)
        content = await seed_content(unit_env)
        [comment] = await seed_comments(unit_env, make_comment(content.id))
        reporter = UserId(uuid4())

        report = await service.report(comment.id, reporter, "  spam  ")

        assert report.comment_id == comment.id
        assert report.reporter_id == reporter
        assert report.reason == "spam"
        assert await service.count_reports(comment.id) == 1

    @pytest.mark.asyncio
    async def test_repeated_reports_by_same_user_all_count(self, unit_env):
        """Raw counting records every report row."""
        service = await unit_env.get(ModerationService)
        content = await seed_content(unit_env)
        [comment] = await seed_comments(unit_env, make_comment(content.id))
        reporter = UserId(uuid4())

        await service.report(comment.id, reporter, "spam")
        await service.report(comment.id, reporter, "still spam")

        assert await service.count_reports(comment.id) == 2

    @pytest.mark.asyncio
    async def test_unreported_comment_counts_zero(self, unit_env):
        service = await unit_env.get(ModerationService)

        assert await service.count_reports(CommentId(uuid4())) == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reason", ["", "   ", "x" * 1001])
    async def test_invalid_reason_rejected(self, unit_env, reason):
        """Reason must be non-empty and at most 1000 characters."""
        service = await unit_env.get(ModerationService)
        content = await seed_content(unit_env)
        [comment] = await seed_comments(unit_env, make_comment(content.id))

        with pytest.raises(ValidationError) as exc_info:
            await service.report(comment.id, UserId(uuid4()), reason)

        assert exc_info.value.field == "reason"

    @pytest.mark.asyncio
    async def test_report_missing_comment_raises_not_found(self, unit_env):
        service = await unit_env.get(ModerationService)

        with pytest.raises(NotFoundError):
            await service.report(CommentId(uuid4()), UserId(uuid4()), "spam")

    @pytest.mark.asyncio
    async def test_hidden_comment_can_still_be_reported(self, unit_env):
        service = await unit_env.get(ModerationService)
        content = await seed_content(unit_env)
        [comment] = await seed_comments(
            unit_env, make_comment(content.id, hidden=True)
        )

        await service.report(comment.id, UserId(uuid4()), "abuse")

        assert await service.count_reports(comment.id) == 1


class TestDistinctReporters:
    """Counting distinct reporters instead of rows."""

    @pytest.mark.asyncio
    async def test_distinct_mode_counts_each_reporter_once(self):
        database = InMemoryDatabase()
        content = make_content()
        comment = make_comment(content.id)
        database.contents[content.id] = content
        database.comments[comment.id] = comment
        service = ModerationService(
            comment_repository=InMemoryCommentRepository(database),
            report_repository=InMemoryReportRepository(database),
            transactions=InMemoryTransactionManager(database),
            settings=ModerationSettings(count_distinct_reporters=True),
        )
        alice, bob = UserId(uuid4()), UserId(uuid4())

        await service.report(comment.id, alice, "spam")
        await service.report(comment.id, alice, "spam again")
        await service.report(comment.id, bob, "spam")

        assert await service.count_reports(comment.id) == 2
        page = await service.list_reported()
        assert page.items[0].report_count == 2


class TestListReported:
    """Tests for list_reported method."""

    @pytest.mark.asyncio
    async def test_most_reported_first(self, unit_env):
        """Listing orders by report count, then newest first."""
        service = await unit_env.get(ModerationService)
        content = await seed_content(unit_env)
        once, twice, also_once = await seed_comments(
            unit_env,
            make_comment(content.id, created_at=minutes_ago(10)),
            make_comment(content.id, created_at=minutes_ago(5)),
            make_comment(content.id, created_at=minutes_ago(1)),
        )
        await seed_comments(unit_env, make_comment(content.id))  # never reported
        for comment_id in (once.id, twice.id, twice.id, also_once.id):
            await service.report(comment_id, UserId(uuid4()), "spam")

        page = await service.list_reported()

        assert [i.comment.id for i in page.items] == [
            twice.id,
            also_once.id,
            once.id,
        ]
        assert [i.report_count for i in page.items] == [2, 1, 1]
        assert page.total == 3
        assert page.total_pages == 1

    @pytest.mark.asyncio
    async def test_pagination(self, unit_env):
        service = await unit_env.get(ModerationService)
        content = await seed_content(unit_env)
        comments = await seed_comments(
            unit_env,
            *[make_comment(content.id, created_at=minutes_ago(i)) for i in range(3)],
        )
        for comment in comments:
            await service.report(comment.id, UserId(uuid4()), "spam")

        second = await service.list_reported(page=2, page_size=2)

        assert [i.comment.id for i in second.items] == [comments[2].id]
        assert second.total == 3
        assert second.total_pages == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("page", "page_size"), [(0, 10), (1, 0), (1, -1), (1, 101)]
    )
    async def test_bad_pagination_rejected(self, unit_env, page, page_size):
        service = await unit_env.get(ModerationService)

        with pytest.raises(ValidationError):
            await service.list_reported(page=page, page_size=page_size)


class TestHide:
    """Tests for hide method."""

    @pytest.mark.asyncio
    async def test_hidden_comment_leaves_listing_but_stays_reported(self, unit_env):
        """Hiding removes a comment from listings, not from moderation."""
        service = await unit_env.get(ModerationService)
        threads = await unit_env.get(ThreadService)
        content = await seed_content(unit_env)
        [comment] = await seed_comments(
            unit_env, make_comment(content.id, rating_score=4)
        )
        await service.report(comment.id, UserId(uuid4()), "off topic")

        hidden = await service.hide(comment.id)

        assert hidden.hidden is True
        assert hidden.rating_score == 4
        forest = await threads.build_forest(content.id)
        assert forest.nodes == []
        reported = await service.list_reported()
        assert [i.comment.id for i in reported.items] == [comment.id]
        assert reported.items[0].comment.hidden is True
        assert reported.items[0].report_count == 1

    @pytest.mark.asyncio
    async def test_hide_is_idempotent(self, unit_env):
        service = await unit_env.get(ModerationService)
        content = await seed_content(unit_env)
        [comment] = await seed_comments(unit_env, make_comment(content.id))

        first = await service.hide(comment.id)
        second = await service.hide(comment.id)

        assert first == second
        assert second.hidden is True

    @pytest.mark.asyncio
    async def test_hide_missing_comment_raises_not_found(self, unit_env):
        service = await unit_env.get(ModerationService)

        with pytest.raises(NotFoundError):
            await service.hide(CommentId(uuid4()))
