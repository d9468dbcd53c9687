"""Unit tests for moderation use cases."""

from uuid import uuid4

import pytest

from colloquy.application.usecase.moderation import (
    HideCommentRequest,
    HideCommentUseCase,
    ListReportedRequest,
    ListReportedUseCase,
    ReportCommentRequest,
    ReportCommentUseCase,
)
from colloquy.domain.error import NotAuthorizedError, ValidationError
from colloquy.domain.value import UserRole
from tests.conftest import make_comment, seed_comments, seed_content
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def seed_comment(env):
    content = await seed_content(env)
    [comment] = await seed_comments(env, make_comment(content.id))
    return comment


class TestReportCommentUseCase:
    """Tests for ReportCommentUseCase."""

    @pytest.mark.asyncio
    async def test_report_returns_running_count(self, unit_env):
        use_case = await unit_env.get(ReportCommentUseCase)
        comment = await seed_comment(unit_env)

        first = await use_case.execute(
            ReportCommentRequest(
                comment_id=str(comment.id), reporter_id=str(uuid4()), reason="spam"
            )
        )
        second = await use_case.execute(
            ReportCommentRequest(
                comment_id=str(comment.id), reporter_id=str(uuid4()), reason="rude"
            )
        )

        assert first.report_count == 1
        assert second.report_count == 2
        assert second.comment_id == str(comment.id)
        assert second.reason == "rude"

    @pytest.mark.asyncio
    async def test_malformed_reporter_id_rejected(self, unit_env):
        use_case = await unit_env.get(ReportCommentUseCase)
        comment = await seed_comment(unit_env)

        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(
                ReportCommentRequest(
                    comment_id=str(comment.id), reporter_id="x", reason="spam"
                )
            )

        assert exc_info.value.field == "reporter_id"


class TestModeratorOnlyUseCases:
    """List and hide require the moderator role."""

    @pytest.mark.asyncio
    async def test_member_cannot_list_reported(self, unit_env):
        use_case = await unit_env.get(ListReportedUseCase)

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                ListReportedRequest(user_id=str(uuid4()), role=UserRole.MEMBER)
            )

    @pytest.mark.asyncio
    async def test_member_cannot_hide(self, unit_env):
        use_case = await unit_env.get(HideCommentUseCase)
        comment = await seed_comment(unit_env)

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                HideCommentRequest(
                    comment_id=str(comment.id),
                    user_id=str(uuid4()),
                    role=UserRole.MEMBER,
                )
            )

    @pytest.mark.asyncio
    async def test_moderator_hides_and_lists(self, unit_env):
        report = await unit_env.get(ReportCommentUseCase)
        hide = await unit_env.get(HideCommentUseCase)
        listing = await unit_env.get(ListReportedUseCase)
        comment = await seed_comment(unit_env)
        moderator_id = str(uuid4())
        await report.execute(
            ReportCommentRequest(
                comment_id=str(comment.id), reporter_id=str(uuid4()), reason="spam"
            )
        )

        hidden = await hide.execute(
            HideCommentRequest(
                comment_id=str(comment.id),
                user_id=moderator_id,
                role=UserRole.MODERATOR,
            )
        )
        page = await listing.execute(
            ListReportedRequest(user_id=moderator_id, role=UserRole.MODERATOR)
        )

        assert hidden.comment.hidden is True
        [item] = page.comments
        assert item.comment.comment_id == str(comment.id)
        assert item.comment.hidden is True
        assert item.report_count == 1
        assert page.total == 1
