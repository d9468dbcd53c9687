"""Unit tests for ThreadService."""

from datetime import datetime
from uuid import uuid4

import pytest

from colloquy.domain.error import ValidationError
from colloquy.domain.service import ReputationService, ThreadService
from colloquy.domain.value import CommentOrder, ContentId, UserId, VoteValue
from tests.conftest import make_comment, minutes_ago, seed_comments, seed_content
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


def top_level_ids(forest):
    return [node.comment.id for node in forest.nodes]


class TestOrdering:
    """Ordering of top-level comments."""

    @pytest.fixture
    def abc(self):
        """A(3, Jan 2), B(3, Jan 1), C(-1, Jan 3) on one content item."""

        def build(content_id):
            a = make_comment(
                content_id, text="A", rating_score=3, created_at=datetime(2020, 1, 2)
            )
            b = make_comment(
                content_id, text="B", rating_score=3, created_at=datetime(2020, 1, 1)
            )
            c = make_comment(
                content_id, text="C", rating_score=-1, created_at=datetime(2020, 1, 3)
            )
            return a, b, c

        return build

    @pytest.mark.asyncio
    async def test_rating_high_breaks_ties_by_recency(self, unit_env, abc):
        """Equal scores fall back to newest first."""
        service = await unit_env.get(ThreadService)
        content = await seed_content(unit_env)
        a, b, c = await seed_comments(unit_env, *abc(content.id))

        forest = await service.build_forest(content.id, order=CommentOrder.RATING_HIGH)

        assert top_level_ids(forest) == [a.id, b.id, c.id]

    @pytest.mark.asyncio
    async def test_rating_low_breaks_ties_by_recency(self, unit_env, abc):
        """Lowest score first, equal scores still newest first."""
        service = await unit_env.get(ThreadService)
        content = await seed_content(unit_env)
        a, b, c = await seed_comments(unit_env, *abc(content.id))

        forest = await service.build_forest(content.id, order=CommentOrder.RATING_LOW)

        assert top_level_ids(forest) == [c.id, a.id, b.id]

    @pytest.mark.asyncio
    async def test_recency_is_default(self, unit_env, abc):
        """Default ordering is newest first."""
        service = await unit_env.get(ThreadService)
        content = await seed_content(unit_env)
        a, b, c = await seed_comments(unit_env, *abc(content.id))

        forest = await service.build_forest(content.id)

        assert top_level_ids(forest) == [c.id, a.id, b.id]

    @pytest.mark.asyncio
    async def test_rating_orders_reverse_when_scores_distinct(self, unit_env):
        """ratingHigh and ratingLow are mirror images for distinct scores."""
        service = await unit_env.get(ThreadService)
        content = await seed_content(unit_env)
        await seed_comments(
            unit_env,
            *[
                make_comment(content.id, rating_score=score, created_at=minutes_ago(i))
                for i, score in enumerate([5, -2, 0, 7, 1])
            ],
        )

        high = await service.build_forest(content.id, order=CommentOrder.RATING_HIGH)
        low = await service.build_forest(content.id, order=CommentOrder.RATING_LOW)

        assert top_level_ids(high) == list(reversed(top_level_ids(low)))
        assert [n.comment.rating_score for n in high.nodes] == [7, 5, 1, 0, -2]


class TestTreeShape:
    """Bounded two-level expansion and visibility."""

    @pytest.mark.asyncio
    async def test_two_levels_expanded_third_omitted(self, unit_env):
        """Top-level, replies and replies-of-replies are eager; deeper is not."""
        service = await unit_env.get(ThreadService)
        content = await seed_content(unit_env)
        top = make_comment(content.id)
        reply = make_comment(content.id, parent_id=top.id)
        nested = make_comment(content.id, parent_id=reply.id)
        deep = make_comment(content.id, parent_id=nested.id)
        await seed_comments(unit_env, top, reply, nested, deep)

        forest = await service.build_forest(content.id)

        [top_node] = forest.nodes
        [reply_node] = top_node.replies
        [nested_node] = reply_node.replies
        assert reply_node.comment.id == reply.id
        assert nested_node.comment.id == nested.id
        assert nested_node.replies == []

    @pytest.mark.asyncio
    async def test_replies_follow_selected_order_nested_use_recency(self, unit_env):
        """Direct replies use the selected order, the next level recency."""
        service = await unit_env.get(ThreadService)
        content = await seed_content(unit_env)
        top = make_comment(content.id)
        low = make_comment(
            content.id, parent_id=top.id, rating_score=-3, created_at=minutes_ago(1)
        )
        high = make_comment(
            content.id, parent_id=top.id, rating_score=9, created_at=minutes_ago(5)
        )
        old = make_comment(
            content.id, parent_id=high.id, rating_score=9, created_at=minutes_ago(4)
        )
        new = make_comment(
            content.id, parent_id=high.id, rating_score=0, created_at=minutes_ago(2)
        )
        await seed_comments(unit_env, top, low, high, old, new)

        forest = await service.build_forest(content.id, order=CommentOrder.RATING_HIGH)

        replies = forest.nodes[0].replies
        assert [n.comment.id for n in replies] == [high.id, low.id]
        assert [n.comment.id for n in replies[0].replies] == [new.id, old.id]

    @pytest.mark.asyncio
    async def test_hidden_subtree_is_unreachable(self, unit_env):
        """Hidden comments and everything under them are left out."""
        service = await unit_env.get(ThreadService)
        content = await seed_content(unit_env)
        visible = make_comment(content.id)
        hidden_top = make_comment(content.id, hidden=True)
        under_hidden = make_comment(content.id, parent_id=hidden_top.id)
        hidden_reply = make_comment(content.id, parent_id=visible.id, hidden=True)
        await seed_comments(unit_env, visible, hidden_top, under_hidden, hidden_reply)

        forest = await service.build_forest(content.id)

        assert top_level_ids(forest) == [visible.id]
        assert forest.nodes[0].replies == []
        assert forest.total == 1

    @pytest.mark.asyncio
    async def test_empty_content_yields_empty_forest(self, unit_env):
        """No comments is not an error."""
        service = await unit_env.get(ThreadService)

        forest = await service.build_forest(ContentId(uuid4()))

        assert forest.nodes == []
        assert forest.total == 0
        assert forest.total_pages == 0


class TestPagination:
    """Pagination metadata and slicing."""

    @pytest.mark.asyncio
    async def test_pages_slice_top_level_only(self, unit_env):
        """Pages count top-level comments; replies ride along."""
        service = await unit_env.get(ThreadService)
        content = await seed_content(unit_env)
        tops = [make_comment(content.id, created_at=minutes_ago(i)) for i in range(5)]
        reply = make_comment(content.id, parent_id=tops[0].id)
        await seed_comments(unit_env, *tops, reply)

        first = await service.build_forest(content.id, page=1, page_size=2)
        last = await service.build_forest(content.id, page=3, page_size=2)
        beyond = await service.build_forest(content.id, page=4, page_size=2)

        assert top_level_ids(first) == [tops[0].id, tops[1].id]
        assert len(first.nodes[0].replies) == 1
        assert first.total == 5
        assert first.total_pages == 3
        assert top_level_ids(last) == [tops[4].id]
        assert beyond.nodes == []
        assert beyond.total == 5

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page_size", [0, -2])
    async def test_non_positive_page_size_rejected(self, unit_env, page_size):
        """A caller-supplied page size is validated, never replaced."""
        service = await unit_env.get(ThreadService)
        content = await seed_content(unit_env)
        await seed_comments(unit_env, make_comment(content.id))

        with pytest.raises(ValidationError):
            await service.build_forest(content.id, page_size=page_size)


class TestViewerVotes:
    """Reader vote annotation."""

    @pytest.mark.asyncio
    async def test_viewer_votes_annotated_at_every_level(self, unit_env):
        """Authenticated readers see their own vote on each node."""
        service = await unit_env.get(ThreadService)
        reputation = await unit_env.get(ReputationService)
        content = await seed_content(unit_env)
        top = make_comment(content.id)
        reply = make_comment(content.id, parent_id=top.id)
        await seed_comments(unit_env, top, reply)
        viewer = UserId(uuid4())
        await reputation.cast_or_change_vote(viewer, top.id, 1)
        await reputation.cast_or_change_vote(viewer, reply.id, -1)

        forest = await service.build_forest(content.id, viewer_id=viewer)
        anonymous = await service.build_forest(content.id)

        assert forest.nodes[0].user_vote == VoteValue.UP
        assert forest.nodes[0].replies[0].user_vote == VoteValue.DOWN
        assert anonymous.nodes[0].user_vote is None
        assert forest.nodes[0].comment.rating_score == 1
