"""Test configuration and fixtures."""

from datetime import datetime, timedelta
from uuid import uuid4

from colloquy.domain.model import Comment, Content
from colloquy.domain.repository import CommentRepository, ContentRepository
from colloquy.domain.value import CommentId, ContentId, UserId
from colloquy.domain.value.types import Handle


def make_content(
    content_id: ContentId | None = None, published: bool = True
) -> Content:
    """Build a content item that accepts comments by default."""
    return Content(
        id=content_id or ContentId(uuid4()),
        title="Test Content",
        published=published,
        created_at=datetime.now(),
    )


def make_comment(
    content_id: ContentId,
    parent_id: CommentId | None = None,
    text: str = "Test comment",
    rating_score: int = 0,
    hidden: bool = False,
    created_at: datetime | None = None,
) -> Comment:
    """Build a comment directly, bypassing the comment service.

    Used to arrange trees with controlled timestamps and scores.
    """
    return Comment(
        id=CommentId(uuid4()),
        content_id=content_id,
        author_id=UserId(uuid4()),
        author_handle=Handle(root="author"),
        content=text,
        parent_id=parent_id,
        rating_score=rating_score,
        hidden=hidden,
        created_at=created_at or datetime.now(),
    )


async def seed_content(env) -> Content:
    """Save a fresh published content item into the environment's store."""
    content_repo = await env.get(ContentRepository)
    return await content_repo.save(make_content())


async def seed_comments(env, *comments: Comment) -> list[Comment]:
    """Save prepared comments into the environment's store."""
    comment_repo = await env.get(CommentRepository)
    return [await comment_repo.save(c) for c in comments]


def minutes_ago(minutes: int) -> datetime:
    """Timestamp a number of minutes in the past."""
    return datetime.now() - timedelta(minutes=minutes)
