"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from colloquy.domain.model import Comment, Content, Report, Vote
from colloquy.domain.value import (
    CommentId,
    ContentId,
    ReportId,
    UserId,
    VoteValue,
)
from colloquy.domain.value.types import Handle


def _as_uuid(value: Any) -> UUID:
    """Coerce a driver value (UUID or str) to UUID."""
    return UUID(value) if isinstance(value, str) else value


def row_to_content(row: Dict[str, Any]) -> Content:
    """Convert database row to Content domain model.

    Args:
        row: Database row as dict

    Returns:
        Content domain model
    """
    return Content(
        id=ContentId(_as_uuid(row["id"])),
        title=row["title"],
        published=row["published"],
        created_at=row["created_at"],
        deleted_at=row.get("deleted_at"),
    )


def content_to_dict(content: Content) -> Dict[str, Any]:
    """Convert Content domain model to database dict."""
    return content.model_dump()


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(_as_uuid(row["id"])),
        content_id=ContentId(_as_uuid(row["content_id"])),
        author_id=UserId(_as_uuid(row["author_id"])),
        author_handle=Handle(row["author_handle"]),
        content=row["content"],
        parent_id=CommentId(_as_uuid(row["parent_id"]))
        if row.get("parent_id")
        else None,
        rating_score=row["rating_score"],
        hidden=row["hidden"],
        created_at=row["created_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return comment.model_dump()


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model.

    Args:
        row: Database row as dict

    Returns:
        Vote domain model
    """
    return Vote(
        user_id=UserId(_as_uuid(row["user_id"])),
        comment_id=CommentId(_as_uuid(row["comment_id"])),
        value=VoteValue(row["value"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict.

    Args:
        vote: Vote domain model

    Returns:
        Dict suitable for database insertion/update
    """
    vote_dict = vote.model_dump()
    vote_dict["value"] = int(vote.value)
    return vote_dict


def row_to_report(row: Dict[str, Any]) -> Report:
    """Convert database row to Report domain model."""
    return Report(
        id=ReportId(_as_uuid(row["id"])),
        comment_id=CommentId(_as_uuid(row["comment_id"])),
        reporter_id=UserId(_as_uuid(row["reporter_id"])),
        reason=row["reason"],
        created_at=row["created_at"],
    )


def report_to_dict(report: Report) -> Dict[str, Any]:
    """Convert Report domain model to database dict."""
    return report.model_dump()
