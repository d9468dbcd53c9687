"""SQLAlchemy table definitions for Colloquy.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    SmallInteger,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# CONTENTS TABLE (items that accept comments)
# ============================================================================
contents_table = Table(
    "contents",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("title", String(300), nullable=False),
    Column("published", Boolean, nullable=False, server_default="true"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
)

# ============================================================================
# COMMENTS TABLE (flat tree, parent pointer)
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "content_id", UUID, ForeignKey("contents.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "parent_id", UUID, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True
    ),
    Column("author_id", UUID, nullable=False),  # Owned by the identity provider
    Column("author_handle", String(255), nullable=False),  # Denormalized
    Column("content", Text, nullable=False),
    Column("rating_score", Integer, nullable=False, server_default="0"),
    Column("hidden", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("char_length(content) > 0", name="content_not_empty"),
)

Index("idx_comments_content_id", comments_table.c.content_id)
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_created_at", comments_table.c.created_at)
Index("idx_comments_rating_score", comments_table.c.rating_score)

# ============================================================================
# VOTES TABLE (rating ledger)
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("user_id", UUID, nullable=False),
    Column(
        "comment_id", UUID, ForeignKey("comments.id", ondelete="CASCADE"), nullable=False
    ),
    Column("value", SmallInteger, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("user_id", "comment_id", name="votes_pkey"),
    CheckConstraint("value IN (1, -1)", name="vote_value_valid"),
)

Index("idx_votes_comment_id", votes_table.c.comment_id)

# ============================================================================
# REPORTS TABLE (append-only)
# ============================================================================
reports_table = Table(
    "reports",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "comment_id", UUID, ForeignKey("comments.id", ondelete="CASCADE"), nullable=False
    ),
    Column("reporter_id", UUID, nullable=False),
    Column("reason", Text, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("char_length(reason) <= 1000", name="reason_max_length"),
)

Index("idx_reports_comment_id", reports_table.c.comment_id)
