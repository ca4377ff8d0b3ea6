"""SQLAlchemy table definitions for pack discussions.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    Column,
    ForeignKey,
    Identity,
    Index,
    MetaData,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import ENUM, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", BigInteger, Identity(always=True), primary_key=True),
    Column("subject_id", BigInteger, nullable=False),  # Catalog item, owned elsewhere
    Column(
        "parent_id",
        BigInteger,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
    ),
    Column("author_id", UUID(as_uuid=True), nullable=False),  # External identity
    Column("body", Text, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "char_length(body) BETWEEN 1 AND 500",
        name="body_length",
    ),
)

# Listing filter is an exact (subject, parent) match
Index(
    "idx_comments_subject_parent_created",
    comments_table.c.subject_id,
    comments_table.c.parent_id,
    comments_table.c.created_at.desc(),
)
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_author_id", comments_table.c.author_id)

# ============================================================================
# VOTES TABLE
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column(
        "comment_id",
        BigInteger,
        ForeignKey("comments.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("user_id", UUID(as_uuid=True), primary_key=True),
    Column(
        "direction",
        ENUM("up", "down", name="vote_direction", create_type=False),
        nullable=False,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_votes_comment_direction", votes_table.c.comment_id, votes_table.c.direction)
Index("idx_votes_user_id", votes_table.c.user_id)
