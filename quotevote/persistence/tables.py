"""SQLAlchemy table definitions for quote voting.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    SmallInteger,
    String,
    Table,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# QUOTES TABLE
# ============================================================================
quotes_table = Table(
    "quotes",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", String(255), nullable=False),  # Owner, from identity provider
    Column("content", Text, nullable=False),
    Column("author", String(100), nullable=False),
    Column("category", String(100), nullable=True),
    Column("tags", JSONB, nullable=False, server_default="[]"),
    # Denormalized count of rows in votes referencing this quote.
    # Written only by the vote ledger.
    Column("vote_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
    Column(
        "updated_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
    CheckConstraint("vote_count >= 0", name="vote_count_non_negative"),
)

Index("idx_quotes_user_id", quotes_table.c.user_id)
Index("idx_quotes_category", quotes_table.c.category)
Index(
    "idx_quotes_vote_count_created_at",
    quotes_table.c.vote_count.desc(),
    quotes_table.c.created_at.desc(),
)

# ============================================================================
# VOTES TABLE (the ledger)
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("user_id", String(255), nullable=False),
    Column(
        "quote_id",
        Integer,
        ForeignKey("quotes.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("vote_value", SmallInteger, nullable=False, server_default="1"),
    Column(
        "created_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
    CheckConstraint("vote_value = 1", name="vote_value_up_only"),
    # One active vote per user across all quotes
    UniqueConstraint("user_id", name="uq_votes_user"),
    # Implied by the rule above, enforced on its own as well
    UniqueConstraint("user_id", "quote_id", name="uq_votes_user_quote"),
)

Index("idx_votes_quote_id", votes_table.c.quote_id)
