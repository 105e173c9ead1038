"""initial_schema

Create the quote voting schema:
- Quotes (with a denormalized vote counter)
- Votes (the ledger: one active vote per user)

Revision ID: 3f1c9a7d2e41
Revises:
Create Date: 2026-10-19 10:12:44.310522

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f1c9a7d2e41"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # QUOTES table
    # ========================================================================
    op.create_table(
        "quotes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("author", sa.String(100), nullable=False),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column(
            "tags",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column("vote_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("vote_count >= 0", name="vote_count_non_negative"),
    )
    op.create_index("idx_quotes_user_id", "quotes", ["user_id"])
    op.create_index("idx_quotes_category", "quotes", ["category"])
    op.create_index(
        "idx_quotes_vote_count_created_at",
        "quotes",
        [sa.text("vote_count DESC"), sa.text("created_at DESC")],
    )

    # ========================================================================
    # VOTES table (the ledger)
    # ========================================================================
    op.create_table(
        "votes",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("quote_id", sa.Integer(), nullable=False),
        sa.Column("vote_value", sa.SmallInteger(), nullable=False, server_default="1"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["quote_id"], ["quotes.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("vote_value = 1", name="vote_value_up_only"),
        # One active vote per user across all quotes
        sa.UniqueConstraint("user_id", name="uq_votes_user"),
        sa.UniqueConstraint("user_id", "quote_id", name="uq_votes_user_quote"),
    )
    op.create_index("idx_votes_quote_id", "votes", ["quote_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_votes_quote_id", table_name="votes")
    op.drop_table("votes")
    op.drop_index("idx_quotes_vote_count_created_at", table_name="quotes")
    op.drop_index("idx_quotes_category", table_name="quotes")
    op.drop_index("idx_quotes_user_id", table_name="quotes")
    op.drop_table("quotes")
