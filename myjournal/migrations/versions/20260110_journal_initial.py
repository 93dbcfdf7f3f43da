"""journal entry and custom tag tables

Revision ID: 20260110_journal_initial
Revises:
Create Date: 2026-01-10
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20260110_journal_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "journal_entry",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("date_key", sa.String(length=10), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False, server_default=""),
        sa.Column("has_pin", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("pin", sa.String(length=4)),
        sa.Column("primary_mood", sa.String(length=64), nullable=False),
        sa.Column("secondary_moods_csv", sa.Text(), nullable=False, server_default=""),
        sa.Column(
            "primary_category",
            sa.String(length=16),
            nullable=False,
            server_default="Positive",
        ),
        sa.Column("tags_csv", sa.Text(), nullable=False, server_default=""),
        sa.Column(
            "created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()
        ),
        sa.Column(
            "updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()
        ),
    )
    op.create_index("ux_journal_entry_date_key", "journal_entry", ["date_key"], unique=True)
    op.create_index("ix_journal_entry_created_at", "journal_entry", ["created_at"])
    op.create_index("ix_journal_entry_updated_at", "journal_entry", ["updated_at"])

    op.create_table(
        "journal_custom_tag",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=64), nullable=False),
        sa.Column("name_normalized", sa.String(length=64), nullable=False),
        sa.Column(
            "created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()
        ),
    )
    op.create_index(
        "ux_journal_custom_tag_name_normalized",
        "journal_custom_tag",
        ["name_normalized"],
        unique=True,
    )


def downgrade():
    op.drop_index("ux_journal_custom_tag_name_normalized", table_name="journal_custom_tag")
    op.drop_table("journal_custom_tag")
    op.drop_index("ix_journal_entry_updated_at", table_name="journal_entry")
    op.drop_index("ix_journal_entry_created_at", table_name="journal_entry")
    op.drop_index("ux_journal_entry_date_key", table_name="journal_entry")
    op.drop_table("journal_entry")
