"""Add casefolded match columns to journal_entry.

SQLite's LOWER() and LIKE only fold ASCII, so search compares against copies
folded in Python when the entry is saved. Existing rows are backfilled here.

Revision ID: 20260301_journal_folded_columns
Revises: 20260110_journal_initial
Create Date: 2026-03-01
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20260301_journal_folded_columns"
down_revision = "20260110_journal_initial"
branch_labels = None
depends_on = None

FOLDED_COLUMNS = (
    "title_folded",
    "primary_mood_folded",
    "secondary_moods_folded",
    "tags_folded",
)


def _fold_csv(value):
    return ",".join(part.strip().casefold() for part in (value or "").split(",") if part.strip())


def upgrade():
    with op.batch_alter_table("journal_entry") as batch_op:
        for name in FOLDED_COLUMNS:
            batch_op.add_column(sa.Column(name, sa.Text(), nullable=False, server_default=""))

    journal_entry = sa.table(
        "journal_entry",
        sa.column("id", sa.Integer),
        sa.column("title", sa.String),
        sa.column("primary_mood", sa.String),
        sa.column("secondary_moods_csv", sa.Text),
        sa.column("tags_csv", sa.Text),
        *[sa.column(name, sa.Text) for name in FOLDED_COLUMNS],
    )
    bind = op.get_bind()
    rows = bind.execute(
        sa.select(
            journal_entry.c.id,
            journal_entry.c.title,
            journal_entry.c.primary_mood,
            journal_entry.c.secondary_moods_csv,
            journal_entry.c.tags_csv,
        )
    ).all()
    for row in rows:
        bind.execute(
            journal_entry.update()
            .where(journal_entry.c.id == row.id)
            .values(
                title_folded=(row.title or "").strip().casefold(),
                primary_mood_folded=(row.primary_mood or "").strip().casefold(),
                secondary_moods_folded=_fold_csv(row.secondary_moods_csv),
                tags_folded=_fold_csv(row.tags_csv),
            )
        )


def downgrade():
    with op.batch_alter_table("journal_entry") as batch_op:
        for name in reversed(FOLDED_COLUMNS):
            batch_op.drop_column(name)
