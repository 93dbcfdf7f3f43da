"""Personal journal entry: one row per calendar day."""

from __future__ import annotations

from datetime import datetime
from typing import List

from sqlalchemy.orm import Mapped, mapped_column

from myjournal.domains.journal.csv_fields import split_values
from myjournal.extensions import db


class JournalEntry(db.Model):
    __tablename__ = "journal_entry"
    __table_args__ = (
        db.Index("ux_journal_entry_date_key", "date_key", unique=True),
        db.Index("ix_journal_entry_created_at", "created_at"),
        db.Index("ix_journal_entry_updated_at", "updated_at"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    date_key: Mapped[str] = mapped_column(db.String(10), nullable=False)
    title: Mapped[str] = mapped_column(db.String(255), nullable=False)
    content: Mapped[str] = mapped_column(db.Text, nullable=False, default="")
    has_pin: Mapped[bool] = mapped_column(default=False, nullable=False)
    # Normalized upper-case PIN, not hashed.
    pin: Mapped[str | None] = mapped_column(db.String(4))
    primary_mood: Mapped[str] = mapped_column(db.String(64), nullable=False)
    secondary_moods_csv: Mapped[str] = mapped_column(db.Text, nullable=False, default="")
    primary_category: Mapped[str] = mapped_column(db.String(16), nullable=False, default="Positive")
    tags_csv: Mapped[str] = mapped_column(db.Text, nullable=False, default="")
    # Casefolded copies written on save; search matches against these.
    title_folded: Mapped[str] = mapped_column(db.Text, nullable=False, default="")
    primary_mood_folded: Mapped[str] = mapped_column(db.Text, nullable=False, default="")
    secondary_moods_folded: Mapped[str] = mapped_column(db.Text, nullable=False, default="")
    tags_folded: Mapped[str] = mapped_column(db.Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(nullable=False)
    updated_at: Mapped[datetime] = mapped_column(nullable=False)

    @property
    def secondary_moods(self) -> List[str]:
        return split_values(self.secondary_moods_csv)

    @property
    def tags(self) -> List[str]:
        return split_values(self.tags_csv)

    def __repr__(self) -> str:
        return f"<JournalEntry {self.date_key} {self.title!r}>"
