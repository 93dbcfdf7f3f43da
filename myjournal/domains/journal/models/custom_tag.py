"""User-defined tag vocabulary."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from myjournal.extensions import db


class CustomTag(db.Model):
    __tablename__ = "journal_custom_tag"
    __table_args__ = (db.Index("ux_journal_custom_tag_name_normalized", "name_normalized", unique=True),)

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(db.String(64), nullable=False)
    name_normalized: Mapped[str] = mapped_column(db.String(64), nullable=False)
    created_at: Mapped[datetime] = mapped_column(nullable=False)
