"""Distinct mood and tag vocabularies for filter chips."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from myjournal.core.errors import StorageError
from myjournal.domains.journal.csv_fields import split_values
from myjournal.domains.journal.models import CustomTag, JournalEntry
from myjournal.extensions import db

logger = logging.getLogger(__name__)


def distinct_values(values: Iterable[str]) -> List[str]:
    """Case-insensitive de-duplication keeping the first-seen casing, sorted."""
    seen: Dict[str, str] = {}
    for raw in values:
        value = (raw or "").strip()
        if value:
            seen.setdefault(value.casefold(), value)
    return sorted(seen.values(), key=lambda v: (v.casefold(), v))


def _scan(*columns) -> list:
    try:
        return db.session.execute(
            select(*columns).order_by(JournalEntry.date_key, JournalEntry.id)
        ).all()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception("Database error while scanning journal entries")
        raise StorageError(f"Failed to scan journal entries: {exc}") from exc


def get_distinct_moods() -> List[str]:
    moods: List[str] = []
    for primary, secondary_csv in _scan(JournalEntry.primary_mood, JournalEntry.secondary_moods_csv):
        moods.append(primary or "")
        moods.extend(split_values(secondary_csv))
    return distinct_values(moods)


def get_distinct_tags() -> List[str]:
    tags: List[str] = []
    for (tags_csv,) in _scan(JournalEntry.tags_csv):
        tags.extend(split_values(tags_csv))
    return distinct_values(tags)


def get_tag_suggestions() -> List[str]:
    """Custom tags first (their casing wins), then tags already in use."""
    try:
        custom = db.session.scalars(select(CustomTag.name).order_by(CustomTag.name)).all()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception("Database error while loading custom tags")
        raise StorageError(f"Failed to load custom tags: {exc}") from exc
    return distinct_values(list(custom) + get_distinct_tags())
