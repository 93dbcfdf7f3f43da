"""Journal entry store: keyed upsert, lookups, deletes and paged search."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional

from flask import current_app
from sqlalchemy import delete, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError

from myjournal.core.errors import StorageError
from myjournal.core.utils.pagination import page_count, page_window
from myjournal.core.utils.text import contains_html_tags, html_to_plain_text
from myjournal.core.utils.validation import require_text
from myjournal.domains.journal.csv_fields import clean_values, fold, fold_values, join_values
from myjournal.domains.journal.dates import DateLike, to_date_key
from myjournal.domains.journal.mappers import entry_view
from myjournal.domains.journal.models import JournalEntry
from myjournal.domains.journal.moods import category_for_mood, normalize_category
from myjournal.domains.journal.schemas.journal_schemas import (
    JournalEntryView,
    JournalSearchResult,
    JournalSearchSpec,
)
from myjournal.domains.journal.services.pin_service import UnlockCache, validate_pin, verify_pin
from myjournal.domains.journal.services.query_builder import build_search_statements
from myjournal.extensions import db

logger = logging.getLogger(__name__)

MAX_SECONDARY_MOODS = 2

_UPSERT_DIALECTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _storage_failure(action: str, exc: SQLAlchemyError) -> StorageError:
    db.session.rollback()
    logger.exception("Database error while %s", action)
    return StorageError(f"Failed to {action}: {exc}")


def get_by_date(day: DateLike) -> Optional[JournalEntry]:
    key = to_date_key(day)
    try:
        return db.session.scalars(
            select(JournalEntry)
            .filter_by(date_key=key)
            .execution_options(populate_existing=True)
        ).first()
    except SQLAlchemyError as exc:
        raise _storage_failure("load entry", exc) from exc


def save(
    day: DateLike,
    *,
    title: Optional[str],
    content: Optional[str],
    primary_mood: Optional[str],
    secondary_moods: Optional[Iterable[str]] = None,
    primary_category: Optional[str] = None,
    tags: Optional[Iterable[str]] = None,
    has_pin: bool = False,
    pin: Optional[str] = None,
) -> JournalEntry:
    """Insert or update the single entry for ``day``.

    All validation happens before the write, so a rejected save leaves any
    existing row untouched. ``primary_category`` of None is derived from the
    mood vocabulary; any other value outside Positive/Neutral/Negative is
    stored as Positive.
    """
    key = to_date_key(day)
    title_text = require_text(title, "title", "Title")
    mood = require_text(primary_mood, "primary_mood", "Primary mood")
    stored_pin = validate_pin(has_pin, pin)

    if primary_category is None:
        category = category_for_mood(mood) or normalize_category(None)
    else:
        category = normalize_category(primary_category)

    secondary = [
        m for m in clean_values(secondary_moods, "secondary_moods") if m.casefold() != mood.casefold()
    ][:MAX_SECONDARY_MOODS]
    tag_values = sorted(clean_values(tags, "tags"), key=lambda t: (t.casefold(), t))

    now = _utcnow()
    values = {
        "date_key": key,
        "title": title_text,
        "content": html_to_plain_text(content),
        "has_pin": bool(has_pin),
        "pin": stored_pin,
        "primary_mood": mood,
        "secondary_moods_csv": join_values(secondary),
        "primary_category": category,
        "tags_csv": join_values(tag_values),
        "title_folded": fold(title_text),
        "primary_mood_folded": fold(mood),
        "secondary_moods_folded": fold_values(secondary),
        "tags_folded": fold_values(tag_values),
        "created_at": now,
        "updated_at": now,
    }
    try:
        _upsert(values)
        db.session.commit()
    except SQLAlchemyError as exc:
        raise _storage_failure("save entry", exc) from exc
    logger.debug("Saved journal entry %s", key)
    return get_by_date(key)


def _upsert(values: dict) -> None:
    insert = _UPSERT_DIALECTS.get(db.engine.dialect.name)
    if insert is None:
        raise StorageError(f"Unsupported database dialect: {db.engine.dialect.name}")
    stmt = insert(JournalEntry).values(**values)
    # created_at is only written by the insert branch.
    updatable = {k: getattr(stmt.excluded, k) for k in values if k not in ("date_key", "created_at")}
    db.session.execute(stmt.on_conflict_do_update(index_elements=["date_key"], set_=updatable))


def delete_entry(day: DateLike) -> int:
    """Remove the entry for ``day``; returns the number of rows removed (0 or 1)."""
    key = to_date_key(day)
    try:
        result = db.session.execute(
            delete(JournalEntry)
            .where(JournalEntry.date_key == key)
            .execution_options(synchronize_session=False)
        )
        db.session.commit()
    except SQLAlchemyError as exc:
        raise _storage_failure("delete entry", exc) from exc
    removed = int(result.rowcount or 0)
    if removed:
        logger.debug("Deleted journal entry %s", key)
    return removed


def get_recent(limit: Optional[int] = None) -> List[JournalEntry]:
    take = limit if limit is not None else current_app.config.get("JOURNAL_RECENT_LIMIT", 20)
    try:
        return list(
            db.session.scalars(
                select(JournalEntry)
                .order_by(JournalEntry.updated_at.desc(), JournalEntry.date_key.desc())
                .limit(max(int(take), 0))
            )
        )
    except SQLAlchemyError as exc:
        raise _storage_failure("load recent entries", exc) from exc


def get_by_date_range(start: DateLike, end: DateLike) -> List[JournalEntry]:
    start_key, end_key = to_date_key(start), to_date_key(end)
    try:
        return list(
            db.session.scalars(
                select(JournalEntry)
                .where(JournalEntry.date_key >= start_key, JournalEntry.date_key <= end_key)
                .order_by(JournalEntry.date_key.asc())
            )
        )
    except SQLAlchemyError as exc:
        raise _storage_failure("load entries by range", exc) from exc


def search(spec: Optional[JournalSearchSpec] = None) -> JournalSearchResult:
    """Run a filtered, sorted, paged search.

    ``total_count`` uses the same predicate as the page but ignores the page
    window. A page past the end yields no items. Content of PIN-protected
    rows is always blanked in the result.
    """
    spec = spec or JournalSearchSpec(page_size=current_app.config.get("JOURNAL_DEFAULT_PAGE_SIZE", 10))
    items_stmt, count_stmt = build_search_statements(spec)
    try:
        total = int(db.session.scalar(count_stmt) or 0)
        rows = list(db.session.scalars(items_stmt))
    except SQLAlchemyError as exc:
        raise _storage_failure("search entries", exc) from exc
    page, per_page, _ = page_window(spec.page, spec.page_size)
    return JournalSearchResult(
        items=[entry_view(row, redact=True) for row in rows],
        total_count=total,
        page=page,
        page_size=per_page,
        total_pages=page_count(total, per_page),
    )


def open_entry(
    day: DateLike,
    pin: Optional[str] = None,
    unlocks: Optional[UnlockCache] = None,
    now: Optional[datetime] = None,
) -> Optional[JournalEntryView]:
    """Point lookup that only reveals protected content to a verified PIN.

    A correct ``pin`` records an unlock in ``unlocks`` for the configured TTL;
    a key that is still unlocked needs no PIN.
    """
    entry = get_by_date(day)
    if entry is None:
        return None
    if not entry.has_pin:
        return entry_view(entry)

    now = now or _utcnow()
    if unlocks is not None and unlocks.is_unlocked(entry.date_key, now):
        return entry_view(entry)
    if pin is not None and verify_pin(entry, pin):
        if unlocks is not None:
            ttl = timedelta(seconds=current_app.config.get("JOURNAL_UNLOCK_TTL_SECONDS", 300))
            unlocks.unlock(entry.date_key, ttl, now)
        return entry_view(entry)
    return entry_view(entry, redact=True)


def convert_html_content() -> int:
    """Rewrite any stored HTML content as plain text; returns rows changed."""
    changed = 0
    try:
        for entry in db.session.scalars(select(JournalEntry)):
            if not contains_html_tags(entry.content):
                continue
            plain = html_to_plain_text(entry.content)
            if plain != entry.content:
                entry.content = plain
                changed += 1
        db.session.commit()
    except SQLAlchemyError as exc:
        raise _storage_failure("convert entry content", exc) from exc
    if changed:
        logger.info("Converted %s journal entries to plain text", changed)
    return changed
