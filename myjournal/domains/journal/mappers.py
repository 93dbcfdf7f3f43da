"""Journal mappers for view models."""

from __future__ import annotations

from myjournal.domains.journal.models import JournalEntry
from myjournal.domains.journal.schemas.journal_schemas import JournalEntryView


def entry_view(entry: JournalEntry, *, redact: bool = False) -> JournalEntryView:
    """Map an entry row to its view; ``redact`` blanks content of PIN-protected rows."""
    locked = bool(redact and entry.has_pin)
    return JournalEntryView(
        id=entry.id,
        date_key=entry.date_key,
        title=entry.title,
        content="" if locked else (entry.content or ""),
        has_pin=bool(entry.has_pin),
        locked=locked,
        primary_mood=entry.primary_mood or "",
        secondary_moods=entry.secondary_moods,
        primary_category=entry.primary_category or "",
        tags=entry.tags,
        created_at=entry.created_at,
        updated_at=entry.updated_at,
    )
