"""Writing streaks derived from the set of entry dates."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from myjournal.core.errors import DataQualityError, StorageError
from myjournal.domains.journal.dates import parse_date_key
from myjournal.domains.journal.models import JournalEntry
from myjournal.domains.journal.schemas.journal_schemas import StreakResult
from myjournal.extensions import db

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)


def distinct_dates(date_keys: Iterable[str]) -> List[date]:
    """Parse, de-duplicate and sort keys ascending; malformed keys are skipped."""
    parsed = set()
    for key in date_keys:
        try:
            parsed.add(parse_date_key(key))
        except DataQualityError:
            logger.warning("Skipping journal entry with malformed date key %r", key)
    return sorted(parsed)


def current_streak(dates: List[date], today: date) -> int:
    """Consecutive days ending today, or yesterday when today has no entry."""
    if not dates or dates[-1] < today - ONE_DAY:
        return 0
    present = set(dates)
    check = today if today in present else today - ONE_DAY
    streak = 0
    while check in present:
        streak += 1
        check -= ONE_DAY
    return streak


def longest_streak(dates: List[date]) -> int:
    if not dates:
        return 0
    best = run = 1
    for prev, curr in zip(dates, dates[1:]):
        if curr == prev + ONE_DAY:
            run += 1
            best = max(best, run)
        else:
            run = 1
    return best


def missed_days(dates: List[date]) -> int:
    return sum(max(0, (curr - prev).days - 1) for prev, curr in zip(dates, dates[1:]))


def compute_streaks(date_keys: Iterable[str], today: date) -> StreakResult:
    dates = distinct_dates(date_keys)
    if not dates:
        return StreakResult()
    return StreakResult(
        current_streak=current_streak(dates, today),
        longest_streak=longest_streak(dates),
        missed_days=missed_days(dates),
    )


def calculate_streaks(today: Optional[date] = None) -> StreakResult:
    """Recompute streak stats from every stored entry date."""
    try:
        keys = db.session.scalars(select(JournalEntry.date_key).order_by(JournalEntry.date_key)).all()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception("Database error while loading entry dates")
        raise StorageError(f"Failed to load entry dates: {exc}") from exc
    return compute_streaks(keys, today or date.today())
