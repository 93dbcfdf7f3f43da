"""Canonical ``YYYY-MM-DD`` date keys."""

from __future__ import annotations

from datetime import date, datetime
from typing import Union

from myjournal.core.errors import DataQualityError, ValidationError

DATE_KEY_FORMAT = "%Y-%m-%d"

DateLike = Union[date, datetime, str]


def to_date_key(value: DateLike) -> str:
    """Normalize a date, datetime or ``YYYY-MM-DD`` string to a date key."""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str):
        try:
            return datetime.strptime(value.strip(), DATE_KEY_FORMAT).date().isoformat()
        except ValueError:
            raise ValidationError(f"Invalid date key: {value!r}", field="date") from None
    raise ValidationError(f"Unsupported date value: {value!r}", field="date")


def parse_date_key(key: str) -> date:
    try:
        return datetime.strptime(key, DATE_KEY_FORMAT).date()
    except (TypeError, ValueError):
        raise DataQualityError(f"Malformed date key: {key!r}") from None
