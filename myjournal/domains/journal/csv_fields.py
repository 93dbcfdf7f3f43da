"""Comma-joined multi-value columns (secondary moods, tags).

Values are stored as a single text column, alongside a casefolded copy used for
matching. Membership checks wrap both the stored value and the token in
delimiters so ``art`` never matches ``cart``.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from sqlalchemy import func, literal
from sqlalchemy.sql.elements import ColumnElement

from myjournal.core.errors import ValidationError

DELIMITER = ","
LIKE_ESCAPE = "\\"


def clean_values(values: Optional[Iterable[Optional[str]]], field: str) -> List[str]:
    """Trim, drop blanks and de-duplicate case-insensitively (first casing wins)."""
    seen = set()
    cleaned: List[str] = []
    for raw in values or []:
        value = (raw or "").strip()
        if not value:
            continue
        if DELIMITER in value:
            raise ValidationError(f"{value!r} must not contain {DELIMITER!r}.", field=field)
        key = value.casefold()
        if key in seen:
            continue
        seen.add(key)
        cleaned.append(value)
    return cleaned


def join_values(values: Iterable[str]) -> str:
    return DELIMITER.join(values)


def fold(value: Optional[str]) -> str:
    """Case-insensitive matching key; SQL LOWER() only folds ASCII."""
    return (value or "").strip().casefold()


def fold_values(values: Iterable[str]) -> str:
    return join_values(fold(v) for v in values)


def split_values(stored: Optional[str]) -> List[str]:
    if not stored:
        return []
    return [part.strip() for part in stored.split(DELIMITER) if part.strip()]


def csv_contains(stored: Optional[str], token: str) -> bool:
    """Exact-token, case-insensitive membership test on a stored CSV value."""
    needle = fold(token)
    if not needle:
        return False
    bounded = f"{DELIMITER}{(stored or '').casefold()}{DELIMITER}"
    return f"{DELIMITER}{needle}{DELIMITER}" in bounded


def escape_like(value: str) -> str:
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def csv_column_contains(folded_column, token: str) -> ColumnElement[bool]:
    """SQL counterpart of :func:`csv_contains` for a casefolded CSV column."""
    needle = escape_like(fold(token))
    bounded = literal(DELIMITER).concat(func.coalesce(folded_column, "")).concat(DELIMITER)
    return bounded.like(f"%{DELIMITER}{needle}{DELIMITER}%", escape=LIKE_ESCAPE)
