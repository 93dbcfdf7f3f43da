"""Search statement construction for journal entries.

Filter values are only ever bound as parameters. Sort keys are looked up in
a fixed map of columns, so caller input never reaches the SQL structure.
"""

from __future__ import annotations

from typing import Dict, List, Tuple

from sqlalchemy import Select, func, or_, select
from sqlalchemy.sql.elements import ColumnElement

from myjournal.core.utils.pagination import page_window
from myjournal.domains.journal.csv_fields import LIKE_ESCAPE, csv_column_contains, escape_like, fold
from myjournal.domains.journal.dates import to_date_key
from myjournal.domains.journal.models import JournalEntry
from myjournal.domains.journal.schemas.journal_schemas import JournalSearchSpec, SortColumn

SORTABLE_COLUMNS: Dict[SortColumn, object] = {
    SortColumn.DATE_KEY: JournalEntry.date_key,
    SortColumn.TITLE: JournalEntry.title,
    SortColumn.CREATED_AT: JournalEntry.created_at,
    SortColumn.UPDATED_AT: JournalEntry.updated_at,
}


def _clean(values: List[str]) -> List[str]:
    return [v.strip() for v in values if v and v.strip()]


def build_filters(spec: JournalSearchSpec) -> List[ColumnElement[bool]]:
    """AND-composed predicates; each mood/tag set is OR-matched internally."""
    conditions: List[ColumnElement[bool]] = []

    title = fold(spec.title_contains)
    if title:
        conditions.append(JournalEntry.title_folded.like(f"%{escape_like(title)}%", escape=LIKE_ESCAPE))

    if spec.from_date:
        conditions.append(JournalEntry.date_key >= to_date_key(spec.from_date))
    if spec.to_date:
        conditions.append(JournalEntry.date_key <= to_date_key(spec.to_date))

    moods = _clean(spec.moods)
    if moods:
        conditions.append(
            or_(
                *[
                    or_(
                        JournalEntry.primary_mood_folded == fold(mood),
                        csv_column_contains(JournalEntry.secondary_moods_folded, mood),
                    )
                    for mood in moods
                ]
            )
        )

    tags = _clean(spec.tags)
    if tags:
        conditions.append(or_(*[csv_column_contains(JournalEntry.tags_folded, tag) for tag in tags]))

    return conditions


def build_order_by(spec: JournalSearchSpec) -> list:
    column = SORTABLE_COLUMNS.get(spec.sort_column, JournalEntry.date_key)
    if spec.sort_ascending:
        ordering = [column.asc()]
        tie_break = JournalEntry.date_key.asc()
    else:
        ordering = [column.desc()]
        tie_break = JournalEntry.date_key.desc()
    # date_key is unique, so pages never overlap or skip rows on ties.
    if column is not JournalEntry.date_key:
        ordering.append(tie_break)
    return ordering


def build_search_statements(spec: JournalSearchSpec) -> Tuple[Select, Select]:
    """Return (page statement, count statement) sharing the same predicate."""
    conditions = build_filters(spec)
    _, per_page, offset = page_window(spec.page, spec.page_size)

    items_stmt = (
        select(JournalEntry)
        .where(*conditions)
        .order_by(*build_order_by(spec))
        .offset(offset)
        .limit(per_page)
    )
    count_stmt = select(func.count()).select_from(JournalEntry).where(*conditions)
    return items_stmt, count_stmt
