"""
Integration tests for filtered, sorted and paged journal search.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from myjournal.domains.journal.schemas import JournalSearchSpec, SortColumn
from myjournal.domains.journal.services import journal_service

pytestmark = pytest.mark.integration


def _keys(result):
    return [item.date_key for item in result.items]


@pytest.fixture()
def seeded(app, make_entry):
    """Five entries with a spread of titles, moods and tags."""
    make_entry("2024-01-01", title="New year plans", primary_mood="Excited", tags=["goals", "art"])
    make_entry("2024-01-02", title="Gym day", primary_mood="Confident", secondary_moods=["Stressed"], tags=["health"])
    make_entry("2024-01-03", title="Museum trip", primary_mood="Curious", tags=["cart", "travel"])
    make_entry("2024-01-04", title="100% done", primary_mood="Relaxed", tags=["work"])
    make_entry("2024-01-05", title="Rainy", primary_mood="Sad", secondary_moods=["Lonely"])


# ==================== Filters ====================


def test_empty_spec_returns_everything_newest_first(seeded):
    result = journal_service.search(JournalSearchSpec())
    assert result.total_count == 5
    assert _keys(result) == ["2024-01-05", "2024-01-04", "2024-01-03", "2024-01-02", "2024-01-01"]


def test_default_spec_uses_configured_page_size(app, seeded):
    app.config["JOURNAL_DEFAULT_PAGE_SIZE"] = 2
    result = journal_service.search()
    assert result.page_size == 2
    assert len(result.items) == 2


def test_title_filter_is_case_insensitive_substring(seeded):
    result = journal_service.search(JournalSearchSpec(title_contains="  GYM "))
    assert _keys(result) == ["2024-01-02"]


def test_title_wildcards_match_literally(seeded):
    """A '%' or '_' in the title filter is not a LIKE wildcard."""
    assert _keys(journal_service.search(JournalSearchSpec(title_contains="100%"))) == ["2024-01-04"]
    assert journal_service.search(JournalSearchSpec(title_contains="_")).total_count == 0
    assert journal_service.search(JournalSearchSpec(title_contains="%")).total_count == 1


def test_date_range_is_inclusive(seeded):
    spec = JournalSearchSpec(from_date=date(2024, 1, 2), to_date=date(2024, 1, 4), sort_ascending=True)
    assert _keys(journal_service.search(spec)) == ["2024-01-02", "2024-01-03", "2024-01-04"]


def test_open_ended_date_range(seeded):
    assert journal_service.search(JournalSearchSpec(from_date=date(2024, 1, 4))).total_count == 2
    assert journal_service.search(JournalSearchSpec(to_date=date(2024, 1, 1))).total_count == 1


def test_from_after_to_matches_nothing(seeded):
    spec = JournalSearchSpec(from_date=date(2024, 1, 5), to_date=date(2024, 1, 1))
    result = journal_service.search(spec)
    assert result.total_count == 0
    assert result.items == []


def test_mood_filter_matches_primary_or_secondary(seeded):
    """Moods are OR-ed and match either the primary or a secondary mood."""
    spec = JournalSearchSpec(moods=["stressed", "Sad"], sort_ascending=True)
    assert _keys(journal_service.search(spec)) == ["2024-01-02", "2024-01-05"]


def test_mood_filter_matches_whole_names_only(seeded):
    assert journal_service.search(JournalSearchSpec(moods=["Lone"])).total_count == 0


def test_tag_filter_is_exact_token(seeded):
    """'art' must not match 'cart'."""
    assert _keys(journal_service.search(JournalSearchSpec(tags=["art"]))) == ["2024-01-01"]
    assert _keys(journal_service.search(JournalSearchSpec(tags=["CART"]))) == ["2024-01-03"]


def test_tag_filter_is_or_within_set(seeded):
    spec = JournalSearchSpec(tags=["work", "health"], sort_ascending=True)
    assert _keys(journal_service.search(spec)) == ["2024-01-02", "2024-01-04"]


def test_blank_filter_values_are_ignored(seeded):
    spec = JournalSearchSpec(title_contains="   ", moods=["", " "], tags=[" "])
    assert journal_service.search(spec).total_count == 5


def test_filters_compose_with_and(seeded):
    spec = JournalSearchSpec(
        moods=["Curious", "Excited"],
        tags=["travel", "work"],
        from_date=date(2024, 1, 2),
    )
    assert _keys(journal_service.search(spec)) == ["2024-01-03"]


# ==================== Sorting ====================


def test_sort_by_title_ascending(seeded):
    spec = JournalSearchSpec(sort_column="Title", sort_ascending=True)
    titles = [item.title for item in journal_service.search(spec).items]
    assert titles == ["100% done", "Gym day", "Museum trip", "New year plans", "Rainy"]


def test_unknown_sort_column_falls_back_to_date_key(seeded):
    spec = JournalSearchSpec(sort_column="title; DROP TABLE journal_entry", sort_ascending=True)
    assert spec.sort_column is SortColumn.DATE_KEY
    assert _keys(journal_service.search(spec))[0] == "2024-01-01"


def test_ties_are_broken_by_date_key(app, make_entry, monkeypatch):
    """Rows sharing a sort value page deterministically."""
    stamp = datetime(2024, 2, 1, 12, 0, 0)
    monkeypatch.setattr(journal_service, "_utcnow", lambda: stamp)
    for key in ("2024-01-03", "2024-01-01", "2024-01-02"):
        make_entry(key)

    spec = JournalSearchSpec(sort_column=SortColumn.UPDATED_AT, sort_ascending=True, page_size=2)
    first = journal_service.search(spec)
    second = journal_service.search(spec.model_copy(update={"page": 2}))

    assert _keys(first) == ["2024-01-01", "2024-01-02"]
    assert _keys(second) == ["2024-01-03"]


def test_sort_by_created_at_descending(app, make_entry, monkeypatch):
    base = datetime(2024, 2, 1, 12, 0, 0)
    for offset, key in enumerate(["2024-01-02", "2024-01-01", "2024-01-03"]):
        monkeypatch.setattr(journal_service, "_utcnow", lambda o=offset: base + timedelta(minutes=o))
        make_entry(key)

    spec = JournalSearchSpec(sort_column=SortColumn.CREATED_AT)
    assert _keys(journal_service.search(spec)) == ["2024-01-03", "2024-01-01", "2024-01-02"]


# ==================== Paging ====================


def test_paging_walks_all_rows_once(seeded):
    seen = []
    for page in (1, 2, 3):
        result = journal_service.search(JournalSearchSpec(page=page, page_size=2))
        assert result.total_count == 5
        assert result.total_pages == 3
        seen.extend(_keys(result))
    assert sorted(seen) == ["2024-01-01", "2024-01-02", "2024-01-03", "2024-01-04", "2024-01-05"]


def test_page_past_end_is_empty_with_total(seeded):
    result = journal_service.search(JournalSearchSpec(page=10, page_size=2))
    assert result.items == []
    assert result.total_count == 5


def test_total_count_respects_filters_not_page(seeded):
    result = journal_service.search(JournalSearchSpec(tags=["art", "health", "work"], page_size=1))
    assert len(result.items) == 1
    assert result.total_count == 3


def test_page_and_size_are_clamped(seeded):
    result = journal_service.search(JournalSearchSpec(page=0, page_size=-5))
    assert result.page == 1
    assert result.page_size == 1
    assert _keys(result) == ["2024-01-05"]


# ==================== Privacy ====================


def test_protected_content_is_hidden_in_results(app, make_entry):
    make_entry("2024-01-01", content="Secret plans", has_pin=True, pin="1234")
    make_entry("2024-01-02", content="Public notes")

    items = {item.date_key: item for item in journal_service.search(JournalSearchSpec()).items}

    assert items["2024-01-01"].content == ""
    assert items["2024-01-01"].locked is True
    assert items["2024-01-01"].title == "Entry"
    assert items["2024-01-02"].content == "Public notes"
    # stored row is untouched
    assert journal_service.get_by_date("2024-01-01").content == "Secret plans"


# ==================== Non-ASCII values ====================


@pytest.mark.parametrize("query", ["Été", "été", "ÉTÉ"])
def test_non_ascii_tag_matches_in_any_case(app, make_entry, query):
    """Accented tags match regardless of the casing used in the filter."""
    make_entry("2024-06-01", tags=["Été"])
    make_entry("2024-06-02", tags=["Hiver"])

    assert _keys(journal_service.search(JournalSearchSpec(tags=[query]))) == ["2024-06-01"]


@pytest.mark.parametrize("query", ["Ängstlich", "ängstlich"])
def test_non_ascii_primary_mood_matches_in_any_case(app, make_entry, query):
    make_entry("2024-06-01", primary_mood="Ängstlich")
    make_entry("2024-06-02", primary_mood="Happy")

    assert _keys(journal_service.search(JournalSearchSpec(moods=[query]))) == ["2024-06-01"]


def test_non_ascii_secondary_mood_matches_in_any_case(app, make_entry):
    make_entry("2024-06-01", primary_mood="Happy", secondary_moods=["Müde"])

    assert journal_service.search(JournalSearchSpec(moods=["MÜDE"])).total_count == 1
    assert journal_service.search(JournalSearchSpec(moods=["Müd"])).total_count == 0


def test_non_ascii_title_matches_in_any_case(app, make_entry):
    make_entry("2024-06-01", title="Ärger im Büro")

    assert journal_service.search(JournalSearchSpec(title_contains="BÜRO")).total_count == 1
    assert journal_service.search(JournalSearchSpec(title_contains="ärger")).total_count == 1


def test_non_ascii_tag_keeps_token_boundaries(app, make_entry):
    make_entry("2024-06-01", tags=["Café"])

    assert journal_service.search(JournalSearchSpec(tags=["caf"])).total_count == 0
    assert journal_service.search(JournalSearchSpec(tags=["CAFÉ"])).total_count == 1
