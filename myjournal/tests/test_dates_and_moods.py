"""Tests for date keys and the mood vocabulary."""

from __future__ import annotations

from datetime import date, datetime

import pytest

pytestmark = pytest.mark.unit

from myjournal.core.errors import DataQualityError, ValidationError
from myjournal.domains.journal.dates import parse_date_key, to_date_key
from myjournal.domains.journal.moods import (
    MOOD_CATALOG,
    category_for_mood,
    moods_in_category,
    normalize_category,
)


# ==================== Date Keys ====================


def test_to_date_key_accepts_date_datetime_and_string():
    assert to_date_key(date(2024, 1, 5)) == "2024-01-05"
    assert to_date_key(datetime(2024, 1, 5, 23, 59)) == "2024-01-05"
    assert to_date_key(" 2024-01-05 ") == "2024-01-05"


@pytest.mark.parametrize("value", ["2024-13-01", "05/01/2024", "", "yesterday", 20240105, None])
def test_to_date_key_rejects_malformed(value):
    with pytest.raises(ValidationError):
        to_date_key(value)


def test_parse_date_key_round_trip():
    assert parse_date_key("2024-02-29") == date(2024, 2, 29)


@pytest.mark.parametrize("key", ["2023-02-29", "not-a-date", "", None])
def test_parse_date_key_malformed_raises_data_quality_error(key):
    with pytest.raises(DataQualityError):
        parse_date_key(key)


# ==================== Moods ====================


def test_catalog_has_five_moods_per_category():
    for category in ("Positive", "Neutral", "Negative"):
        assert len(moods_in_category(category)) == 5
    assert len(MOOD_CATALOG) == 15


def test_category_for_mood_is_case_insensitive():
    assert category_for_mood("happy") == "Positive"
    assert category_for_mood(" Bored ") == "Neutral"
    assert category_for_mood("ANXIOUS") == "Negative"
    assert category_for_mood("Hangry") is None
    assert category_for_mood(None) is None


@pytest.mark.parametrize(
    "value,expected",
    [
        ("Positive", "Positive"),
        ("Neutral", "Neutral"),
        (" Negative ", "Negative"),
        ("negative", "Positive"),
        ("Mixed", "Positive"),
        ("", "Positive"),
        (None, "Positive"),
    ],
)
def test_normalize_category(value, expected):
    assert normalize_category(value) == expected
