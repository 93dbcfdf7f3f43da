"""Mood and tag analytics over a date range."""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from flask import current_app

from myjournal.domains.journal.csv_fields import split_values
from myjournal.domains.journal.dates import DateLike, parse_date_key, to_date_key
from myjournal.domains.journal.moods import NEGATIVE, NEUTRAL, POSITIVE
from myjournal.domains.journal.schemas.journal_schemas import DashboardSummary, MoodStat, TagStat
from myjournal.domains.journal.services.journal_service import get_by_date_range


def percent(part: int, whole: int) -> int:
    """Integer percentage rounded half-up."""
    if whole <= 0:
        return 0
    return (part * 200 + whole) // (2 * whole)


class _Counter:
    """Case-insensitive counter that remembers the first casing seen."""

    def __init__(self) -> None:
        self.names: Dict[str, str] = {}
        self.counts: Dict[str, int] = {}

    def add(self, name: str) -> None:
        key = name.casefold()
        self.names.setdefault(key, name)
        self.counts[key] = self.counts.get(key, 0) + 1

    def ranked(self) -> List[Tuple[str, int]]:
        return sorted(
            ((self.names[k], c) for k, c in self.counts.items()),
            key=lambda item: (-item[1], item[0].casefold()),
        )

    def total(self) -> int:
        return sum(self.counts.values())


def _balance(stats: List[MoodStat], covers_all: bool) -> None:
    # Only a complete list should sum to 100; the first item absorbs drift.
    if covers_all and stats:
        drift = 100 - sum(s.percent for s in stats)
        stats[0].percent += drift


def summarize_range(start: DateLike, end: DateLike, top_n: Optional[int] = None) -> DashboardSummary:
    if top_n is None:
        top_n = current_app.config.get("JOURNAL_DASHBOARD_TOP_N", 8)
    summary = DashboardSummary(start=parse_date_key(to_date_key(start)), end=parse_date_key(to_date_key(end)))

    categories = {POSITIVE.casefold(): 0, NEUTRAL.casefold(): 0, NEGATIVE.casefold(): 0}
    moods = _Counter()
    tag_mentions = _Counter()
    tag_entries = _Counter()
    tagged_entries = 0

    for entry in get_by_date_range(start, end):
        category = (entry.primary_category or "").strip().casefold()
        if category in categories:
            categories[category] += 1

        mood = (entry.primary_mood or "").strip()
        if mood:
            moods.add(mood)

        tags = split_values(entry.tags_csv)
        if not tags:
            continue
        tagged_entries += 1
        unique: Dict[str, str] = {}
        for tag in tags:
            tag_mentions.add(tag)
            unique.setdefault(tag.casefold(), tag)
        for tag in unique.values():
            tag_entries.add(tag)

    summary.positive_count = categories[POSITIVE.casefold()]
    summary.neutral_count = categories[NEUTRAL.casefold()]
    summary.negative_count = categories[NEGATIVE.casefold()]
    summary.total = summary.positive_count + summary.neutral_count + summary.negative_count
    if summary.total == 0:
        return summary

    summary.positive_pct = percent(summary.positive_count, summary.total)
    summary.neutral_pct = percent(summary.neutral_count, summary.total)
    summary.negative_pct = 100 - summary.positive_pct - summary.neutral_pct

    mood_total = moods.total()
    ranked_moods = moods.ranked()
    if ranked_moods:
        top_name, top_count = ranked_moods[0]
        summary.most_frequent_mood = top_name
        summary.most_frequent_mood_count = top_count
        summary.most_frequent_mood_pct = percent(top_count, mood_total)
        summary.top_moods = [
            MoodStat(name=name, count=count, percent=percent(count, mood_total))
            for name, count in ranked_moods[:top_n]
        ]
        _balance(summary.top_moods, len(ranked_moods) <= top_n)

    summary.tag_mentions = [TagStat(name=name, count=count) for name, count in tag_mentions.ranked()]
    ranked_tags = tag_entries.ranked()
    summary.top_tags_by_entries = [
        TagStat(name=name, count=count, percent=percent(count, tagged_entries))
        for name, count in ranked_tags[:top_n]
    ]
    return summary
