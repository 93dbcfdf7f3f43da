"""Journal request/response schemas."""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class SortColumn(str, Enum):
    DATE_KEY = "DateKey"
    TITLE = "Title"
    CREATED_AT = "CreatedAt"
    UPDATED_AT = "UpdatedAt"


class JournalSearchSpec(BaseModel):
    title_contains: Optional[str] = None
    from_date: Optional[date] = None
    to_date: Optional[date] = None
    moods: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    sort_column: SortColumn = SortColumn.DATE_KEY
    sort_ascending: bool = False
    page: int = 1
    page_size: int = 10

    @field_validator("sort_column", mode="before")
    @classmethod
    def _allow_listed_sort(cls, v):
        # Unknown sort columns fall back to the date key.
        if isinstance(v, SortColumn):
            return v
        try:
            return SortColumn(v)
        except ValueError:
            return SortColumn.DATE_KEY

    @field_validator("page", "page_size", mode="before")
    @classmethod
    def _at_least_one(cls, v):
        try:
            return max(int(v), 1)
        except (TypeError, ValueError):
            return 1

    @field_validator("moods", "tags", mode="before")
    @classmethod
    def _none_as_empty(cls, v):
        return [] if v is None else v


class JournalEntryView(BaseModel):
    id: int
    date_key: str
    title: str
    content: str
    has_pin: bool
    locked: bool = False
    primary_mood: str
    secondary_moods: List[str]
    primary_category: str
    tags: List[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]


class JournalSearchResult(BaseModel):
    items: List[JournalEntryView]
    total_count: int
    page: int
    page_size: int
    total_pages: int


class StreakResult(BaseModel):
    current_streak: int = 0
    longest_streak: int = 0
    missed_days: int = 0


class MoodStat(BaseModel):
    name: str
    count: int
    percent: int


class TagStat(BaseModel):
    name: str
    count: int
    percent: int = 0


class DashboardSummary(BaseModel):
    start: date
    end: date
    total: int = 0
    positive_count: int = 0
    neutral_count: int = 0
    negative_count: int = 0
    positive_pct: int = 0
    neutral_pct: int = 0
    negative_pct: int = 0
    most_frequent_mood: str = ""
    most_frequent_mood_count: int = 0
    most_frequent_mood_pct: int = 0
    top_moods: List[MoodStat] = Field(default_factory=list)
    tag_mentions: List[TagStat] = Field(default_factory=list)
    top_tags_by_entries: List[TagStat] = Field(default_factory=list)
