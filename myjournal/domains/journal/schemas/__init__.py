from myjournal.domains.journal.schemas.journal_schemas import (
    DashboardSummary,
    JournalEntryView,
    JournalSearchResult,
    JournalSearchSpec,
    MoodStat,
    SortColumn,
    StreakResult,
    TagStat,
)

__all__ = [
    "DashboardSummary",
    "JournalEntryView",
    "JournalSearchResult",
    "JournalSearchSpec",
    "MoodStat",
    "SortColumn",
    "StreakResult",
    "TagStat",
]
