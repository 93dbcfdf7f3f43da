from myjournal.domains.journal.models.custom_tag import CustomTag
from myjournal.domains.journal.models.journal_entry import JournalEntry

__all__ = ["CustomTag", "JournalEntry"]
