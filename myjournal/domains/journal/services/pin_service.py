"""Per-entry PIN checks and the short-lived unlock cache."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Dict, Mapping, Optional

from myjournal.core.errors import ValidationError
from myjournal.domains.journal.models import JournalEntry

PIN_LENGTH = 4


def normalize_pin(value: Optional[str]) -> str:
    """Upper-case the input and keep only letters and digits."""
    return "".join(ch for ch in (value or "").upper() if ch.isalnum())


def validate_pin(has_pin: bool, pin: Optional[str]) -> Optional[str]:
    """Return the PIN to store (None when unprotected)."""
    if not has_pin:
        return None
    normalized = normalize_pin(pin)
    if len(normalized) != PIN_LENGTH:
        raise ValidationError(f"PIN must be exactly {PIN_LENGTH} characters.", field="pin")
    return normalized


def verify_pin(entry: JournalEntry, candidate: Optional[str]) -> bool:
    if not entry.has_pin:
        return True
    supplied = normalize_pin(candidate)
    return len(supplied) == PIN_LENGTH and supplied == normalize_pin(entry.pin)


def is_unlocked(expiries: Mapping[str, datetime], key: str, now: datetime) -> bool:
    """Pure check: key has an expiry at or after ``now``."""
    until = expiries.get(key)
    return until is not None and now <= until


class UnlockCache:
    """Date key -> expiry timestamp for entries unlocked with their PIN."""

    def __init__(self) -> None:
        self._unlocked_until: Dict[str, datetime] = {}

    def unlock(self, key: str, ttl: timedelta, now: datetime) -> None:
        self._unlocked_until[key] = now + ttl

    def is_unlocked(self, key: str, now: datetime) -> bool:
        if not key or not key.strip():
            return False
        if is_unlocked(self._unlocked_until, key, now):
            return True
        # expired -> cleanup
        self._unlocked_until.pop(key, None)
        return False

    def lock(self, key: str) -> None:
        if key and key.strip():
            self._unlocked_until.pop(key, None)

    def clear(self) -> None:
        self._unlocked_until.clear()

    def __len__(self) -> int:
        return len(self._unlocked_until)
