"""Mood vocabulary and the category each mood belongs to."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

POSITIVE = "Positive"
NEUTRAL = "Neutral"
NEGATIVE = "Negative"

CATEGORIES = (POSITIVE, NEUTRAL, NEGATIVE)
DEFAULT_CATEGORY = POSITIVE


@dataclass(frozen=True)
class Mood:
    name: str
    emoji: str
    category: str


MOOD_CATALOG: List[Mood] = [
    Mood("Happy", "😊", POSITIVE),
    Mood("Excited", "🤩", POSITIVE),
    Mood("Relaxed", "😌", POSITIVE),
    Mood("Grateful", "🙏", POSITIVE),
    Mood("Confident", "💪", POSITIVE),
    Mood("Calm", "😐", NEUTRAL),
    Mood("Thoughtful", "🤔", NEUTRAL),
    Mood("Curious", "🧐", NEUTRAL),
    Mood("Nostalgic", "🥺", NEUTRAL),
    Mood("Bored", "😑", NEUTRAL),
    Mood("Sad", "😢", NEGATIVE),
    Mood("Angry", "😠", NEGATIVE),
    Mood("Stressed", "😣", NEGATIVE),
    Mood("Lonely", "😔", NEGATIVE),
    Mood("Anxious", "😰", NEGATIVE),
]

_BY_NAME: Dict[str, Mood] = {mood.name.casefold(): mood for mood in MOOD_CATALOG}


def category_for_mood(name: Optional[str]) -> Optional[str]:
    mood = _BY_NAME.get((name or "").strip().casefold())
    return mood.category if mood else None


def normalize_category(value: Optional[str]) -> str:
    """Return one of the three categories; anything else becomes ``Positive``."""
    candidate = (value or "").strip()
    return candidate if candidate in CATEGORIES else DEFAULT_CATEGORY


def moods_in_category(category: str) -> List[Mood]:
    return [mood for mood in MOOD_CATALOG if mood.category == category]
