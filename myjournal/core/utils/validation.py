"""Input validation helpers."""

from __future__ import annotations

from typing import Optional

from myjournal.core.errors import ValidationError


def require_text(value: Optional[str], field: str, label: Optional[str] = None) -> str:
    """Return the trimmed value, rejecting None and whitespace-only input."""
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"{label or field} is required.", field=field)
    return text
