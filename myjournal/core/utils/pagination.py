"""Pagination helpers for SQLAlchemy queries."""

from __future__ import annotations

from typing import Tuple


def page_window(page: int = 1, per_page: int = 20) -> Tuple[int, int, int]:
    """Clamp page/per_page to at least 1 and return (page, per_page, offset)."""
    page = max(int(page or 1), 1)
    per_page = max(int(per_page or 1), 1)
    return page, per_page, (page - 1) * per_page


def page_count(total: int, per_page: int) -> int:
    if total <= 0:
        return 0
    return (total + per_page - 1) // per_page
