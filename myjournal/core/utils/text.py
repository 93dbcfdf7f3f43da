"""Plain-text conversion for editor markup."""

from __future__ import annotations

import html
import re
from typing import Optional

_BLOCK_BREAK = re.compile(r"<br\s*/?>|</p>|</div>|</h[1-6]>|</li>", re.IGNORECASE)
_ANY_TAG = re.compile(r"</?[A-Za-z!][^<>]*>")
_INLINE_SPACE = re.compile(r"[ \t]+")
_EXTRA_BLANK_LINES = re.compile(r"\n{3,}")


def html_to_plain_text(markup: Optional[str]) -> str:
    """Convert editor HTML to plain text, keeping line and paragraph breaks.

    Block-level closing tags and ``<br>`` become newlines, remaining tags are
    dropped, entities are decoded, runs of spaces/tabs collapse to one space
    and more than one blank line collapses to a single blank line.
    """
    if not markup or not markup.strip():
        return ""
    text = _BLOCK_BREAK.sub("\n", markup)
    text = _ANY_TAG.sub("", text)
    text = html.unescape(text)
    text = _INLINE_SPACE.sub(" ", text)
    text = _EXTRA_BLANK_LINES.sub("\n\n", text)
    return text.strip()


def contains_html_tags(text: Optional[str]) -> bool:
    if not text or not text.strip():
        return False
    return bool(_ANY_TAG.search(text))
