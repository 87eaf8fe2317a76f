"""Regex helpers shared by the extractors.

Nothing here builds a DOM.  Patterns are deliberately loose and operate on the
raw markup as served.
"""

from __future__ import annotations

import re
from typing import Iterable, List

# Applied in this order; "&amp;lt;" therefore decodes all the way to "<".
_ENTITIES = (
    ("&#x3C;", "<"),
    ("&#x3E;", ">"),
    ("&#x27;", "'"),
    ("&quot;", '"'),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&#39;", "'"),
)

_TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s+")

_TITLE_RE = re.compile(r"<title[^>]*>([^<]+)</title>", re.IGNORECASE)
_META_DESCRIPTION_RE = re.compile(
    r'<meta[^>]*name="description"[^>]*content="([^"]+)"', re.IGNORECASE
)
_INLINE_CODE_RE = re.compile(r"<code[^>]*>([^<]+)</code>", re.IGNORECASE)


def decode_entities(text: str) -> str:
    """Decode the small fixed set of HTML entities the site emits."""
    for entity, char in _ENTITIES:
        text = text.replace(entity, char)
    return text


def strip_tags(html: str, replacement: str = "") -> str:
    return _TAG_RE.sub(replacement, html)


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def remove_blocks(html: str, tags: Iterable[str]) -> str:
    """Drop every ``<tag ...>...</tag>`` block for each of *tags*."""
    for tag in tags:
        html = re.sub(
            rf"<{tag}[^>]*>.*?</{tag}>", "", html, flags=re.IGNORECASE | re.DOTALL
        )
    return html


def flatten_text(html: str, drop: Iterable[str] = ("script", "style")) -> str:
    """Return the visible text of *html* as one whitespace-normalised line."""
    text = strip_tags(remove_blocks(html, drop), " ")
    return decode_entities(collapse_whitespace(text))


def element_texts(html: str, tag: str) -> List[str]:
    """Return the raw inner text of every ``<tag>`` with no nested markup."""
    pattern = re.compile(rf"<{tag}[^>]*>([^<]+)</{tag}>", re.IGNORECASE)
    return [m.group(1) for m in pattern.finditer(html)]


def first_title(html: str) -> str | None:
    match = _TITLE_RE.search(html)
    if match:
        return match.group(1)
    return None


def meta_description(html: str) -> str | None:
    match = _META_DESCRIPTION_RE.search(html)
    if match:
        return decode_entities(match.group(1))
    return None


def inline_code(html: str) -> List[str]:
    return [decode_entities(m.group(1)) for m in _INLINE_CODE_RE.finditer(html)]
