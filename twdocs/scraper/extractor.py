"""Generic page extraction: turns raw page markup into a :class:`PageRecord`."""

from __future__ import annotations

import re
from typing import List

from twdocs.scraper.markup import (
    decode_entities,
    element_texts,
    first_title,
    flatten_text,
    inline_code,
    meta_description,
    strip_tags,
)
from twdocs.scraper.models import HeaderEntry, PageRecord

# Blocks that carry site chrome rather than page content.
PAGE_CHROME_TAGS = ("script", "style", "nav", "footer", "header")

MIN_PARAGRAPH_LENGTH = 10
MIN_PRE_LENGTH = 10
MIN_LIST_ITEM_LENGTH = 3

_PRE_RE = re.compile(r"<pre[^>]*>(.*?)</pre>", re.IGNORECASE | re.DOTALL)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _extract_headers(html: str) -> List[HeaderEntry]:
    """Return h1s, then h2s, then h3s (grouped by level, not document order)."""
    headers: List[HeaderEntry] = []
    for level in (1, 2, 3):
        for text in element_texts(html, f"h{level}"):
            headers.append(HeaderEntry(level=level, text=decode_entities(text.strip())))
    return headers


def _texts_longer_than(html: str, tag: str, min_length: int) -> List[str]:
    texts = (decode_entities(t.strip()) for t in element_texts(html, tag))
    return [t for t in texts if len(t) > min_length]


def _extract_pre_blocks(html: str) -> List[str]:
    blocks: List[str] = []
    for m in _PRE_RE.finditer(html):
        text = strip_tags(m.group(1)).strip()
        if len(text) > MIN_PRE_LENGTH:
            blocks.append(decode_entities(text))
    return blocks


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_page_content(html: str, name: str) -> PageRecord:
    """Extract title, headings, text blocks and code from a page.

    Length thresholds are applied after trimming: paragraphs must exceed 10
    characters, ``<pre>`` blocks 10 and list items 3.  ``raw_text`` is the
    whole page minus scripts, styles and nav/header/footer chrome.
    """
    title = first_title(html)

    return PageRecord(
        name=name,
        title=decode_entities(title.strip()) if title is not None else None,
        description=meta_description(html),
        headers=_extract_headers(html),
        paragraphs=_texts_longer_than(html, "p", MIN_PARAGRAPH_LENGTH),
        code_snippets=inline_code(html),
        pre_blocks=_extract_pre_blocks(html),
        list_items=_texts_longer_than(html, "li", MIN_LIST_ITEM_LENGTH),
        raw_text=flatten_text(html, drop=PAGE_CHROME_TAGS),
    )
