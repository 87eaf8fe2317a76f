"""Stable identifier keys and categories for discovered URLs.

The lookup tables (blog key overrides, guide-page allowlist) are bundled in a
:class:`KeyTables` value that every function accepts as ``tables=``; the
module default describes twitterapi.io.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping
from urllib.parse import urlsplit

SITE_HOST = "twitterapi.io"
DOCS_HOST = "docs.twitterapi.io"

HOME_KEY = "home"
BLOG_INDEX_KEY = "blog_index"
BLOG_KEY_PREFIX = "blog_"

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def _frozen_mapping(items: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType(dict(items))


@dataclass(frozen=True)
class KeyTables:
    """Read-only lookup tables used to name and classify targets."""

    blog_key_overrides: Mapping[str, str] = field(
        default_factory=lambda: _frozen_mapping({})
    )
    guide_page_keys: frozenset[str] = frozenset()
    docs_host: str = DOCS_HOST

    @classmethod
    def build(
        cls,
        blog_key_overrides: Mapping[str, str] | None = None,
        guide_page_keys: set[str] | frozenset[str] | None = None,
        docs_host: str = DOCS_HOST,
    ) -> "KeyTables":
        return cls(
            blog_key_overrides=_frozen_mapping(blog_key_overrides or {}),
            guide_page_keys=frozenset(guide_page_keys or ()),
            docs_host=docs_host,
        )


DEFAULT_TABLES = KeyTables.build(
    blog_key_overrides={
        "twitter-api-pricing-2025": "blog_pricing_2025",
        "twitter-analytics-api-guide": "blog_analytics_guide",
        "apify-alternative-for-twitter": "blog_apify_alternative",
        "build-twitter-apps-with-kiro-ai-ide": "blog_kiro_ai",
        "resources-and-tools": "blog_resources",
        "how-to-monitor-twitter-accounts-for-new-tweets-in-real-time": "blog_monitor_tweets",
    },
    guide_page_keys={
        "pricing",
        "qps_limits",
        "tweet_filter_rules",
        "changelog",
        "readme",
        "twitter_stream",
        "introduction",
        "authentication",
    },
)


def normalize_key(value: str) -> str:
    """Lower-case *value* and squeeze every non-alphanumeric run to ``_``.

    >>> normalize_key("Tweet Filter--Rules/")
    'tweet_filter_rules'
    """
    return _NON_ALNUM_RE.sub("_", value.lower()).strip("_")


def strip_slashes(value: str) -> str:
    return value.strip("/")


def _clean_path(url: str) -> str:
    return strip_slashes(urlsplit(url).path)


def page_key_from_url(url: str) -> str:
    """Derive a page key from the path of *url* (``/a/b`` becomes ``a_b``)."""
    clean = _clean_path(url)
    if not clean:
        return HOME_KEY
    if clean == "blog":
        return BLOG_INDEX_KEY
    return normalize_key(clean.replace("/", "_"))


def blog_key_from_url(url: str, tables: KeyTables = DEFAULT_TABLES) -> str:
    """Derive a blog key, preferring the fixed override table for known slugs."""
    clean = _clean_path(url)
    if not clean or clean == "blog":
        return BLOG_INDEX_KEY

    slug = clean[len("blog/"):] if clean.startswith("blog/") else clean
    override = tables.blog_key_overrides.get(slug)
    if override:
        return override
    return BLOG_KEY_PREFIX + normalize_key(slug)


def category_for_page_key(key: str, host: str, tables: KeyTables = DEFAULT_TABLES) -> str:
    """Classify a page; the docs host wins over every key-based rule."""
    if host == tables.docs_host:
        return "docs"
    if key == BLOG_INDEX_KEY:
        return "blog"
    if key in tables.guide_page_keys:
        return "guide"
    return "info"
