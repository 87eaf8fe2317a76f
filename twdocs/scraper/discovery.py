"""Target discovery: sitemaps plus the blog index become scrape targets.

    site sitemap + blog index + known blog slugs → pages / blogs
    docs sitemap                                 → docs pages / endpoint slugs

Every collection comes back deduplicated by name and sorted, so two runs over
the same site produce targets in the same order.
"""

from __future__ import annotations

import re
from typing import Callable, Iterable, List
from urllib.parse import urlsplit

import httpx
import typer

from twdocs.scraper.fetcher import fetch_text
from twdocs.scraper.models import DiscoveredTargets, ScrapeTarget
from twdocs.scraper.normalize import (
    DEFAULT_TABLES,
    SITE_HOST,
    KeyTables,
    blog_key_from_url,
    category_for_page_key,
    page_key_from_url,
)

SITE_ORIGIN = f"https://{SITE_HOST}"
SITE_SITEMAP_URL = f"{SITE_ORIGIN}/sitemap.xml"
BLOG_INDEX_URL = f"{SITE_ORIGIN}/blog/"
DOCS_ORIGIN = "https://docs.twitterapi.io"
DOCS_SITEMAP_URL = f"{DOCS_ORIGIN}/sitemap.xml"
DOCS_ENDPOINT_PREFIX = f"{DOCS_ORIGIN}/api-reference/endpoint/"

_LOC_RE = re.compile(r"<loc>([^<]+)</loc>")
_BLOG_HREF_RE = re.compile(r"""href=["'](/blog/[^"'?#]+)/?["']""", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------

def extract_sitemap_locs(xml: str) -> List[str]:
    """Return every non-empty ``<loc>`` value of a sitemap, in document order."""
    locs = (m.group(1).strip() for m in _LOC_RE.finditer(xml))
    return [loc for loc in locs if loc]


def discover_blog_urls(html: str, origin: str = SITE_ORIGIN) -> List[str]:
    """Return absolute URLs for each ``/blog/<slug>`` anchor in *html*.

    Query strings and fragments are excluded by the pattern; trailing slashes
    are trimmed so ``/blog/x`` and ``/blog/x/`` collapse into one URL.
    """
    seen: set[str] = set()
    urls: List[str] = []
    for m in _BLOG_HREF_RE.finditer(html):
        path = m.group(1).rstrip("/")
        if path == "/blog":
            continue
        url = f"{origin}{path}"
        if url not in seen:
            seen.add(url)
            urls.append(url)
    return urls


def _is_blog_post(path: str) -> bool:
    return path.startswith("/blog/") and path not in ("/blog/", "/blog")


def _unique_sorted(targets: Iterable[ScrapeTarget]) -> List[ScrapeTarget]:
    by_name: dict[str, ScrapeTarget] = {}
    for target in targets:
        by_name.setdefault(target.name, target)
    return sorted(by_name.values(), key=lambda t: t.name)


# ---------------------------------------------------------------------------
# Per-site partitioning
# ---------------------------------------------------------------------------

def partition_site_urls(
    urls: Iterable[str], tables: KeyTables = DEFAULT_TABLES
) -> tuple[List[ScrapeTarget], List[ScrapeTarget]]:
    """Split marketing-site URLs into ``(pages, blogs)``; other hosts are dropped."""
    pages: List[ScrapeTarget] = []
    blogs: List[ScrapeTarget] = []
    for url in sorted(urls):
        parts = urlsplit(url)
        if parts.hostname != SITE_HOST:
            continue
        if _is_blog_post(parts.path):
            blogs.append(
                ScrapeTarget(url=url, name=blog_key_from_url(url, tables), category="blog")
            )
        else:
            name = page_key_from_url(url)
            pages.append(
                ScrapeTarget(
                    url=url,
                    name=name,
                    category=category_for_page_key(name, parts.hostname, tables),
                )
            )
    return _unique_sorted(pages), _unique_sorted(blogs)


def partition_docs_urls(urls: Iterable[str]) -> tuple[List[ScrapeTarget], List[str]]:
    """Split docs-site URLs into ``(docs_pages, endpoint_slugs)``."""
    pages: List[ScrapeTarget] = []
    slugs: set[str] = set()
    for url in sorted(urls):
        if not url.startswith(f"{DOCS_ORIGIN}/"):
            continue
        if url.startswith(DOCS_ENDPOINT_PREFIX):
            slug = url[len(DOCS_ENDPOINT_PREFIX):].rstrip("/")
            if slug:
                slugs.add(slug)
        else:
            pages.append(ScrapeTarget(url=url, name=page_key_from_url(url), category="docs"))
    return _unique_sorted(pages), sorted(slugs)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def discover_targets(
    fetch: Callable[[str], str] = fetch_text,
    tables: KeyTables = DEFAULT_TABLES,
    echo: Callable[[str], None] = typer.echo,
) -> DiscoveredTargets:
    """Build the full, ordered target list for one scrape run.

    Steps:
        1. Site sitemap ``<loc>`` URLs.
        2. ``/blog/`` anchors from the blog index (best effort; an HTTP
           failure here only costs the extra posts).
        3. The known blog slugs from ``tables.blog_key_overrides``, which the
           sitemap and index have been seen to omit.
        4. Partition into pages and blog posts.
        5. Docs sitemap, partitioned into docs pages and endpoint slugs.

    Raises:
        httpx.HTTPError: If either sitemap cannot be fetched.
    """
    site_urls = set(extract_sitemap_locs(fetch(SITE_SITEMAP_URL)))

    try:
        site_urls.update(discover_blog_urls(fetch(BLOG_INDEX_URL)))
    except httpx.HTTPError as exc:
        echo(f"[discover] Blog index unavailable ({exc}); using sitemap only.")

    for slug in tables.blog_key_overrides:
        site_urls.add(f"{SITE_ORIGIN}/blog/{slug}")

    site_pages, site_blogs = partition_site_urls(site_urls, tables)

    docs_urls = extract_sitemap_locs(fetch(DOCS_SITEMAP_URL))
    docs_pages, endpoints = partition_docs_urls(docs_urls)

    return DiscoveredTargets(
        site_pages=site_pages,
        site_blogs=site_blogs,
        docs_pages=docs_pages,
        endpoints=endpoints,
    )
