"""Full scrape run.

``scrape_all`` drives the pipeline from discovery to the JSON file on disk:

    discover → pages → blogs → endpoints → aggregate → write

Requests are strictly sequential with a fixed pause after each item.  A
failing item never stops the run: pages and blogs are skipped, endpoints get
an :class:`EndpointError` stub so every discovered slug stays accounted for.
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Union

import typer

from twdocs.config import settings
from twdocs.reference import DOCUMENT_VERSION, SOURCE_DESCRIPTION, static_blocks
from twdocs.scraper.discovery import discover_targets
from twdocs.scraper.endpoint import endpoint_url, extract_endpoint_content
from twdocs.scraper.extractor import extract_page_content
from twdocs.scraper.fetcher import fetch_text
from twdocs.scraper.models import (
    DiscoveredTargets,
    EndpointError,
    EndpointRecord,
    PageRecord,
    ScrapeTarget,
    utc_timestamp,
)
from twdocs.scraper.normalize import DEFAULT_TABLES, KeyTables

Fetch = Callable[[str], str]
Echo = Callable[[str], None]


@dataclass
class AggregateDocument:
    """Everything one run produced, in the shape written to disk."""

    total_endpoints: int = 0
    total_pages: int = 0
    total_blogs: int = 0
    scraped_at: str = field(default_factory=utc_timestamp)
    endpoints: Dict[str, Union[EndpointRecord, EndpointError]] = field(default_factory=dict)
    pages: Dict[str, PageRecord] = field(default_factory=dict)
    blogs: Dict[str, PageRecord] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "meta": {
                "source": SOURCE_DESCRIPTION,
                "scraped_at": self.scraped_at,
                "version": DOCUMENT_VERSION,
                "total_endpoints": self.total_endpoints,
                "total_pages": self.total_pages,
                "total_blogs": self.total_blogs,
            },
            **static_blocks(),
            "endpoints": {k: v.to_dict() for k, v in self.endpoints.items()},
            "pages": {k: v.to_dict() for k, v in self.pages.items()},
            "blogs": {k: v.to_dict() for k, v in self.blogs.items()},
        }


@dataclass
class ScrapeSummary:
    endpoints: int
    pages: int
    blogs: int
    failed: int
    output_path: Path


# ---------------------------------------------------------------------------
# Per-item steps
# ---------------------------------------------------------------------------

def scrape_page(target: ScrapeTarget, fetch: Fetch = fetch_text) -> PageRecord:
    """Fetch and extract one page or blog post, stamping its url and category."""
    record = extract_page_content(fetch(target.url), target.name)
    record.url = target.url
    record.category = target.category
    return record


def scrape_endpoint(slug: str, fetch: Fetch = fetch_text) -> EndpointRecord:
    return extract_endpoint_content(fetch(endpoint_url(slug)), slug)


def _scrape_pages(
    targets: list[ScrapeTarget],
    into: Dict[str, PageRecord],
    delay: float,
    fetch: Fetch,
    sleep: Callable[[float], None],
    echo: Echo,
) -> int:
    failed = 0
    for target in targets:
        try:
            into[target.name] = scrape_page(target, fetch)
            echo(f"  {target.name}... ✅")
        except Exception as exc:
            failed += 1
            echo(f"  {target.name}... ❌ {exc}")
        sleep(delay)
    return failed


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

def write_document(document: AggregateDocument, path: Path) -> Path:
    """Write *document* as indented JSON, creating the parent directory."""
    target = settings.ensure_output_dir(path)
    target.write_text(
        json.dumps(document.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8"
    )
    return target


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def scrape_targets(
    targets: DiscoveredTargets,
    fetch: Fetch = fetch_text,
    sleep: Callable[[float], None] = time.sleep,
    echo: Echo = typer.echo,
) -> tuple[AggregateDocument, int]:
    """Scrape every discovered target; returns the document and failure count."""
    pages = targets.pages
    document = AggregateDocument(
        total_endpoints=len(targets.endpoints),
        total_pages=len(pages),
        total_blogs=len(targets.site_blogs),
    )

    echo(f"📄 Scraping pages ({len(pages)})")
    failed = _scrape_pages(pages, document.pages, settings.page_delay, fetch, sleep, echo)

    echo(f"\n📰 Scraping blog posts ({len(targets.site_blogs)})")
    failed += _scrape_pages(
        targets.site_blogs, document.blogs, settings.blog_delay, fetch, sleep, echo
    )

    echo(f"\n📚 Scraping API endpoints ({len(targets.endpoints)})")
    for slug in targets.endpoints:
        try:
            document.endpoints[slug] = scrape_endpoint(slug, fetch)
            echo(f"  {slug}... ✅")
        except Exception as exc:
            failed += 1
            echo(f"  {slug}... ❌ {exc}")
            document.endpoints[slug] = EndpointError(
                name=slug, error=str(exc), url=endpoint_url(slug)
            )
        sleep(settings.endpoint_delay)

    return document, failed


def scrape_all(
    output_path: Path | None = None,
    fetch: Fetch = fetch_text,
    sleep: Callable[[float], None] = time.sleep,
    echo: Echo = typer.echo,
    tables: KeyTables = DEFAULT_TABLES,
) -> ScrapeSummary:
    """Run discovery and scrape everything into a single JSON file.

    Args:
        output_path: Destination file; defaults to ``settings.output_path``.
        fetch: URL → body callable, swapped out in tests.
        sleep: Pause function called after every item.
        echo: Progress line sink.
        tables: Key override and guide-page tables used during discovery.

    Returns:
        A :class:`ScrapeSummary` with the counts actually written.

    Raises:
        httpx.HTTPError: If a sitemap fetch fails; nothing is written then.
    """
    echo("🔎 Discovering targets (sitemaps + blog index)…")
    targets = discover_targets(fetch=fetch, tables=tables, echo=echo)

    document, failed = scrape_targets(targets, fetch=fetch, sleep=sleep, echo=echo)

    written = write_document(document, output_path or settings.output_path)

    summary = ScrapeSummary(
        endpoints=len(document.endpoints),
        pages=len(document.pages),
        blogs=len(document.blogs),
        failed=failed,
        output_path=written,
    )
    echo(
        f"\n✅ Scrape complete (v{DOCUMENT_VERSION})\n"
        f"   - {summary.endpoints} endpoints\n"
        f"   - {summary.pages} pages\n"
        f"   - {summary.blogs} blog posts\n"
        f"   - {summary.failed} failures\n"
        f"\n📁 Saved to {written}"
    )
    return summary
