"""Scraper package: target discovery, fetch & content extraction."""

from twdocs.scraper.discovery import discover_targets
from twdocs.scraper.endpoint import extract_endpoint_content
from twdocs.scraper.extractor import extract_page_content
from twdocs.scraper.fetcher import fetch_text, fetch_url
from twdocs.scraper.models import (
    DiscoveredTargets,
    EndpointError,
    EndpointRecord,
    PageRecord,
    RawPage,
    ScrapeTarget,
)

__all__ = [
    "discover_targets",
    "extract_endpoint_content",
    "extract_page_content",
    "fetch_text",
    "fetch_url",
    "DiscoveredTargets",
    "EndpointError",
    "EndpointRecord",
    "PageRecord",
    "RawPage",
    "ScrapeTarget",
]
