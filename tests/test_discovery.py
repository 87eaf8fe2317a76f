"""Tests for sitemap / blog-index target discovery.

``discover_targets`` takes its fetch function as an argument, so these tests
feed it canned sitemap and index bodies from a dict instead of hitting the
network.
"""

from __future__ import annotations

import httpx
import pytest

from twdocs.scraper.discovery import (
    BLOG_INDEX_URL,
    DOCS_SITEMAP_URL,
    SITE_SITEMAP_URL,
    discover_blog_urls,
    discover_targets,
    extract_sitemap_locs,
    partition_docs_urls,
    partition_site_urls,
)
from twdocs.scraper.normalize import DEFAULT_TABLES, KeyTables


# ---------------------------------------------------------------------------
# Fixtures / constants
# ---------------------------------------------------------------------------

def _sitemap(*urls: str) -> str:
    locs = "\n".join(f"  <url><loc>{u}</loc></url>" for u in urls)
    return f'<?xml version="1.0"?>\n<urlset>\n{locs}\n</urlset>'


_SITE_SITEMAP = _sitemap(
    "https://twitterapi.io/",
    "https://twitterapi.io/pricing",
    "https://twitterapi.io/pricing/",
    "https://twitterapi.io/blog/",
    "https://twitterapi.io/blog/first-post",
    "https://twitterapi.io/about",
    "https://example.com/elsewhere",
)

_BLOG_INDEX = """\
<html><body>
  <a href="/blog/second-post">Second</a>
  <a href="/blog/first-post/">First again</a>
  <a href="/blog/">Blog root</a>
  <a href='/blog/third-post/'>Third</a>
  <a href="/blog/fourth-post?ref=x">Query link</a>
  <a href="/docs">Not a blog link</a>
</body></html>
"""

_DOCS_SITEMAP = _sitemap(
    "https://docs.twitterapi.io/introduction",
    "https://docs.twitterapi.io/api-reference/endpoint/get_user_info",
    "https://docs.twitterapi.io/api-reference/endpoint/batch_get_users/",
    "https://docs.twitterapi.io/api-reference/endpoint/",
    "https://docs.twitterapi.io/pricing",
    "https://other.example.com/introduction",
)

_EMPTY_TABLES = KeyTables.build(guide_page_keys={"pricing"})


def _fake_fetch(pages: dict[str, str]):
    calls: list[str] = []

    def fetch(url: str) -> str:
        calls.append(url)
        body = pages.get(url)
        if body is None:
            request = httpx.Request("GET", url)
            raise httpx.ConnectError(f"Connection refused: {url}", request=request)
        return body

    fetch.calls = calls  # type: ignore[attr-defined]
    return fetch


@pytest.fixture
def site_fetch():
    return _fake_fetch(
        {
            SITE_SITEMAP_URL: _SITE_SITEMAP,
            BLOG_INDEX_URL: _BLOG_INDEX,
            DOCS_SITEMAP_URL: _DOCS_SITEMAP,
        }
    )


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------

class TestExtractSitemapLocs:
    def test_returns_locs_in_order(self) -> None:
        xml = _sitemap("https://a.io/x", "https://a.io/y")
        assert extract_sitemap_locs(xml) == ["https://a.io/x", "https://a.io/y"]

    def test_trims_and_skips_blank(self) -> None:
        xml = "<loc>  https://a.io/x  </loc><loc>   </loc>"
        assert extract_sitemap_locs(xml) == ["https://a.io/x"]

    def test_no_locs(self) -> None:
        assert extract_sitemap_locs("<urlset></urlset>") == []


class TestDiscoverBlogUrls:
    def test_collects_blog_anchors(self) -> None:
        urls = discover_blog_urls(_BLOG_INDEX)
        assert urls == [
            "https://twitterapi.io/blog/second-post",
            "https://twitterapi.io/blog/first-post",
            "https://twitterapi.io/blog/third-post",
        ]

    def test_links_with_query_strings_are_not_matched(self) -> None:
        assert discover_blog_urls('<a href="/blog/post?ref=nav">x</a>') == []

    def test_skips_blog_root(self) -> None:
        assert discover_blog_urls('<a href="/blog/">x</a>') == []


class TestPartitionSiteUrls:
    def test_names_sorted_by_code_point(self) -> None:
        _, blogs = partition_site_urls(
            [
                "https://twitterapi.io/blog/a_b",
                "https://twitterapi.io/blog/a1",
                "https://twitterapi.io/blog/A-c",
            ],
            _EMPTY_TABLES,
        )
        assert [t.name for t in blogs] == ["blog_a1", "blog_a_b", "blog_a_c"]


class TestPartitionDocsUrls:
    def test_empty_slug_is_dropped(self) -> None:
        _, slugs = partition_docs_urls(
            ["https://docs.twitterapi.io/api-reference/endpoint/"]
        )
        assert slugs == []

    def test_slugs_trailing_slash_stripped_and_sorted(self) -> None:
        pages, slugs = partition_docs_urls(
            [
                "https://docs.twitterapi.io/api-reference/endpoint/b/",
                "https://docs.twitterapi.io/api-reference/endpoint/a",
                "https://docs.twitterapi.io/api-reference/endpoint/b",
            ]
        )
        assert pages == []
        assert slugs == ["a", "b"]


# ---------------------------------------------------------------------------
# discover_targets
# ---------------------------------------------------------------------------

class TestDiscoverTargets:
    def test_pages_partitioned_and_categorised(self, site_fetch) -> None:
        targets = discover_targets(fetch=site_fetch, tables=_EMPTY_TABLES, echo=lambda _: None)
        by_name = {t.name: t for t in targets.site_pages}

        assert set(by_name) == {"about", "blog_index", "home", "pricing"}
        assert by_name["home"].category == "info"
        assert by_name["blog_index"].category == "blog"
        assert by_name["pricing"].category == "guide"
        assert by_name["pricing"].url == "https://twitterapi.io/pricing"

    def test_blogs_merge_sitemap_and_index(self, site_fetch) -> None:
        targets = discover_targets(fetch=site_fetch, tables=_EMPTY_TABLES, echo=lambda _: None)
        names = [t.name for t in targets.site_blogs]

        assert names == ["blog_first_post", "blog_second_post", "blog_third_post"]
        assert all(t.category == "blog" for t in targets.site_blogs)

    def test_override_slugs_always_included(self, site_fetch) -> None:
        targets = discover_targets(fetch=site_fetch, echo=lambda _: None)
        names = {t.name for t in targets.site_blogs}

        for key in DEFAULT_TABLES.blog_key_overrides.values():
            assert key in names

    def test_docs_partition(self, site_fetch) -> None:
        targets = discover_targets(fetch=site_fetch, tables=_EMPTY_TABLES, echo=lambda _: None)

        assert targets.endpoints == ["batch_get_users", "get_user_info"]
        assert [t.name for t in targets.docs_pages] == ["introduction", "pricing"]
        assert all(t.category == "docs" for t in targets.docs_pages)

    def test_no_duplicate_names_and_sorted(self, site_fetch) -> None:
        targets = discover_targets(fetch=site_fetch, echo=lambda _: None)

        for collection in (targets.site_pages, targets.site_blogs, targets.docs_pages):
            names = [t.name for t in collection]
            assert names == sorted(names)
            assert len(names) == len(set(names))
        assert targets.endpoints == sorted(set(targets.endpoints))

    def test_blog_index_failure_is_not_fatal(self) -> None:
        fetch = _fake_fetch({SITE_SITEMAP_URL: _SITE_SITEMAP, DOCS_SITEMAP_URL: _DOCS_SITEMAP})
        messages: list[str] = []

        targets = discover_targets(fetch=fetch, tables=_EMPTY_TABLES, echo=messages.append)

        assert [t.name for t in targets.site_blogs] == ["blog_first_post"]
        assert any("Blog index unavailable" in m for m in messages)

    def test_site_sitemap_failure_is_fatal(self) -> None:
        fetch = _fake_fetch({DOCS_SITEMAP_URL: _DOCS_SITEMAP})
        with pytest.raises(httpx.ConnectError):
            discover_targets(fetch=fetch, echo=lambda _: None)

    def test_docs_sitemap_failure_is_fatal(self) -> None:
        fetch = _fake_fetch({SITE_SITEMAP_URL: _SITE_SITEMAP, BLOG_INDEX_URL: _BLOG_INDEX})
        with pytest.raises(httpx.ConnectError):
            discover_targets(fetch=fetch, echo=lambda _: None)

    def test_fetch_order(self, site_fetch) -> None:
        discover_targets(fetch=site_fetch, echo=lambda _: None)
        assert site_fetch.calls == [SITE_SITEMAP_URL, BLOG_INDEX_URL, DOCS_SITEMAP_URL]
