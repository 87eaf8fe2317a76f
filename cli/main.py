"""twdocs CLI: entry-point for scraping the twitterapi.io documentation.

Usage:
    python cli/main.py --help

Commands:
    scrape-all  → discover every target and write the aggregate JSON
    discover    → list discovered targets without scraping them
    page        → extract a single page and print it as JSON
    endpoint    → extract a single API reference page and print it as JSON
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from twdocs.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import json
from typing import Optional

import httpx
import typer

from twdocs.config import settings
from twdocs.orchestrator import scrape_all, scrape_endpoint, scrape_page
from twdocs.scraper.discovery import discover_targets
from twdocs.scraper.models import ScrapeTarget
from twdocs.scraper.normalize import category_for_page_key, page_key_from_url

app = typer.Typer(
    name="twdocs",
    help="Scrape twitterapi.io pages, blog posts and API reference into JSON.",
    no_args_is_help=True,
)


def _print_json(data: dict) -> None:
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


# ---------------------------------------------------------------------------
# Full run
# ---------------------------------------------------------------------------
@app.command("scrape-all")
def scrape_all_cmd(
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Output JSON file (default: settings.output_path)."
    ),
) -> None:
    """Discover all targets, scrape them and write one JSON document."""
    typer.echo("🚀 twdocs scraper: fetching everything …\n")
    try:
        scrape_all(output_path=output)
    except Exception as e:
        typer.echo(f"❌ Scrape failed: {e}")
        raise typer.Exit(code=1)


# ---------------------------------------------------------------------------
# Discovery only
# ---------------------------------------------------------------------------
@app.command("discover")
def discover_cmd() -> None:
    """Print the targets a full run would scrape."""
    try:
        targets = discover_targets()
    except httpx.HTTPError as e:
        typer.echo(f"❌ Discovery failed: {e}")
        raise typer.Exit(code=1)

    sections = (
        ("Site pages", targets.site_pages),
        ("Docs pages", targets.docs_pages),
        ("Blog posts", targets.site_blogs),
    )
    for label, items in sections:
        typer.echo(f"{label} ({len(items)}):")
        for t in items:
            typer.echo(f"  [{t.category}] {t.name}  {t.url}")
    typer.echo(f"Endpoints ({len(targets.endpoints)}):")
    for slug in targets.endpoints:
        typer.echo(f"  {slug}")


# ---------------------------------------------------------------------------
# Single items
# ---------------------------------------------------------------------------
@app.command("page")
def page_cmd(
    url: str = typer.Argument(..., help="Page URL to scrape."),
    name: Optional[str] = typer.Option(None, help="Key to store the page under."),
) -> None:
    """Scrape one page and print the extracted record."""
    key = name or page_key_from_url(url)
    target = ScrapeTarget(
        url=url,
        name=key,
        category=category_for_page_key(key, httpx.URL(url).host),
    )
    try:
        record = scrape_page(target)
    except httpx.HTTPError as e:
        typer.echo(f"❌ Error: {e}")
        raise typer.Exit(code=1)
    _print_json(record.to_dict())


@app.command("endpoint")
def endpoint_cmd(
    slug: str = typer.Argument(..., help="Endpoint slug, e.g. get_user_by_username."),
) -> None:
    """Scrape one API reference page and print the extracted record."""
    try:
        record = scrape_endpoint(slug.strip("/"))
    except httpx.HTTPError as e:
        typer.echo(f"❌ Error: {e}")
        raise typer.Exit(code=1)
    _print_json(record.to_dict())


@app.command("config")
def config_cmd() -> None:
    """Show the effective runtime settings."""
    typer.echo(f"output_path     : {settings.output_path}")
    typer.echo(f"page_delay      : {settings.page_delay}")
    typer.echo(f"blog_delay      : {settings.blog_delay}")
    typer.echo(f"endpoint_delay  : {settings.endpoint_delay}")
    typer.echo(f"request_timeout : {settings.request_timeout}")
    limit = "unbounded" if settings.max_redirects is None else settings.max_redirects
    typer.echo(f"max_redirects   : {limit}")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
