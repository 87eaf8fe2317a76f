"""Centralised settings for the twdocs scraper.

Runtime tunables are resolved here in one place.  Values can be overridden via
environment variables or a `.env` file in the project root (loaded
automatically when this module is imported).  The scrape targets themselves
(site URLs, key override tables) are fixed and live with the scraper code.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _optional_int(name: str) -> int | None:
    raw = os.environ.get(name, "").strip()
    return int(raw) if raw else None


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------
    output_path: Path = field(
        default_factory=lambda: Path(os.environ.get("TWDOCS_OUTPUT", "data/docs.json"))
    )

    # ------------------------------------------------------------------
    # Pacing between requests (seconds), one value per scrape phase
    # ------------------------------------------------------------------
    page_delay: float = field(
        default_factory=lambda: float(os.environ.get("PAGE_DELAY", "0.2"))
    )
    blog_delay: float = field(
        default_factory=lambda: float(os.environ.get("BLOG_DELAY", "0.2"))
    )
    endpoint_delay: float = field(
        default_factory=lambda: float(os.environ.get("ENDPOINT_DELAY", "0.15"))
    )

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )
    # None means redirects are followed without a hop limit.
    max_redirects: int | None = field(
        default_factory=lambda: _optional_int("MAX_REDIRECTS")
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "TWDOCS_USER_AGENT",
            "Mozilla/5.0 (compatible; twdocs/2.1; +https://twitterapi.io)",
        )
    )

    def ensure_output_dir(self, path: Path | None = None) -> Path:
        """Create the parent directory of *path* (default: ``output_path``)."""
        target = Path(path) if path is not None else self.output_path
        target.parent.mkdir(parents=True, exist_ok=True)
        return target


# Module-level singleton; import this everywhere:
#   from twdocs.config import settings
settings = Settings()
