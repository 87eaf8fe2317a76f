"""Data models for the scraper pipeline.

Plain dataclasses, no validation.  Records serialise through ``to_dict`` which
leaves out optional fields that were not found: an absent key means "nothing
extracted", never an empty list or a ``null``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, List, Optional


def utc_timestamp() -> str:
    """Return the current UTC time as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _put_optional(out: dict[str, Any], key: str, value: Any) -> None:
    if value:
        out[key] = value


@dataclass
class RawPage:
    """The raw HTTP response for a single URL fetch (after redirects)."""

    url: str
    html: str
    status_code: int


@dataclass(frozen=True)
class ScrapeTarget:
    """A discovered page queued for fetching; identity is ``name``."""

    url: str
    name: str
    category: str


@dataclass
class DiscoveredTargets:
    """Everything discovery found, each collection sorted and name-unique."""

    site_pages: List[ScrapeTarget] = field(default_factory=list)
    site_blogs: List[ScrapeTarget] = field(default_factory=list)
    docs_pages: List[ScrapeTarget] = field(default_factory=list)
    endpoints: List[str] = field(default_factory=list)

    @property
    def pages(self) -> List[ScrapeTarget]:
        """Marketing pages followed by docs pages, the order they are scraped in."""
        return [*self.site_pages, *self.docs_pages]


@dataclass
class HeaderEntry:
    level: int
    text: str

    def to_dict(self) -> dict[str, Any]:
        return {"level": self.level, "text": self.text}


@dataclass
class ParameterEntry:
    name: str
    description: str
    required: bool

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "description": self.description, "required": self.required}


@dataclass
class ResponseField:
    parent: str
    field: str
    type: str

    def to_dict(self) -> dict[str, Any]:
        return {"parent": self.parent, "field": self.field, "type": self.type}


@dataclass
class PageRecord:
    """Structured content of a marketing, docs or blog page."""

    name: str
    scraped_at: str = field(default_factory=utc_timestamp)
    title: Optional[str] = None
    description: Optional[str] = None
    headers: List[HeaderEntry] = field(default_factory=list)
    paragraphs: List[str] = field(default_factory=list)
    code_snippets: List[str] = field(default_factory=list)
    pre_blocks: List[str] = field(default_factory=list)
    list_items: List[str] = field(default_factory=list)
    raw_text: str = ""
    url: Optional[str] = None
    category: Optional[str] = None

    type: str = field(default="page", init=False)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "name": self.name,
            "scraped_at": self.scraped_at,
            "type": self.type,
        }
        _put_optional(out, "title", self.title)
        _put_optional(out, "description", self.description)
        _put_optional(out, "headers", [h.to_dict() for h in self.headers])
        _put_optional(out, "paragraphs", list(self.paragraphs))
        _put_optional(out, "code_snippets", list(self.code_snippets))
        _put_optional(out, "pre_blocks", list(self.pre_blocks))
        _put_optional(out, "list_items", list(self.list_items))
        out["raw_text"] = self.raw_text
        if self.url is not None:
            out["url"] = self.url
        if self.category is not None:
            out["category"] = self.category
        return out


@dataclass
class EndpointRecord:
    """Structured content of one API reference page."""

    name: str
    url: str
    scraped_at: str = field(default_factory=utc_timestamp)
    title: Optional[str] = None
    description: Optional[str] = None
    path: Optional[str] = None
    method: Optional[str] = None
    parameters: List[ParameterEntry] = field(default_factory=list)
    response_fields: List[ResponseField] = field(default_factory=list)
    code_snippets: List[str] = field(default_factory=list)
    curl_example: Optional[str] = None
    raw_text: str = ""

    type: str = field(default="endpoint", init=False)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "name": self.name,
            "url": self.url,
            "scraped_at": self.scraped_at,
            "type": self.type,
        }
        _put_optional(out, "title", self.title)
        _put_optional(out, "description", self.description)
        _put_optional(out, "path", self.path)
        _put_optional(out, "method", self.method)
        _put_optional(out, "parameters", [p.to_dict() for p in self.parameters])
        _put_optional(out, "response_fields", [f.to_dict() for f in self.response_fields])
        _put_optional(out, "code_snippets", list(self.code_snippets))
        _put_optional(out, "curl_example", self.curl_example)
        out["raw_text"] = self.raw_text
        return out


@dataclass
class EndpointError:
    """Stand-in for an endpoint whose fetch or extraction failed."""

    name: str
    error: str
    url: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "error": self.error, "url": self.url}
