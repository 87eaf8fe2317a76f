"""Endpoint extraction: API reference markup into an :class:`EndpointRecord`.

The reference pages are server-rendered with syntax-highlighted code samples,
so the request path and method show up in several shapes.  Each shape has its
own strategy function; :func:`resolve_first` walks an ordered chain and keeps
the first hit.
"""

from __future__ import annotations

import re
from typing import Callable, List, NamedTuple, Optional, Sequence, TypeVar

from twdocs.scraper.markup import (
    decode_entities,
    first_title,
    flatten_text,
    inline_code,
    meta_description,
)
from twdocs.scraper.models import EndpointRecord, ParameterEntry, ResponseField

ENDPOINT_URL_PREFIX = "https://docs.twitterapi.io/api-reference/endpoint/"
TITLE_SUFFIX = " – Docs"

MAX_RESPONSE_FIELDS = 50
MIN_CODE_SNIPPET_LENGTH = 5
MIN_PARAMETER_DESCRIPTION_LENGTH = 5

_VERBS = "GET|POST|PUT|DELETE|PATCH"
# ASCII-only word characters; `\w` would also admit Unicode letters.
_WORD = "[A-Za-z0-9_]"

T = TypeVar("T")


class PathMatch(NamedTuple):
    """A recovered request path, plus the method when the same pattern had it."""

    path: str
    method: Optional[str] = None


def endpoint_url(slug: str) -> str:
    return f"{ENDPOINT_URL_PREFIX}{slug}"


def resolve_first(strategies: Sequence[Callable[[str], Optional[T]]], html: str) -> Optional[T]:
    """Run *strategies* in order and return the first non-empty result."""
    for strategy in strategies:
        result = strategy(html)
        if result:
            return result
    return None


# ---------------------------------------------------------------------------
# Path strategies
# ---------------------------------------------------------------------------

_JSON_PATH_RE = re.compile(r'"path"\s*:\s*"(/twitter/[^"]+)"', re.IGNORECASE)
_API_URL_RE = re.compile(
    r"""https://api\.twitterapi\.io(/(?:twitter|oapi)/[^<\s"'\\]+)""", re.IGNORECASE
)
_CURL_URL_RE = re.compile(
    r"""--url\s+https?://api\.twitterapi\.io([^\s\\'"<]+)""", re.IGNORECASE
)
_HEADER_RE = re.compile(rf"({_VERBS})\s+/\s*([a-z_/\s]+)", re.IGNORECASE)


def _path_from_match(pattern: re.Pattern[str], html: str) -> Optional[PathMatch]:
    m = pattern.search(html)
    if m:
        path = m.group(1).strip()
        if path:
            return PathMatch(path)
    return None


def path_from_json(html: str) -> Optional[PathMatch]:
    """``"path":"/twitter/user/info"`` from the embedded page data."""
    return _path_from_match(_JSON_PATH_RE, html)


def path_from_api_url(html: str) -> Optional[PathMatch]:
    """An absolute ``https://api.twitterapi.io/...`` URL anywhere in the markup."""
    return _path_from_match(_API_URL_RE, html)


def path_from_curl_url(html: str) -> Optional[PathMatch]:
    """The URL after ``--url`` in a plain-text cURL example."""
    return _path_from_match(_CURL_URL_RE, html)


def path_from_header(html: str) -> Optional[PathMatch]:
    """``GET / twitter / user / info`` style headings, whitespace removed."""
    m = _HEADER_RE.search(html)
    if not m:
        return None
    return PathMatch("/" + re.sub(r"\s+", "", m.group(2)), m.group(1).upper())


PATH_STRATEGIES: tuple[Callable[[str], Optional[PathMatch]], ...] = (
    path_from_json,
    path_from_api_url,
    path_from_curl_url,
    path_from_header,
)


# ---------------------------------------------------------------------------
# Method strategies
# ---------------------------------------------------------------------------

_JSON_METHOD_RE = re.compile(rf'"method"\s*:\s*"({_VERBS})"', re.IGNORECASE)
_CURL_METHOD_RE = re.compile(rf"--request\s+({_VERBS})", re.IGNORECASE)


def method_from_json(html: str) -> Optional[str]:
    m = _JSON_METHOD_RE.search(html)
    return m.group(1).upper() if m else None


def method_from_curl(html: str) -> Optional[str]:
    m = _CURL_METHOD_RE.search(html)
    return m.group(1).upper() if m else None


METHOD_STRATEGIES: tuple[Callable[[str], Optional[str]], ...] = (
    method_from_json,
    method_from_curl,
)


# ---------------------------------------------------------------------------
# Parameters and response schema
# ---------------------------------------------------------------------------

_PARAM_SECTION_RE = re.compile(
    r"Query Parameters.*?(?=Response|Authorizations|\Z)", re.IGNORECASE | re.DOTALL
)
_PARAM_RE = re.compile(
    rf"({_WORD}+)\s+string[^<]*(?:required)?[^<]*(?:<[^>]*>)*\s*([^<]+)",
    re.IGNORECASE,
)
_RESPONSE_SECTION_RE = re.compile(
    r"Response\s+200.*?(?=Response\s+\d{3}|Authorizations|\Z)", re.IGNORECASE | re.DOTALL
)
_RESPONSE_FIELD_RE = re.compile(
    rf"({_WORD}+)\.\s*({_WORD}+)\s+(string|integer|boolean|object|array)",
    re.IGNORECASE,
)
_CURL_EXAMPLE_RE = re.compile(r"curl\s+--request[^<]+", re.IGNORECASE)


def _is_required(section_lower: str, name: str) -> bool:
    key = name.lower()
    return f'{key}" required' in section_lower or f"{key} required" in section_lower


def extract_parameters(html: str) -> List[ParameterEntry]:
    """Parameters listed between "Query Parameters" and the next section."""
    section = _PARAM_SECTION_RE.search(html)
    if not section:
        return []

    text = section.group(0)
    lowered = text.lower()
    parameters: List[ParameterEntry] = []
    for m in _PARAM_RE.finditer(text):
        name = m.group(1).strip()
        description = decode_entities(m.group(2).strip())
        if not name or name == "string" or len(description) <= MIN_PARAMETER_DESCRIPTION_LENGTH:
            continue
        parameters.append(
            ParameterEntry(name=name, description=description, required=_is_required(lowered, name))
        )
    return parameters


def extract_response_fields(html: str) -> List[ResponseField]:
    """``parent.field TYPE`` triples from the 200 response schema, at most 50."""
    section = _RESPONSE_SECTION_RE.search(html)
    if not section:
        return []
    fields = [
        ResponseField(parent=m.group(1), field=m.group(2), type=m.group(3))
        for m in _RESPONSE_FIELD_RE.finditer(section.group(0))
    ]
    return fields[:MAX_RESPONSE_FIELDS]


def extract_curl_example(html: str) -> Optional[str]:
    m = _CURL_EXAMPLE_RE.search(html)
    if not m:
        return None
    # Escaped newlines come from JSON-embedded samples.
    text = m.group(0).replace("\\n", "\n")
    return decode_entities(re.sub(r"\s+", " ", text).strip())


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_endpoint_content(html: str, slug: str) -> EndpointRecord:
    """Extract everything known about the endpoint documented at *slug*."""
    title = first_title(html)
    if title is not None:
        title = decode_entities(title.replace(TITLE_SUFFIX, "").strip())

    path_match = resolve_first(PATH_STRATEGIES, html)
    method = resolve_first(METHOD_STRATEGIES, html)
    if method is None and path_match is not None:
        method = path_match.method

    snippets = [c for c in inline_code(html) if len(c) > MIN_CODE_SNIPPET_LENGTH]

    return EndpointRecord(
        name=slug,
        url=endpoint_url(slug),
        title=title,
        description=meta_description(html),
        path=path_match.path if path_match else None,
        method=method,
        parameters=extract_parameters(html),
        response_fields=extract_response_fields(html),
        code_snippets=snippets,
        curl_example=extract_curl_example(html),
        raw_text=flatten_text(html),
    )
