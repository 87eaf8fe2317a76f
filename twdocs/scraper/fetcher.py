"""HTTP fetcher that follows redirects by re-issuing the GET itself."""

from __future__ import annotations

import httpx

from twdocs.config import settings
from twdocs.scraper.models import RawPage


def _default_headers() -> dict[str, str]:
    return {"User-Agent": settings.user_agent}


def _redirect_target(response: httpx.Response) -> str | None:
    """Return the absolute ``Location`` of a 3xx response, else ``None``."""
    if not 300 <= response.status_code < 400:
        return None
    location = response.headers.get("location")
    if not location:
        return None
    return str(response.url.join(location))


def fetch_url(url: str, *, max_redirects: int | None = None) -> RawPage:
    """Fetch *url* and return a :class:`RawPage`.

    Redirects are followed one hop at a time: each ``Location`` is resolved
    against the URL that produced it and requested again.  There is no hop
    limit unless *max_redirects* (or ``settings.max_redirects``) is set, so a
    redirect loop will spin until the server stops answering with 3xx.

    The body of the final response is returned whatever its status; a 404 or
    500 page is extracted like any other.  A 3xx without ``Location`` is final.

    Raises:
        httpx.TransportError: If the connection fails or times out.
        httpx.TooManyRedirects: If a hop limit is configured and exceeded.
    """
    limit = settings.max_redirects if max_redirects is None else max_redirects

    with httpx.Client(
        headers=_default_headers(),
        timeout=settings.request_timeout,
        follow_redirects=False,
    ) as client:
        current = url
        hops = 0
        while True:
            response = client.get(current)
            target = _redirect_target(response)
            if target is None:
                break
            hops += 1
            if limit is not None and hops > limit:
                raise httpx.TooManyRedirects(
                    f"Exceeded {limit} redirects while fetching {url}",
                    request=response.request,
                )
            current = target

        return RawPage(url=current, html=response.text, status_code=response.status_code)


def fetch_text(url: str) -> str:
    """Fetch *url* and return only the response body."""
    return fetch_url(url).html
