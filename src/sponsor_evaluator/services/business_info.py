"""Business information acquisition.

Two interchangeable strategies normalize into one
:class:`BusinessInfoResult`:

* :meth:`BusinessInfoResolver.extract_from_url` fetches a page with
  ``httpx`` and reduces its HTML to readable text with BeautifulSoup;
* :meth:`BusinessInfoResolver.search_business_info` queries the Google
  Custom Search JSON API and maps the top result.

Both are idempotent reads.  Neither retries; failures raise the matching
:class:`ResolverError` subclass and the caller decides what to do.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlsplit, urlunsplit

import httpx
from bs4 import BeautifulSoup

from sponsor_evaluator.domain.exceptions import (
    FetchError,
    NoResultsError,
    ParseError,
    SearchError,
)
from sponsor_evaluator.domain.values import BusinessInfoResult, RawItem
from sponsor_evaluator.infrastructure.config import FetchConfig, SearchConfig

logger = logging.getLogger(__name__)

DESCRIPTION_LIMIT = 280
SNIPPET_LIMIT = 220
DETAILS_LIMIT = 200
MAX_CATEGORIES = 6
MAX_EXTRACTED_ITEMS = 3
MIN_PARAGRAPH_LENGTH = 40

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")
_BARE_DOMAIN_RE = re.compile(
    r"^(?:www\.)?(?:[a-z0-9](?:[a-z0-9-]*[a-z0-9])?\.)+[a-z]{2,}(?::\d+)?(?:[/?#]\S*)?$",
    re.IGNORECASE,
)

# Legal-entity suffixes: "Acme.Inc" is a company name, not a domain.
_COMPANY_SUFFIXES = frozenset({"inc", "ltd", "llc", "llp", "corp", "gmbh", "plc"})

# Elements that never carry the page's main content.
_BOILERPLATE_TAGS = (
    "script", "style", "noscript", "svg", "template", "iframe",
    "nav", "header", "footer", "aside", "form",
)


# ---------------------------------------------------------------------------
# URL helpers
# ---------------------------------------------------------------------------


def looks_like_url(value: str) -> bool:
    """True if *value* is an absolute http(s) URL or a bare domain.

    ``"acme.com"`` and ``"https://acme.com/about"`` are URLs; ``"Acme Corp"``
    is not.
    """
    candidate = (value or "").strip()
    if not candidate or any(ch.isspace() for ch in candidate):
        return False
    if _SCHEME_RE.match(candidate):
        try:
            normalize_url(candidate)
        except ParseError:
            return False
        return True
    if not _BARE_DOMAIN_RE.match(candidate):
        return False
    host = re.split(r"[:/?#]", candidate, maxsplit=1)[0]
    return host.rsplit(".", 1)[-1].lower() not in _COMPANY_SUFFIXES


def normalize_url(value: str) -> str:
    """Return an absolute https URL for *value*.

    Bare domains get an ``https://`` prefix and an empty path becomes ``/``.

    Raises
    ------
    ParseError
        If the value is empty or has no usable host.
    """
    trimmed = (value or "").strip()
    if not trimmed:
        raise ParseError("URL is required for extraction.", value=value or "")

    if not _SCHEME_RE.match(trimmed):
        trimmed = f"https://{trimmed}"

    try:
        parts = urlsplit(trimmed)
        hostname = parts.hostname
    except ValueError as exc:
        raise ParseError(f"Invalid URL: {value!r}", value=value) from exc

    if not hostname or any(ch.isspace() for ch in trimmed):
        raise ParseError(f"Invalid URL: {value!r}", value=value)
    if "." not in hostname and hostname != "localhost":
        raise ParseError(f"Invalid URL: {value!r}", value=value)

    return urlunsplit(
        (parts.scheme.lower(), parts.netloc.lower(), parts.path or "/", parts.query, parts.fragment)
    )


def normalize_whitespace(value: str | None) -> str:
    return _WHITESPACE_RE.sub(" ", value or "").strip()


def truncate_snippet(text: str, limit: int = SNIPPET_LIMIT) -> str:
    """Shorten *text* to *limit* characters, ending with ``...`` when cut."""
    if len(text) <= limit:
        return text
    return f"{text[: limit - 3].rstrip()}..."


# ---------------------------------------------------------------------------
# HTML extraction
# ---------------------------------------------------------------------------


def _meta_content(soup: BeautifulSoup, **attrs: str) -> str:
    tag = soup.find("meta", attrs=attrs)
    if tag is None:
        return ""
    return normalize_whitespace(tag.get("content"))


def _collect_categories(soup: BeautifulSoup) -> tuple[str, ...]:
    keywords = [k.strip() for k in _meta_content(soup, name="keywords").split(",")]
    tags = [
        normalize_whitespace(tag.get("content"))
        for tag in soup.find_all("meta")
        if tag.get("property") in ("article:tag", "og:site_name") or tag.get("name") == "category"
    ]

    seen: dict[str, None] = {}
    for value in keywords + tags:
        value = normalize_whitespace(value)
        if value and value not in seen:
            seen[value] = None
    return tuple(seen)[:MAX_CATEGORIES]


def _main_content(soup: BeautifulSoup) -> Any:
    for tag in soup.find_all(list(_BOILERPLATE_TAGS)):
        tag.decompose()
    return soup.find("article") or soup.find("main") or soup.body or soup


def _first_paragraph(container: Any) -> str:
    for paragraph in container.find_all("p"):
        text = normalize_whitespace(paragraph.get_text(" "))
        if len(text) >= MIN_PARAGRAPH_LENGTH:
            return text
    return ""


def parse_business_page(html: str, url: str) -> BusinessInfoResult:
    """Reduce a fetched HTML document to a :class:`BusinessInfoResult`.

    Parameters
    ----------
    html:
        Raw page markup.
    url:
        Normalized URL the page was fetched from; used as ``query``,
        ``website`` and every raw item's ``link``.
    """
    soup = BeautifulSoup(html, "html.parser")

    document_title = normalize_whitespace(soup.title.get_text()) if soup.title else ""
    meta_description = _meta_content(soup, name="description") or _meta_content(
        soup, property="og:description"
    )
    og_title = _meta_content(soup, property="og:title")
    categories = _collect_categories(soup)

    container = _main_content(soup)
    heading = container.find("h1")
    title = (
        og_title
        or document_title
        or (normalize_whitespace(heading.get_text(" ")) if heading else "")
        or (urlsplit(url).hostname or url)
    )

    text_content = normalize_whitespace(container.get_text(" "))
    excerpt = meta_description or _first_paragraph(container)
    description = excerpt or text_content[:DESCRIPTION_LIMIT]
    snippet = truncate_snippet(description or text_content) or title

    raw_items = [RawItem(title=title, link=url, snippet=snippet or description)]
    if description and description != snippet:
        raw_items.append(
            RawItem(title=f"{title} overview", link=url, snippet=description[:DESCRIPTION_LIMIT])
        )
    if text_content:
        raw_items.append(
            RawItem(title=f"{title} details", link=url, snippet=text_content[:DETAILS_LIMIT])
        )

    return BusinessInfoResult(
        query=url,
        name=title,
        website=url,
        title=title,
        snippet=snippet,
        description=description or snippet,
        categories=categories,
        raw_items=tuple(raw_items[:MAX_EXTRACTED_ITEMS]),
    )


# ---------------------------------------------------------------------------
# Search mapping
# ---------------------------------------------------------------------------


def _facet_anchors(payload: dict[str, Any]) -> tuple[str, ...]:
    facets = (payload.get("context") or {}).get("facets") or []
    anchors: list[str] = []
    for group in facets:
        entries = group if isinstance(group, list) else [group]
        for facet in entries:
            if isinstance(facet, dict) and facet.get("anchor"):
                anchors.append(str(facet["anchor"]))
    return tuple(anchors)


def map_search_response(query: str, payload: dict[str, Any]) -> BusinessInfoResult:
    """Map a Custom Search JSON response onto a :class:`BusinessInfoResult`.

    Raises
    ------
    SearchError
        If ``items`` is not a list of objects.
    NoResultsError
        If the response contains no items.
    """
    items = payload.get("items") or []
    if not isinstance(items, list) or not all(isinstance(item, Mapping) for item in items):
        raise SearchError("Search response was malformed.", query=query)
    if not items:
        raise NoResultsError(query=query)

    raw_items = tuple(RawItem.from_dict(item) for item in items)
    primary = raw_items[0]
    return BusinessInfoResult(
        query=query,
        name=primary.title or query,
        website=primary.link,
        title=primary.title,
        snippet=primary.snippet,
        description=primary.snippet,
        categories=_facet_anchors(payload),
        raw_items=raw_items,
    )


def _search_error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return "Search request failed."
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return "Search request failed."


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------


class BusinessInfoResolver:
    """Acquire business information by page extraction or web search.

    Parameters
    ----------
    fetch_config:
        Headers and timeout for page requests.
    search_config:
        Custom Search credentials and request settings.  Missing
        credentials only matter once :meth:`search_business_info` is called.
    client:
        Optional shared ``httpx.AsyncClient``.  An injected client is used
        as-is and never closed here; without one, each call opens and closes
        its own client.
    """

    def __init__(
        self,
        fetch_config: FetchConfig | None = None,
        search_config: SearchConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.fetch_config = fetch_config or FetchConfig()
        self.search_config = search_config or SearchConfig()
        self._client = client

    @property
    def search_configured(self) -> bool:
        return self.search_config.is_configured

    def require_search_credentials(self) -> None:
        """Raise ``ConfigError`` unless web search can be used."""
        self.search_config.require_credentials()

    async def _get(self, url: str, **kwargs: Any) -> httpx.Response:
        if self._client is not None:
            return await self._client.get(url, **kwargs)
        async with httpx.AsyncClient() as client:
            return await client.get(url, **kwargs)

    async def extract_from_url(self, url: str) -> BusinessInfoResult:
        """Fetch *url* and extract its business-relevant content.

        Raises
        ------
        ParseError
            If the URL is empty or malformed.
        FetchError
            On transport failure or a non-success HTTP status.
        """
        normalized = normalize_url(url)
        logger.debug("Fetching %s", normalized)

        try:
            response = await self._get(
                normalized,
                headers=self.fetch_config.headers,
                follow_redirects=True,
                timeout=self.fetch_config.timeout,
            )
        except httpx.InvalidURL as exc:
            raise ParseError(f"Invalid URL: {url!r}", value=url) from exc
        except httpx.HTTPError as exc:
            raise FetchError(
                f"Unable to fetch website content ({exc.__class__.__name__}: {exc}).",
                url=normalized,
            ) from exc

        if not response.is_success:
            raise FetchError(
                f"Unable to fetch website content (status {response.status_code}).",
                url=normalized,
                status_code=response.status_code,
            )

        result = parse_business_page(response.text, normalized)
        logger.info(
            "Extracted %r from %s (%d items, %d categories)",
            result.name,
            normalized,
            len(result.raw_items),
            len(result.categories),
        )
        return result

    async def search_business_info(self, query: str) -> BusinessInfoResult:
        """Search for *query* and return the top-ranked result.

        Raises
        ------
        ConfigError
            If the API key or engine id is missing (no request is made).
        SearchError
            On transport failure or an upstream error response.
        NoResultsError
            If the search returns no items.
        """
        config = self.search_config
        self.require_search_credentials()

        params = {
            "key": config.api_key,
            "cx": config.engine_id,
            "q": query,
            "num": str(config.num_results),
            "lr": config.language,
        }
        logger.debug("Searching for %r", query)

        try:
            response = await self._get(config.endpoint, params=params, timeout=config.timeout)
        except httpx.HTTPError as exc:
            raise SearchError(
                f"Search request failed ({exc.__class__.__name__}: {exc}).",
                query=query,
            ) from exc

        if not response.is_success:
            raise SearchError(
                _search_error_message(response),
                query=query,
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise SearchError("Search response was not valid JSON.", query=query) from exc

        result = map_search_response(query, payload if isinstance(payload, dict) else {})
        logger.info("Search for %r returned %d items", query, len(result.raw_items))
        return result
