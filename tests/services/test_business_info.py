"""Tests for business info acquisition with a mocked HTTP transport."""

from __future__ import annotations

import httpx
import pytest

from sponsor_evaluator.domain.exceptions import (
    ConfigError,
    FetchError,
    NoResultsError,
    ParseError,
    SearchError,
)
from sponsor_evaluator.services.business_info import (
    BusinessInfoResolver,
    looks_like_url,
    map_search_response,
    normalize_url,
    parse_business_page,
    truncate_snippet,
)
from tests.helpers.http import (
    ACME_HTML,
    ACME_SEARCH_PAYLOAD,
    RecordingHandler,
    make_resolver,
)


# ===================================================================== #
#  URL helpers                                                            #
# ===================================================================== #


class TestUrlHelpers:

    @pytest.mark.parametrize(
        "value",
        ["acme.com", "https://acme.com/about", "www.acme.co.uk/about", "http://localhost:8000"],
    )
    def test_looks_like_url(self, value: str) -> None:
        assert looks_like_url(value)

    @pytest.mark.parametrize("value", ["Acme Corp", "", "   ", "acme", "http://intranet"])
    def test_not_a_url(self, value: str) -> None:
        assert not looks_like_url(value)

    @pytest.mark.parametrize("value", ["Acme.Inc", "Globex.LLC", "Initech.Ltd", "Umbrella.corp/"])
    def test_company_suffix_is_a_name(self, value: str) -> None:
        assert not looks_like_url(value)

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("acme.com", "https://acme.com/"),
            ("  acme.com/about  ", "https://acme.com/about"),
            ("http://acme.com", "http://acme.com/"),
            ("HTTPS://Acme.com/About", "https://acme.com/About"),
        ],
    )
    def test_normalize_url(self, value: str, expected: str) -> None:
        assert normalize_url(value) == expected

    @pytest.mark.parametrize("value", ["", "   ", "not a url", "https://"])
    def test_normalize_url_rejects(self, value: str) -> None:
        with pytest.raises(ParseError):
            normalize_url(value)

    def test_truncate_snippet(self) -> None:
        assert truncate_snippet("a" * 220) == "a" * 220
        cut = truncate_snippet("a" * 221)
        assert len(cut) == 220
        assert cut.endswith("...")


# ===================================================================== #
#  HTML extraction                                                        #
# ===================================================================== #


class TestParseBusinessPage:

    def test_extracts_acme_page(self) -> None:
        info = parse_business_page(ACME_HTML, "https://acme.com/")

        assert info.name == "Acme Outdoor"
        assert info.website == "https://acme.com/"
        assert info.query == "https://acme.com/"
        assert info.description.startswith("Acme Outdoor is a family owned")
        assert info.snippet == info.description
        assert info.categories == (
            "soccer", "sports gear", "apparel", "Youth sports", "Acme Outdoor",
        )

    def test_raw_items_skip_duplicate_overview(self) -> None:
        info = parse_business_page(ACME_HTML, "https://acme.com/")

        titles = [item.title for item in info.raw_items]
        assert titles == ["Acme Outdoor", "Acme Outdoor details"]
        details = info.raw_items[1].snippet
        assert "We outfit local soccer clubs" in details
        assert "should never appear" not in details
        assert "Copyright" not in details

    def test_long_description_adds_overview(self) -> None:
        long_text = "Sportsgear" * 40
        html = f'<html><head><meta name="description" content="{long_text}"></head><body><p>Hi</p></body></html>'

        info = parse_business_page(html, "https://acme.com/")

        assert len(info.raw_items) == 3
        assert info.snippet.endswith("...")
        assert len(info.snippet) == 220
        assert info.raw_items[1].title.endswith("overview")
        assert info.raw_items[1].snippet == info.description[:280]

    def test_overview_snippet_is_capped(self) -> None:
        long_text = "Sportsgear" * 150
        html = f'<html><head><meta name="description" content="{long_text}"></head><body><p>Hi</p></body></html>'

        info = parse_business_page(html, "https://acme.com/")

        assert len(info.description) == 1500
        overview = info.raw_items[1]
        assert overview.title.endswith("overview")
        assert len(overview.snippet) == 280
        assert all(len(item.snippet) <= 280 for item in info.raw_items)

    def test_title_fallbacks(self) -> None:
        h1_only = "<html><body><h1>Acme  Gear</h1></body></html>"
        assert parse_business_page(h1_only, "https://acme.com/").name == "Acme Gear"

        bare = "<html><body><p>short</p></body></html>"
        info = parse_business_page(bare, "https://acme.com/")
        assert info.name == "acme.com"
        assert info.description == "short"

    def test_first_long_paragraph_is_excerpt(self) -> None:
        html = (
            "<html><body><article><p>Too short.</p>"
            "<p>This paragraph is comfortably longer than forty characters.</p>"
            "</article></body></html>"
        )
        info = parse_business_page(html, "https://acme.com/")
        assert info.description == "This paragraph is comfortably longer than forty characters."

    def test_categories_are_capped(self) -> None:
        keywords = ", ".join(f"tag{i}" for i in range(10))
        html = f'<html><head><meta name="keywords" content="{keywords}"></head><body></body></html>'
        assert len(parse_business_page(html, "https://acme.com/").categories) == 6


# ===================================================================== #
#  Search mapping                                                         #
# ===================================================================== #


class TestMapSearchResponse:

    def test_maps_top_item(self) -> None:
        info = map_search_response("Acme Outdoor official site", ACME_SEARCH_PAYLOAD)

        assert info.name == "Acme Outdoor - Soccer Gear for Families"
        assert info.website == "https://acme-outdoor.com/"
        assert info.description == info.snippet
        assert info.categories == ("Gear", "Clubs")
        assert len(info.raw_items) == 2

    def test_untitled_item_uses_query(self) -> None:
        payload = {"items": [{"link": "https://acme.com/", "snippet": "Gear"}]}
        assert map_search_response("Acme", payload).name == "Acme"

    def test_no_items(self) -> None:
        with pytest.raises(NoResultsError, match="No search results"):
            map_search_response("Acme", {"items": []})

    @pytest.mark.parametrize("items", [["oops"], {"a": 1}, "oops", [{"title": "ok"}, 3]])
    def test_malformed_items(self, items: object) -> None:
        with pytest.raises(SearchError, match="malformed") as exc_info:
            map_search_response("Acme", {"items": items})
        assert exc_info.value.query == "Acme"


# ===================================================================== #
#  Resolver I/O                                                           #
# ===================================================================== #


class TestExtractFromUrl:

    @pytest.mark.asyncio
    async def test_fetches_and_parses(self) -> None:
        handler = RecordingHandler(pages={"https://acme.com/": ACME_HTML})
        resolver = make_resolver(handler)

        info = await resolver.extract_from_url("acme.com")

        assert info.name == "Acme Outdoor"
        request = handler.requests[0]
        assert request.headers["User-Agent"] == "SmartSponsorEvaluatorBot/1.0"
        assert request.headers["Accept"] == "text/html,application/xhtml+xml"

    @pytest.mark.asyncio
    async def test_follows_redirects(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/":
                return httpx.Response(301, headers={"Location": "https://acme.com/home"})
            return httpx.Response(200, text=ACME_HTML)

        info = await make_resolver(handler).extract_from_url("https://acme.com")
        assert info.name == "Acme Outdoor"
        assert info.website == "https://acme.com/"

    @pytest.mark.asyncio
    async def test_http_error_status(self) -> None:
        resolver = make_resolver(RecordingHandler())

        with pytest.raises(FetchError, match="status 404") as exc_info:
            await resolver.extract_from_url("https://acme.com/missing")

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(FetchError) as exc_info:
            await make_resolver(handler).extract_from_url("acme.com")

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_malformed_url_makes_no_request(self) -> None:
        handler = RecordingHandler()
        with pytest.raises(ParseError):
            await make_resolver(handler).extract_from_url("not a url")
        assert handler.requests == []


class TestSearchBusinessInfo:

    @pytest.mark.asyncio
    async def test_sends_query_parameters(self) -> None:
        handler = RecordingHandler()
        info = await make_resolver(handler).search_business_info("Acme Outdoor official site Denver, CO")

        assert info.name == "Acme Outdoor - Soccer Gear for Families"
        params = handler.search_requests[0].url.params
        assert params["key"] == "test-key"
        assert params["cx"] == "test-cx"
        assert params["q"] == "Acme Outdoor official site Denver, CO"
        assert params["num"] == "5"
        assert params["lr"] == "lang_en"

    @pytest.mark.asyncio
    async def test_missing_credentials(self) -> None:
        handler = RecordingHandler()
        resolver = make_resolver(handler, api_key="", engine_id="")

        with pytest.raises(ConfigError) as exc_info:
            await resolver.search_business_info("Acme")

        assert exc_info.value.missing == ("GOOGLE_CSE_API_KEY", "GOOGLE_CSE_ID")
        assert handler.requests == []

    @pytest.mark.asyncio
    async def test_upstream_error_message(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(403, json={"error": {"code": 403, "message": "API key not valid."}})

        with pytest.raises(SearchError, match="API key not valid.") as exc_info:
            await make_resolver(handler).search_business_info("Acme")

        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    async def test_malformed_response(self) -> None:
        handler = RecordingHandler(search_payload={"items": ["oops"]})

        with pytest.raises(SearchError, match="Search response was malformed."):
            await make_resolver(handler).search_business_info("Acme")

        assert len(handler.search_requests) == 1

    def test_require_search_credentials(self) -> None:
        make_resolver(RecordingHandler()).require_search_credentials()

        resolver = make_resolver(RecordingHandler(), api_key="")
        with pytest.raises(ConfigError) as exc_info:
            resolver.require_search_credentials()
        assert exc_info.value.missing == ("GOOGLE_CSE_API_KEY",)

    @pytest.mark.asyncio
    async def test_upstream_error_without_body(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, text="<html>oops</html>")

        with pytest.raises(SearchError, match="Search request failed."):
            await make_resolver(handler).search_business_info("Acme")

    @pytest.mark.asyncio
    async def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(SearchError, match="ReadTimeout"):
            await make_resolver(handler).search_business_info("Acme")

    @pytest.mark.asyncio
    async def test_no_results(self) -> None:
        handler = RecordingHandler(search_payload={"searchInformation": {"totalResults": "0"}})
        with pytest.raises(NoResultsError):
            await make_resolver(handler).search_business_info("Nobody Inc")


def test_search_configured_flag() -> None:
    assert not BusinessInfoResolver().search_configured
    assert make_resolver(RecordingHandler()).search_configured
