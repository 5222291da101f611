"""Unit tests for HtmlFetcher."""

import httpx
import pytest
import respx
from httpx import Response

from referent.clients.html import HtmlFetcher, validate_url
from referent.errors import (
    ErrorKind,
    InvalidInputError,
    NetworkError,
    RequestTimeoutError,
    UpstreamCategory,
    UpstreamHttpError,
)


class TestValidateUrl:
    """Tests for URL validation."""

    @pytest.mark.parametrize(
        "url", ["", "   ", "not a url", "/relative/path", "ftp://example.com/file", "http://"]
    )
    def test_rejects_malformed_urls(self, url: str) -> None:
        """Should raise InvalidInputError for anything but absolute http(s) URLs."""
        with pytest.raises(InvalidInputError):
            validate_url(url)

    def test_accepts_absolute_url(self) -> None:
        """Should return the parsed URL."""
        parsed = validate_url(" https://example.com/article?id=1 ")
        assert parsed.host == "example.com"
        assert parsed.scheme == "https"


class TestHtmlFetcher:
    """Tests for HtmlFetcher."""

    @pytest.fixture
    def fetcher(self) -> HtmlFetcher:
        """Create a test fetcher."""
        return HtmlFetcher()

    @respx.mock
    async def test_fetch_success(self, fetcher: HtmlFetcher) -> None:
        """Should return the page HTML."""
        route = respx.get("https://example.com/article").mock(
            return_value=Response(200, text="<html><body><p>Hello</p></body></html>")
        )

        html = await fetcher.fetch("https://example.com/article")

        assert "<p>Hello</p>" in html
        assert route.call_count == 1
        await fetcher.close()

    @respx.mock
    async def test_fetch_sends_browser_headers(self, fetcher: HtmlFetcher) -> None:
        """Should send browser-like User-Agent, Accept and Accept-Language headers."""
        route = respx.get("https://example.com/article").mock(
            return_value=Response(200, text="<html></html>")
        )

        await fetcher.fetch("https://example.com/article")

        request = route.calls.last.request
        assert request.headers["User-Agent"].startswith("Mozilla/5.0")
        assert "text/html" in request.headers["Accept"]
        assert request.headers["Accept-Language"].startswith("en-US")
        await fetcher.close()

    @respx.mock
    async def test_invalid_url_makes_no_request(self, fetcher: HtmlFetcher) -> None:
        """Should fail fast without touching the network."""
        with pytest.raises(InvalidInputError):
            await fetcher.fetch("example.com/article")

        assert len(respx.calls) == 0
        await fetcher.close()

    @pytest.mark.parametrize(
        ("status_code", "category", "kind"),
        [
            (404, UpstreamCategory.NOT_FOUND, ErrorKind.NOT_FOUND),
            (401, UpstreamCategory.ACCESS_DENIED, ErrorKind.ACCESS_DENIED),
            (403, UpstreamCategory.ACCESS_DENIED, ErrorKind.ACCESS_DENIED),
            (500, UpstreamCategory.SERVER_ERROR, ErrorKind.SERVER_ERROR),
            (503, UpstreamCategory.SERVER_ERROR, ErrorKind.SERVER_ERROR),
            (429, UpstreamCategory.OTHER, ErrorKind.UPSTREAM_ERROR),
            (410, UpstreamCategory.OTHER, ErrorKind.UPSTREAM_ERROR),
        ],
    )
    async def test_http_errors_are_classified(
        self,
        fetcher: HtmlFetcher,
        status_code: int,
        category: UpstreamCategory,
        kind: ErrorKind,
    ) -> None:
        """Should raise UpstreamHttpError carrying the status and its classification."""
        with respx.mock:
            respx.get("https://example.com/page").mock(return_value=Response(status_code))

            with pytest.raises(UpstreamHttpError) as exc_info:
                await fetcher.fetch("https://example.com/page")

        assert exc_info.value.status_code == status_code
        assert exc_info.value.category is category
        assert exc_info.value.kind == kind
        await fetcher.close()

    @respx.mock
    async def test_fetch_timeout_raises_timeout(self, fetcher: HtmlFetcher) -> None:
        """Should raise RequestTimeoutError on timeout."""
        respx.get("https://example.com/slow").mock(
            side_effect=httpx.TimeoutException("timeout")
        )

        with pytest.raises(RequestTimeoutError):
            await fetcher.fetch("https://example.com/slow")
        await fetcher.close()

    @respx.mock
    async def test_fetch_connection_error_raises_network_error(
        self, fetcher: HtmlFetcher
    ) -> None:
        """Should raise NetworkError when the host is unreachable."""
        respx.get("https://example.com/down").mock(
            side_effect=httpx.ConnectError("connection refused")
        )

        with pytest.raises(NetworkError, match="connection refused"):
            await fetcher.fetch("https://example.com/down")
        await fetcher.close()
