"""HTML fetcher for article pages."""

import asyncio

import httpx

from referent.errors import InvalidInputError, NetworkError, RequestTimeoutError, UpstreamHttpError
from referent.utils.logging import get_logger

logger = get_logger(__name__)

BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/131.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}


def validate_url(url: str) -> httpx.URL:
    """Parse an absolute http(s) URL.

    Raises:
        InvalidInputError: If the URL is missing, relative or malformed.
    """
    if not isinstance(url, str) or not url.strip():
        raise InvalidInputError("URL is required")
    try:
        parsed = httpx.URL(url.strip())
    except (httpx.InvalidURL, ValueError) as e:
        raise InvalidInputError(f"Invalid URL format: {url}") from e
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise InvalidInputError(f"Invalid URL format: {url}")
    return parsed


class HtmlFetcher:
    """Fetches raw HTML for article URLs under a hard timeout."""

    def __init__(self, timeout: float = 30.0) -> None:
        self._timeout = timeout
        self._client = httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            headers=BROWSER_HEADERS,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "HtmlFetcher":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def fetch(self, url: str) -> str:
        """Fetch the HTML of a page with a single GET request.

        Args:
            url: Absolute http(s) URL of the page.

        Returns:
            The response body decoded as text.

        Raises:
            InvalidInputError: If the URL is malformed. No request is made.
            RequestTimeoutError: If the page is not received within the timeout.
            UpstreamHttpError: If the site answers with a non-2xx status.
            NetworkError: If the site cannot be reached.
        """
        parsed = validate_url(url)
        logger.info("Fetching page", url=str(parsed))

        try:
            async with asyncio.timeout(self._timeout):
                response = await self._client.get(parsed)
        except (TimeoutError, httpx.TimeoutException) as e:
            logger.warning("Timeout fetching URL", url=url, timeout=self._timeout)
            raise RequestTimeoutError(
                f"Failed to fetch article within {self._timeout:g} seconds"
            ) from e
        except httpx.RequestError as e:
            logger.warning("Request error fetching URL", url=url, error=str(e))
            raise NetworkError(f"request error: {e}") from e

        if not response.is_success:
            logger.warning("HTTP error fetching URL", url=url, status=response.status_code)
            raise UpstreamHttpError(
                response.status_code,
                f"Failed to fetch article: HTTP {response.status_code} {response.reason_phrase}".rstrip(),
            )

        logger.info("Page fetched", url=url, size=len(response.content))
        return response.text
