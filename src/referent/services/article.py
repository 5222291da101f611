"""Article extraction service for Referent."""

from referent.clients.html import HtmlFetcher
from referent.models import Article
from referent.services.extractor import extract_article
from referent.utils.logging import get_logger

logger = get_logger(__name__)


class ArticleService:
    """Fetches a page and extracts its article content."""

    def __init__(self, fetcher: HtmlFetcher) -> None:
        self._fetcher = fetcher

    async def extract(self, url: str) -> Article:
        """Fetch a URL and extract title, publication date and body.

        Raises:
            ReferentError: Any fetch error, or ParseError for non-markup pages.
        """
        html = await self._fetcher.fetch(url)
        article = extract_article(html)
        logger.info(
            "Article ready",
            url=url,
            title=article.title,
            published_at=article.published_at_iso,
        )
        return article
