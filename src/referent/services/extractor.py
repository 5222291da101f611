"""Heuristic extraction of title, publication date and body from article HTML.

Each field is resolved by a cascade: an ordered list of selector strategies
tried in turn until one yields a usable value. Strategies trade precision for
recall as the list goes on, so a specific container beats a whole-page dump
whenever it produces enough text.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from bs4 import BeautifulSoup, Tag
from bs4.exceptions import ParserRejectedMarkup
from dateutil import parser as date_parser

from referent.errors import ParseError
from referent.models import Article
from referent.utils.logging import get_logger

logger = get_logger(__name__)

UNTITLED = "Untitled Article"
NO_CONTENT = "Could not extract article content"

MIN_PARAGRAPH_LENGTH = 20
MIN_CONTAINER_LENGTH = 100
MIN_DOCUMENT_LENGTH = 50
MAX_DOCUMENT_PARAGRAPHS = 20
MAX_FLAT_TEXT_LENGTH = 5000

NOISE_SELECTORS = [
    "script",
    "style",
    "noscript",
    "nav",
    "aside",
    ".advertisement",
    ".ads",
    ".social-share",
    ".comments",
]
# Only stripped in the whole-document pass; a container may keep its own header.
PAGE_CHROME_SELECTORS = ["header", "footer"]


def _element_text(element: Tag) -> str | None:
    return element.get_text().strip() or None


def _meta_content(element: Tag) -> str | None:
    content = element.get("content")
    if isinstance(content, str) and content.strip():
        return content.strip()
    return None


def _date_value(element: Tag) -> str | None:
    for attr in ("datetime", "content"):
        value = element.get(attr)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return _element_text(element)


def _datetime_attr(element: Tag) -> str | None:
    value = element.get("datetime")
    return value.strip() if isinstance(value, str) and value.strip() else None


@dataclass(frozen=True)
class Strategy:
    """A CSS selector paired with a reader for the first matching element."""

    selector: str
    read: Callable[[Tag], str | None]


TITLE_STRATEGIES = [
    Strategy("article h1", _element_text),
    Strategy('[role="article"] h1', _element_text),
    Strategy(".article-title", _element_text),
    Strategy(".post-title", _element_text),
    Strategy("h1", _element_text),
    Strategy("title", _element_text),
    Strategy('meta[property="og:title"]', _meta_content),
    Strategy('meta[name="twitter:title"]', _meta_content),
]

DATE_STRATEGIES = [
    Strategy("time[datetime]", _datetime_attr),
    Strategy("time", _element_text),
    Strategy('[itemprop="datePublished"]', _date_value),
    Strategy('meta[property="article:published_time"]', _meta_content),
    Strategy('meta[name="publish-date"]', _meta_content),
    Strategy(".published-date", _date_value),
    Strategy(".post-date", _date_value),
]

CONTENT_SELECTORS = [
    "article",
    '[role="article"]',
    ".article-content",
    ".post-content",
    ".entry-content",
    "main article",
    '[itemprop="articleBody"]',
]


def parse_document(html: str | bytes) -> BeautifulSoup:
    """Parse HTML leniently.

    Raises:
        ParseError: If the input is empty or contains no markup at all.
    """
    if not html or not html.strip():
        raise ParseError("Document is empty")
    try:
        soup = BeautifulSoup(html, "lxml")
    except ParserRejectedMarkup as e:
        raise ParseError(f"Document could not be parsed: {e}") from e
    if soup.find() is None:
        raise ParseError("Document contains no markup")
    return soup


def _first_match(soup: BeautifulSoup, strategies: list[Strategy]) -> tuple[str, str] | None:
    for strategy in strategies:
        element = soup.select_one(strategy.selector)
        if element is None:
            continue
        value = strategy.read(element)
        if value:
            return strategy.selector, value
    return None


def extract_title(soup: BeautifulSoup) -> str:
    """Return the first non-empty title candidate, or the untitled sentinel."""
    match = _first_match(soup, TITLE_STRATEGIES)
    return match[1] if match else UNTITLED


def parse_date(value: str) -> datetime | None:
    """Parse a date string into an aware UTC datetime, or None if unparsable."""
    try:
        parsed = date_parser.parse(value)
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=UTC)
        # Offsets beyond a day, or shifts past datetime.min/max, fail here.
        return parsed.astimezone(UTC)
    except (ValueError, OverflowError):
        return None


def extract_published_at(soup: BeautifulSoup, now: datetime | None = None) -> datetime:
    """Return the first parsable publication date, or the extraction time."""
    for strategy in DATE_STRATEGIES:
        element = soup.select_one(strategy.selector)
        if element is None:
            continue
        candidate = strategy.read(element)
        if not candidate:
            continue
        parsed = parse_date(candidate)
        if parsed is not None:
            return parsed
        logger.debug("Unparsable date candidate", selector=strategy.selector, value=candidate)
    return now or datetime.now(UTC)


def _strip(root: Tag, selectors: list[str]) -> None:
    for element in root.select(", ".join(selectors)):
        # Nested matches are already gone with their ancestor.
        if not element.decomposed:
            element.decompose()


def _paragraph_texts(root: Tag) -> list[str]:
    texts = (p.get_text().strip() for p in root.find_all("p"))
    return [text for text in texts if len(text) > MIN_PARAGRAPH_LENGTH]


def _from_containers(soup: BeautifulSoup) -> str | None:
    for selector in CONTENT_SELECTORS:
        container = soup.select_one(selector)
        if container is None:
            continue
        _strip(container, NOISE_SELECTORS)
        content = "\n\n".join(_paragraph_texts(container))
        if len(content) > MIN_CONTAINER_LENGTH:
            logger.debug("Body found in container", selector=selector, length=len(content))
            return content
    return None


def _from_document(soup: BeautifulSoup) -> str | None:
    root = soup.body or soup
    _strip(root, NOISE_SELECTORS + PAGE_CHROME_SELECTORS)
    content = "\n\n".join(_paragraph_texts(root)[:MAX_DOCUMENT_PARAGRAPHS])
    if len(content) >= MIN_DOCUMENT_LENGTH:
        logger.debug("Body found in document paragraphs", length=len(content))
        return content
    return None


def _flatten(html: str | bytes) -> str:
    soup = BeautifulSoup(html, "lxml")
    root = soup.body or soup
    _strip(root, ["script", "style", "noscript", "template"])
    lines = (line.strip() for line in root.get_text("\n").splitlines())
    return "\n".join(line for line in lines if line)[:MAX_FLAT_TEXT_LENGTH]


def _clean(content: str) -> str:
    return re.sub(r"\n{3,}", "\n\n", content).strip()


def extract_body(soup: BeautifulSoup, html: str | bytes) -> str:
    """Extract the article body, degrading through container, page and flat text.

    Note: noise elements are removed from ``soup`` in place.
    """
    content = _from_containers(soup) or _from_document(soup)
    if content is None:
        logger.debug("Falling back to flattened page text")
        content = _flatten(html)
    return _clean(content) or NO_CONTENT


def extract_article(html: str | bytes, now: datetime | None = None) -> Article:
    """Extract an Article from raw HTML.

    Extraction quality problems never raise; a degraded body is returned instead.

    Args:
        html: Raw page markup.
        now: Fallback publication time, defaults to the current UTC time.

    Raises:
        ParseError: If the input is not markup at all.
    """
    soup = parse_document(html)
    title = extract_title(soup)
    published_at = extract_published_at(soup, now)
    body = extract_body(soup, html)

    logger.info("Article extracted", title=title, body_length=len(body))
    return Article(title=title, published_at=published_at, body=body)
