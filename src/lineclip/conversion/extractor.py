"""Main content extraction from parsed HTML pages."""

import logging
import re
from typing import Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag
from readability import Document
from readability.readability import Unparseable

from ..exceptions import ExtractionError
from .protocols import ExtractedPage

logger = logging.getLogger(__name__)

# Elements that typically contain main content
CONTENT_SELECTORS = [
    "article",
    "main",
    '[role="main"]',
    ".content",
    ".main-content",
    ".post-content",
    ".article-content",
    ".entry-content",
    "#content",
    "#main-content",
]

# Elements to remove (navigation, ads, etc.)
REMOVE_SELECTORS = [
    "nav",
    "footer",
    "aside",
    ".nav",
    ".navbar",
    ".sidebar",
    ".footer",
    ".menu",
    ".advertisement",
    ".ads",
    ".social-share",
    ".comments",
    ".related-posts",
    '[role="navigation"]',
    '[role="banner"]',
    '[role="contentinfo"]',
    '[aria-hidden="true"]',
    "script",
    "style",
    "noscript",
    "iframe",
    "svg",
    "form",
    "button",
]

KEEP_ATTRIBUTES = frozenset({"href", "src", "alt", "title", "class"})

# Minimum visible text for a selector match to count as the main content
MIN_CONTENT_LENGTH = 100

# Returned by readability when a page has no <title>
READABILITY_NO_TITLE = "[no-title]"


def page_title(soup: BeautifulSoup) -> str:
    """
    Find the best available title in a page.

    Tries og:title, then <title>, then the first <h1>.
    """
    og_title = soup.find("meta", attrs={"property": "og:title"})
    if isinstance(og_title, Tag):
        value = og_title.get("content")
        if isinstance(value, str) and value.strip():
            return _collapse(value)

    for name in ("title", "h1"):
        element = soup.find(name)
        if isinstance(element, Tag):
            text = _collapse(element.get_text(" ", strip=True))
            if text:
                return text

    return ""


def _collapse(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def clean_content(content: Tag, url: str, remove_selectors: list[str]) -> None:
    """
    Clean an extracted subtree in place.

    Removes unwanted elements, strips attributes that carry no content
    and turns relative links and image sources into absolute URLs.
    """
    for selector in remove_selectors:
        for el in content.select(selector):
            el.decompose()

    for tag in content.find_all(True):
        attrs_to_remove = [attr for attr in tag.attrs if attr not in KEEP_ATTRIBUTES]
        for attr in attrs_to_remove:
            del tag[attr]
        if tag.get("class") == []:
            del tag["class"]

    for tag in content.find_all("a", href=True):
        href = tag["href"]
        if href.startswith("#"):
            continue
        if not href.startswith(("http://", "https://", "//", "mailto:", "tel:")):
            tag["href"] = urljoin(url, href)

    for tag in content.find_all(src=True):
        src = tag["src"]
        if not src.startswith(("http://", "https://", "//", "data:")):
            tag["src"] = urljoin(url, src)


def find_main_content(soup: BeautifulSoup, content_selectors: list[str]) -> Optional[Tag]:
    """
    Find the main content element using selectors.

    Returns the first selector match holding more than MIN_CONTENT_LENGTH
    characters of text, else <body>, else the soup itself for fragments.
    """
    for selector in content_selectors:
        element = soup.select_one(selector)
        if element and len(element.get_text(strip=True)) > MIN_CONTENT_LENGTH:
            return element

    body = soup.find("body")
    if isinstance(body, Tag):
        return body

    # Fragments parsed without a <body> wrapper
    if soup.find() is not None:
        return soup

    return None


def _has_content(content: Tag) -> bool:
    return bool(content.get_text(strip=True)) or content.find("img") is not None


def _require_content(title: str, content: Tag, url: str) -> ExtractedPage:
    if not title:
        raise ExtractionError(f"No title found in {url}")
    if not _has_content(content):
        raise ExtractionError(f"No readable content found in {url}")
    return ExtractedPage(title=title, content=content)


class ReadabilityExtractor:
    """
    Extracts the readable article from a page with readability-lxml.

    readability scores candidate blocks by text density and link density
    and returns the best one; the result is then cleaned the same way as
    selector-based extraction. When readability keeps nothing, the
    selector lookup (content containers, then <body>) is used instead.

    Example:
        extractor = ReadabilityExtractor()
        page = extractor.extract(soup, "https://blog.example.com/post")
        print(page.title)
    """

    def __init__(self, remove_selectors: Optional[list[str]] = None) -> None:
        """
        Initialize the extractor.

        Args:
            remove_selectors: CSS selectors for elements to remove (extends defaults)
        """
        self._remove_selectors = list(REMOVE_SELECTORS)
        if remove_selectors:
            self._remove_selectors.extend(remove_selectors)

    def extract(self, soup: BeautifulSoup, url: str) -> ExtractedPage:
        """
        Extract title and main content.

        Raises:
            ExtractionError: If readability fails or finds no title/content
        """
        document = Document(str(soup), url=url)
        try:
            summary = document.summary(html_partial=True)
            title = _collapse(document.short_title())
        except Unparseable as e:
            raise ExtractionError(f"Readability could not process {url}: {e}") from e

        if not title or title == READABILITY_NO_TITLE:
            title = page_title(soup)

        content = BeautifulSoup(summary, "html.parser")
        clean_content(content, url, self._remove_selectors)

        # readability drops short pages whose text sits in a plain <div>
        if not _has_content(content):
            main_content = find_main_content(soup, CONTENT_SELECTORS)
            if main_content is not None:
                logger.debug(f"Readability found no content in {url}, using selector fallback")
                content = BeautifulSoup(str(main_content), "html.parser")
                clean_content(content, url, self._remove_selectors)

        logger.debug(f"Readability extracted {len(content.get_text(strip=True))} chars from {url}")
        return _require_content(title, content, url)


class SelectorExtractor:
    """
    Extracts main content using CSS selector heuristics.

    Looks for the first well-known content container (article, main, ...)
    holding enough text, falling back to <body>.

    Example:
        extractor = SelectorExtractor()
        page = extractor.extract(soup, "https://docs.example.com/page")
    """

    def __init__(
        self,
        content_selectors: Optional[list[str]] = None,
        remove_selectors: Optional[list[str]] = None,
    ) -> None:
        """
        Initialize the content extractor.

        Args:
            content_selectors: CSS selectors for main content (overrides defaults)
            remove_selectors: CSS selectors for elements to remove (extends defaults)
        """
        self._content_selectors = content_selectors or CONTENT_SELECTORS
        self._remove_selectors = list(REMOVE_SELECTORS)
        if remove_selectors:
            self._remove_selectors.extend(remove_selectors)

    def extract(self, soup: BeautifulSoup, url: str) -> ExtractedPage:
        """
        Extract title and main content.

        Raises:
            ExtractionError: If no content element or title is found
        """
        main_content = find_main_content(soup, self._content_selectors)
        if main_content is None:
            raise ExtractionError(f"Could not find main content in {url}")

        # Work on a copy so the caller's tree stays intact
        content = BeautifulSoup(str(main_content), "html.parser")
        clean_content(content, url, self._remove_selectors)

        return _require_content(page_title(soup), content, url)
