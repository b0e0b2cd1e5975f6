"""Protocol definitions for content conversion."""

from dataclasses import dataclass
from typing import Protocol

from bs4 import BeautifulSoup, Tag


@dataclass(frozen=True)
class ExtractedPage:
    """
    Result of boilerplate extraction.

    Attributes:
        title: Human-readable page title
        content: Subtree holding the primary readable content
    """

    title: str
    content: Tag


class MarkupParser(Protocol):
    """Protocol for turning raw HTML text into a navigable tree."""

    def parse(self, html: str) -> BeautifulSoup:
        """
        Parse HTML text.

        Raises:
            ParseError: If the text cannot be parsed into markup
        """
        ...


class ContentExtractor(Protocol):
    """
    Protocol for extracting main content from a parsed page.

    Implementations should extract the main article content and its title
    while removing navigation, headers, footers, ads, etc.
    """

    def extract(self, soup: BeautifulSoup, url: str) -> ExtractedPage:
        """
        Extract main content from a parsed page.

        Args:
            soup: Parsed document
            url: Source URL (for relative link resolution)

        Returns:
            ExtractedPage with title and content subtree

        Raises:
            ExtractionError: If no title or no content is found
        """
        ...


class MarkdownConverter(Protocol):
    """
    Protocol for converting HTML to Markdown.

    Implementations convert cleaned HTML to Markdown format.
    """

    def convert(self, html: str, url: str) -> str:
        """
        Convert HTML to Markdown.

        Args:
            html: HTML content string
            url: Source URL (for resolving relative links)

        Returns:
            Markdown string
        """
        ...
