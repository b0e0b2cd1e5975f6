"""Generic web pages: fetch, extract the readable part, convert to Markdown."""

import logging
from typing import Optional

from ..conversion.extractor import ReadabilityExtractor
from ..conversion.markdown import HtmlToMarkdown
from ..conversion.parser import HtmlParser
from ..conversion.protocols import ContentExtractor, MarkdownConverter, MarkupParser
from ..exceptions import ExtractionError
from ..http.protocols import HttpClient
from ..models.content import Content, SourceType
from .base import fetch_ok

logger = logging.getLogger(__name__)


class WebStrategy:
    """
    Resolves an https:// URL into a Markdown document.

    Steps: GET the page, parse it, run boilerplate extraction, convert the
    extracted fragment to Markdown. Every collaborator is injectable so the
    strategy can run against stubs.

    Example:
        async with AsyncHttpClient() as client:
            content = await WebStrategy(client).resolve("https://example.com/post")
    """

    def __init__(
        self,
        http_client: HttpClient,
        parser: Optional[MarkupParser] = None,
        extractor: Optional[ContentExtractor] = None,
        converter: Optional[MarkdownConverter] = None,
    ) -> None:
        """
        Initialize the web strategy.

        Args:
            http_client: HTTP client implementing HttpClient protocol
            parser: Markup parser (uses HtmlParser if None)
            extractor: Boilerplate extractor (uses ReadabilityExtractor if None)
            converter: Markdown converter (uses HtmlToMarkdown if None)
        """
        self._client = http_client
        self._parser = parser or HtmlParser()
        self._extractor = extractor or ReadabilityExtractor()
        self._converter = converter or HtmlToMarkdown()

    async def resolve(self, text: str) -> Content:
        """
        Fetch and convert a web page.

        Raises:
            FetchError: Network failure or non-2xx status
            ParseError: The body is not markup
            ExtractionError: No title or no content could be extracted
        """
        url = text
        response = await fetch_ok(self._client, url)

        soup = self._parser.parse(response.text)
        page = self._extractor.extract(soup, url)
        markdown = self._converter.convert(str(page.content), url)

        if not markdown.strip():
            raise ExtractionError(f"Extracted content of {url} converted to empty Markdown")

        logger.debug(f"Resolved {url} as {page.title!r}")
        return Content(
            title=page.title,
            content=markdown,
            source=SourceType.WEB,
            tags=(),
            url=url,
        )
