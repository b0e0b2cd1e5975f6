"""HTML parsing with BeautifulSoup."""

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from ..exceptions import ParseError


class HtmlParser:
    """
    Parses raw HTML text into a BeautifulSoup tree.

    Example:
        soup = HtmlParser().parse("<html><body><p>Hi</p></body></html>")
    """

    def __init__(self, features: str = "html.parser") -> None:
        """
        Initialize the parser.

        Args:
            features: BeautifulSoup tree builder ("html.parser", "lxml", ...)
        """
        self._features = features

    def parse(self, html: str) -> BeautifulSoup:
        """
        Parse HTML text.

        Raises:
            ParseError: If the text is empty, rejected by the tree builder,
                or contains no markup elements at all
        """
        if not html.strip():
            raise ParseError("Document is empty")

        try:
            soup = BeautifulSoup(html, self._features)
        except ParserRejectedMarkup as e:
            raise ParseError(f"Markup rejected by parser: {e}") from e

        if soup.find() is None:
            raise ParseError("Document contains no markup elements")

        return soup
