"""Content conversion for lineclip (HTML parsing, extraction, Markdown, front-matter)."""

from .extractor import ReadabilityExtractor, SelectorExtractor
from .frontmatter import DocumentAssembler, assemble, parse_frontmatter, to_iso8601
from .markdown import HtmlToMarkdown
from .parser import HtmlParser
from .protocols import ContentExtractor, ExtractedPage, MarkdownConverter, MarkupParser

__all__ = [
    # Protocols
    "ContentExtractor",
    "ExtractedPage",
    "MarkdownConverter",
    "MarkupParser",
    # Implementations
    "HtmlParser",
    "ReadabilityExtractor",
    "SelectorExtractor",
    "HtmlToMarkdown",
    "DocumentAssembler",
    # Helpers
    "assemble",
    "parse_frontmatter",
    "to_iso8601",
]
