"""Classify raw messages and dispatch them to a strategy."""

from __future__ import annotations

from typing import Optional

from ..conversion.extractor import ReadabilityExtractor, SelectorExtractor
from ..conversion.markdown import HtmlToMarkdown
from ..conversion.protocols import ContentExtractor, MarkdownConverter, MarkupParser
from ..http.client import AsyncHttpClient
from ..http.protocols import HttpClient
from ..models.config import ClipConfig, ConversionConfig, RepositoryConfig
from ..models.content import Content, SourceType
from ..strategies.base import Strategy
from ..strategies.identity import IdentityStrategy
from ..strategies.repository import RepositoryStrategy
from ..strategies.web import WebStrategy

WEB_PREFIX = "https://"
REPOSITORY_PREFIX = "https://github.com/"


def classify(text: str, repository_prefix: str = REPOSITORY_PREFIX) -> SourceType:
    """
    Pick the source type for a raw message by its literal prefix.

    The repository check must run first: every repository URL is also
    an https:// URL.

    Examples:
        >>> classify("https://github.com/acme/widget")
        <SourceType.GITHUB: 'GitHub'>
        >>> classify("https://example.com")
        <SourceType.WEB: 'Web'>
        >>> classify("buy milk")
        <SourceType.LINE: 'LINE'>
    """
    if text.startswith(repository_prefix):
        return SourceType.GITHUB
    if text.startswith(WEB_PREFIX):
        return SourceType.WEB
    return SourceType.LINE


def build_extractor(config: ConversionConfig) -> ContentExtractor:
    """Create the extractor selected in the conversion config."""
    if config.extractor == "selectors":
        return SelectorExtractor()
    return ReadabilityExtractor()


def build_converter(config: ConversionConfig) -> MarkdownConverter:
    """Create a Markdown converter from the conversion config."""
    return HtmlToMarkdown(
        heading_style=config.heading_style,
        body_width=config.body_width,
        ignore_images=config.ignore_images,
    )


class ContentResolver:
    """
    Resolves raw messages into Content records.

    Holds one strategy per source type; ``resolve`` classifies the input
    and hands it to the matching strategy. Errors from the strategy
    propagate unchanged.

    Example:
        async with AsyncHttpClient() as client:
            resolver = ContentResolver(client)
            content = await resolver.resolve("https://github.com/acme/widget")
    """

    def __init__(
        self,
        http_client: HttpClient,
        parser: Optional[MarkupParser] = None,
        extractor: Optional[ContentExtractor] = None,
        converter: Optional[MarkdownConverter] = None,
        repository: Optional[RepositoryConfig] = None,
    ) -> None:
        """
        Initialize the resolver.

        Args:
            http_client: HTTP client shared by the remote strategies
            parser: Markup parser for web pages
            extractor: Boilerplate extractor for web pages
            converter: Markdown converter for web pages
            repository: Repository hosts and malformed-URL policy
        """
        self._repository = repository or RepositoryConfig()
        self._repository_prefix = f"https://{self._repository.source_host}/"
        self._strategies: dict[SourceType, Strategy] = {
            SourceType.GITHUB: RepositoryStrategy(http_client, self._repository),
            SourceType.WEB: WebStrategy(http_client, parser, extractor, converter),
            SourceType.LINE: IdentityStrategy(),
        }

    @classmethod
    def from_config(cls, http_client: HttpClient, config: ClipConfig) -> ContentResolver:
        """Build a resolver whose collaborators follow the given config."""
        return cls(
            http_client,
            extractor=build_extractor(config.conversion),
            converter=build_converter(config.conversion),
            repository=config.repository,
        )

    def classify(self, text: str) -> SourceType:
        """Classify with this resolver's repository host."""
        return classify(text, self._repository_prefix)

    def strategy_for(self, text: str) -> Strategy:
        """Return the strategy that will handle the input."""
        return self._strategies[self.classify(text)]

    async def resolve(self, text: str) -> Content:
        """
        Resolve one raw message.

        Raises:
            ClipError: Any error raised by the selected strategy
        """
        return await self.strategy_for(text).resolve(text)


async def resolve(text: str, config: Optional[ClipConfig] = None) -> Content:
    """
    Resolve a single message with a short-lived HTTP client.

    Plain-text messages never open a network session.

    Example:
        content = await resolve("https://example.com/article")
    """
    config = config or ClipConfig()
    client = AsyncHttpClient.from_config(config.network)
    resolver = ContentResolver.from_config(client, config)

    if resolver.classify(text) == SourceType.LINE:
        return await resolver.resolve(text)

    async with client:
        return await resolver.resolve(text)
