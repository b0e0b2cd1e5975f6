"""Source-repository URLs, fetched through a flattened tree viewer."""

import logging
import re
from typing import Optional

from ..exceptions import MalformedInput
from ..http.protocols import HttpClient
from ..models.config import RepositoryConfig
from ..models.content import Content, SourceType
from .base import fetch_ok

logger = logging.getLogger(__name__)

REPOSITORY_TAG = "github"


def rewrite_host(url: str, source_host: str = "github.com", target_host: str = "uithub.com") -> str:
    """
    Swap the repository host for the viewer host.

    Plain substring replacement of the first occurrence; the URL is not
    re-parsed, so path and query come through byte for byte. A URL whose
    first occurrence of source_host is not the host would be rewritten in
    the wrong place.

    Examples:
        >>> rewrite_host("https://github.com/acme/widget?tab=readme")
        'https://uithub.com/acme/widget?tab=readme'
    """
    return url.replace(source_host, target_host, 1)


def parse_repository(url: str, host: str = "github.com") -> tuple[str, str]:
    """
    Extract (owner, repository) from ``https://<host>/{owner}/{repository}``.

    Returns ("", "") when the path does not start with two segments.

    Examples:
        >>> parse_repository("https://github.com/acme/widget/tree/main")
        ('acme', 'widget')
        >>> parse_repository("https://github.com/")
        ('', '')
    """
    match = re.match(rf"^https://{re.escape(host)}/([^/?#]+)/([^/?#]+)", url)
    if match is None:
        return "", ""
    return match.group(1), match.group(2)


class RepositoryStrategy:
    """
    Resolves a GitHub URL into the viewer's plain-text rendering of the repo.

    The viewer already returns a flattened, human-readable listing of the
    tree and file contents, so the body is stored as fetched.

    Example:
        async with AsyncHttpClient() as client:
            content = await RepositoryStrategy(client).resolve("https://github.com/acme/widget")
            assert content.title == "acme/widget"
    """

    def __init__(self, http_client: HttpClient, config: Optional[RepositoryConfig] = None) -> None:
        """
        Initialize the repository strategy.

        Args:
            http_client: HTTP client implementing HttpClient protocol
            config: Hosts and malformed-URL policy (defaults if None)
        """
        self._client = http_client
        self._config = config or RepositoryConfig()

    async def resolve(self, text: str) -> Content:
        """
        Fetch the flattened repository text.

        A URL without an owner/repository path yields an empty title
        unless strict_urls is set.

        Raises:
            FetchError: Network failure or non-2xx status
            MalformedInput: Owner/repository missing and strict_urls is set
        """
        url = text
        owner, repo = parse_repository(url, self._config.source_host)
        if not owner:
            if self._config.strict_urls:
                raise MalformedInput(f"Expected https://{self._config.source_host}/{{owner}}/{{repository}}: {url}")
            logger.debug(f"No owner/repository in {url}, title will be empty")

        viewer_url = rewrite_host(url, self._config.source_host, self._config.viewer_host)
        response = await fetch_ok(self._client, viewer_url)

        return Content(
            title=f"{owner}/{repo}" if owner else "",
            content=response.text,
            source=SourceType.GITHUB,
            tags=(REPOSITORY_TAG,),
            url=url,
        )
