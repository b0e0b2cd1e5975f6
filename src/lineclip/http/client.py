"""Async HTTP client on top of aiohttp."""

from __future__ import annotations

import asyncio
import logging
from types import TracebackType

import aiohttp

from ..exceptions import FetchError
from ..models.config import NetworkConfig
from .protocols import HttpResponse

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (lineclip/1.0)"


class AsyncHttpClient:
    """
    Async HTTP client used for every remote call.

    Features:
    - One aiohttp session per ``async with`` block
    - Content size limits to prevent memory exhaustion
    - Timeout controls

    No retries are attempted: a failed request raises FetchError at once
    and any retry policy belongs to the caller.

    Example:
        async with AsyncHttpClient() as client:
            response = await client.get("https://example.com")
            print(response.text)
    """

    def __init__(
        self,
        user_agent: str | None = None,
        timeout: float = 30.0,
        max_content_size: int = 50 * 1024 * 1024,
        proxy: str | None = None,
    ) -> None:
        """
        Initialize the HTTP client.

        Args:
            user_agent: Custom User-Agent string
            timeout: Total request timeout in seconds
            max_content_size: Maximum response size in bytes
            proxy: Proxy URL (http://)
        """
        self._user_agent = user_agent or DEFAULT_USER_AGENT
        self._timeout = timeout
        self._max_content_size = max_content_size
        self._proxy = proxy
        self._session: aiohttp.ClientSession | None = None

    @classmethod
    def from_config(cls, config: NetworkConfig) -> AsyncHttpClient:
        """Create a client from network settings."""
        return cls(
            user_agent=config.user_agent,
            timeout=config.timeout,
            max_content_size=config.max_content_size,
            proxy=config.proxy,
        )

    async def __aenter__(self) -> AsyncHttpClient:
        """Enter async context and create session."""
        self._session = aiohttp.ClientSession(
            headers={"User-Agent": self._user_agent},
            timeout=aiohttp.ClientTimeout(total=self._timeout),
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context and close session."""
        if self._session:
            await self._session.close()
            self._session = None

    async def get(self, url: str) -> HttpResponse:
        """
        Perform an HTTP GET request.

        Args:
            url: The URL to fetch

        Returns:
            HttpResponse for any status code

        Raises:
            FetchError: On network errors, timeouts or oversized content
        """
        if self._session is None:
            raise RuntimeError("Client not initialized. Use 'async with' context manager.")

        try:
            async with self._session.get(url, proxy=self._proxy, allow_redirects=True) as response:
                content_length = response.headers.get("Content-Length")
                if content_length and content_length.isdigit() and int(content_length) > self._max_content_size:
                    raise FetchError(url, f"Content too large: {content_length} bytes")

                content = b""
                async for chunk in response.content.iter_chunked(8192):
                    content += chunk
                    if len(content) > self._max_content_size:
                        raise FetchError(url, f"Content size limit exceeded: >{self._max_content_size} bytes")

                logger.debug(f"GET {url} -> {response.status} ({len(content)} bytes)")

                return HttpResponse(
                    status_code=response.status,
                    content=content,
                    content_type=response.headers.get("Content-Type", ""),
                    headers=dict(response.headers),
                    url=str(response.url),
                )

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise FetchError(url, f"Request failed: {e!r}") from e
