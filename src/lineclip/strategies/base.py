"""Strategy protocol and shared fetch helper."""

import logging
from typing import Protocol, runtime_checkable

from ..exceptions import FetchError
from ..http.protocols import HttpClient, HttpResponse
from ..models.content import Content

logger = logging.getLogger(__name__)


@runtime_checkable
class Strategy(Protocol):
    """
    Protocol for input-handling strategies.

    Each strategy turns one raw message into a Content record or raises
    a ClipError. Strategies never return partially filled records.
    """

    async def resolve(self, text: str) -> Content:
        """
        Resolve a raw message.

        Args:
            text: The message exactly as received

        Returns:
            Content record tagged with this strategy's source
        """
        ...


async def fetch_ok(client: HttpClient, url: str) -> HttpResponse:
    """
    GET a URL and require a 2xx response.

    Raises:
        FetchError: On network failure or non-success status
    """
    response = await client.get(url)
    if not response.ok:
        raise FetchError(url, f"HTTP {response.status_code}", status_code=response.status_code)

    logger.debug(f"Fetched {url}: {len(response.content)} bytes")
    return response
