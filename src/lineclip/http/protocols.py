"""Protocol definitions for HTTP client abstraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from .encoding import decode_content


@dataclass(frozen=True)
class HttpResponse:
    """
    Immutable HTTP response returned by HttpClient.

    Attributes:
        status_code: HTTP status code (200, 404, etc.)
        content: Raw response content as bytes
        content_type: Content-Type header value
        headers: All response headers
        url: Final URL after any redirects
    """

    status_code: int
    content: bytes
    content_type: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    url: str = ""

    @property
    def ok(self) -> bool:
        """Check for a 2xx status."""
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        """Response body decoded to a string."""
        return decode_content(self.content, self.content_type)


class HttpClient(Protocol):
    """
    Protocol for HTTP clients.

    Implementations return a response for any HTTP status and raise
    FetchError only when no response could be obtained. Status checks
    are left to the caller.
    """

    async def get(self, url: str) -> HttpResponse:
        """
        Perform an unauthenticated HTTP GET request.

        Args:
            url: The URL to fetch

        Returns:
            HttpResponse with status, content, and headers

        Raises:
            FetchError: On network errors or oversized responses
        """
        ...
