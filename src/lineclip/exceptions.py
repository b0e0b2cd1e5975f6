"""Error types raised while resolving messages into documents."""

from typing import Optional


class ClipError(Exception):
    """Base class for all lineclip errors."""


class FetchError(ClipError):
    """
    A remote call failed.

    Raised on network errors and on any response whose status is outside
    the 2xx range. Never retried by lineclip itself.

    Attributes:
        url: The URL that was requested
        status_code: HTTP status code, or None for network failures
    """

    def __init__(self, url: str, message: str, status_code: Optional[int] = None) -> None:
        self.url = url
        self.status_code = status_code
        super().__init__(f"{message} ({url})")


class ParseError(ClipError):
    """Fetched markup could not be parsed into a tree."""


class ExtractionError(ClipError):
    """The extractor found no usable title or content in a web page."""


class MalformedInput(ClipError):
    """A repository URL did not match the /{owner}/{repository} pattern."""


class MessageFeedError(ClipError):
    """The message endpoint returned something other than a list of messages."""
