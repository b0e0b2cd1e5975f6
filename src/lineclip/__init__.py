"""
lineclip - Turn chat messages into Markdown documents.

A message is stored as-is when it is plain text, fetched and converted
to Markdown when it is a web URL, and fetched as a flattened repository
listing when it is a GitHub URL.

Usage:
    from lineclip import MessageMetadata, assemble, resolve

    content = await resolve("https://example.com/article")
    document = assemble(content, MessageMetadata(timestamp=1700000000000, message_id="4711"))
"""

__version__ = "1.0.0"

from .conversion import DocumentAssembler, assemble, parse_frontmatter
from .core import ContentResolver, MessageSync, classify, message_file_path, resolve
from .exceptions import (
    ClipError,
    ExtractionError,
    FetchError,
    MalformedInput,
    MessageFeedError,
    ParseError,
)
from .models import (
    ClipConfig,
    Content,
    LineMessage,
    MessageMetadata,
    SourceType,
    SyncEvent,
    SyncEventType,
    SyncStats,
)

__all__ = [
    "__version__",
    # Core
    "ContentResolver",
    "MessageSync",
    "classify",
    "message_file_path",
    "resolve",
    # Documents
    "DocumentAssembler",
    "assemble",
    "parse_frontmatter",
    # Models
    "ClipConfig",
    "Content",
    "LineMessage",
    "MessageMetadata",
    "SourceType",
    # Events
    "SyncEvent",
    "SyncEventType",
    "SyncStats",
    # Errors
    "ClipError",
    "ExtractionError",
    "FetchError",
    "MalformedInput",
    "MessageFeedError",
    "ParseError",
]
