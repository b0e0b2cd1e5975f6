"""The normalized content record produced for every message."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class SourceType(str, Enum):
    """Provenance of a resolved message."""

    LINE = "LINE"
    WEB = "Web"
    GITHUB = "GitHub"


@dataclass(frozen=True)
class Content:
    """
    Immutable content record for one message.

    Attributes:
        title: Page title, "<owner>/<repo>" for repositories, or the message itself
        content: Markdown body (web), flattened tree text (GitHub), or the raw message
        source: Which strategy produced the record
        tags: Classification labels, order irrelevant
        url: Original input URL for remote sources
    """

    title: str
    content: str
    source: SourceType
    tags: tuple[str, ...] = field(default_factory=tuple)
    url: Optional[str] = None

    @property
    def is_remote(self) -> bool:
        """Check if this record was fetched from the network."""
        return self.source != SourceType.LINE

    def to_dict(self) -> dict:
        """Convert the record to a dictionary for serialization."""
        return {
            "title": self.title,
            "content": self.content,
            "source": self.source.value,
            "tags": list(self.tags),
            "url": self.url,
        }
