"""Document assembly: front-matter plus Markdown body."""

from __future__ import annotations

import json
from typing import Any

from ..models.content import Content, SourceType
from ..models.message import MessageMetadata, Timestamp, parse_timestamp

FRONTMATTER_DELIMITER = "---"


def to_iso8601(timestamp: Timestamp) -> str:
    """
    Format a message timestamp as ISO-8601 UTC with millisecond precision.

    Examples:
        >>> to_iso8601(1700000000000)
        '2023-11-14T22:13:20.000Z'
        >>> to_iso8601("2024-05-01T09:30:00+09:00")
        '2024-05-01T00:30:00.000Z'
    """
    moment = parse_timestamp(timestamp)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def _quote(value: str) -> str:
    """Double-quote a free-form value so newlines, colons and quotes survive a round-trip."""
    return json.dumps(value, ensure_ascii=False)


class DocumentAssembler:
    """
    Builds the stored document for one resolved message.

    Format:
        ---
        title: "Getting Started"
        date: 2024-05-01T00:30:00.000Z
        source: Web
        messageId: "4711"
        url: "https://docs.example.com/start"
        tags: github, notes
        ---

        <body>

    Example:
        assembler = DocumentAssembler()
        document = assembler.assemble(content, MessageMetadata(timestamp=ts, message_id="4711"))
    """

    def build_frontmatter(self, content: Content, metadata: MessageMetadata) -> list[str]:
        """Return the front-matter lines, delimiters included."""
        lines = [
            FRONTMATTER_DELIMITER,
            f"title: {_quote(content.title)}",
            f"date: {to_iso8601(metadata.timestamp)}",
            f"source: {content.source.value}",
            f"messageId: {_quote(metadata.message_id)}",
        ]
        if content.url:
            lines.append(f"url: {_quote(content.url)}")
        lines.append(f"tags: {', '.join(content.tags)}".rstrip())
        lines.append(FRONTMATTER_DELIMITER)
        return lines

    def assemble(self, content: Content, metadata: MessageMetadata) -> str:
        """
        Render front-matter, a blank line, then the body verbatim.

        Args:
            content: Resolved content record
            metadata: Timestamp and identifier of the originating message

        Returns:
            Complete document text
        """
        return "\n".join([*self.build_frontmatter(content, metadata), "", content.content])


def assemble(content: Content, metadata: MessageMetadata) -> str:
    """Assemble a document with the default assembler."""
    return DocumentAssembler().assemble(content, metadata)


def parse_frontmatter(document: str) -> tuple[dict[str, Any], str]:
    """
    Split an assembled document into its front-matter fields and body.

    ``source`` is returned as a SourceType and ``tags`` as a list; quoted
    values are unquoted, everything else is returned as a string.

    Raises:
        ValueError: If the document does not start with a front-matter block
    """
    lines = document.split("\n")
    if not lines or lines[0] != FRONTMATTER_DELIMITER:
        raise ValueError("Document has no front-matter block")

    try:
        end = lines.index(FRONTMATTER_DELIMITER, 1)
    except ValueError as err:
        raise ValueError("Front-matter block is not closed") from err

    fields: dict[str, Any] = {}
    for line in lines[1:end]:
        key, sep, value = line.partition(":")
        if not sep:
            raise ValueError(f"Invalid front-matter line: {line!r}")
        value = value.strip()
        if value.startswith('"'):
            value = json.loads(value)
        fields[key.strip()] = value

    if "source" in fields:
        fields["source"] = SourceType(fields["source"])
    if "tags" in fields:
        fields["tags"] = [tag.strip() for tag in fields["tags"].split(",") if tag.strip()]

    # Skip the blank separator line
    body = "\n".join(lines[end + 2 :]) if len(lines) > end + 1 else ""
    return fields, body
