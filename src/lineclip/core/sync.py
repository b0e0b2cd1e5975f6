"""Sync messages from the message endpoint into the document directory."""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator
from pathlib import Path
from types import TracebackType
from typing import Optional

from pydantic import ValidationError

from ..conversion.frontmatter import DocumentAssembler
from ..exceptions import ClipError, MessageFeedError
from ..http.client import AsyncHttpClient
from ..http.protocols import HttpClient
from ..models.config import ClipConfig
from ..models.events import SyncEvent, SyncEventType, SyncStats
from ..models.message import LineMessage, MessageList
from ..strategies.base import fetch_ok
from .resolver import ContentResolver

logger = logging.getLogger(__name__)


def message_file_path(directory: Path, message: LineMessage) -> Path:
    """
    Path of the document stored for a message.

    Format: ``<directory>/<YYYY-MM-DD>-<messageId>.md`` using the UTC date
    of the message timestamp.
    """
    return directory / f"{message.sent_at.strftime('%Y-%m-%d')}-{message.message_id}.md"


class MessageSync:
    """
    Pulls pending messages and stores one Markdown document per message.

    Messages are processed one at a time in feed order. A message whose
    document already exists is skipped; a message that fails to resolve
    is reported and the run moves on to the next one.

    Example:
        config = ClipConfig(
            message_endpoint="https://bot.example.com/messages",
            document_directory=Path("./vault/inbox"),
        )

        async with MessageSync(config) as sync:
            async for event in sync.run():
                if event.type == SyncEventType.MESSAGE_FAILED:
                    print(f"Error: {event.message_id} - {event.error}")

        print(sync.stats.to_dict())
    """

    def __init__(
        self,
        config: ClipConfig,
        http_client: Optional[HttpClient] = None,
        resolver: Optional[ContentResolver] = None,
        assembler: Optional[DocumentAssembler] = None,
    ) -> None:
        """
        Initialize the sync.

        Args:
            config: Endpoint, directory and conversion settings
            http_client: Client to use; an AsyncHttpClient is opened by the
                context manager if None
            resolver: Resolver to use (built from config if None)
            assembler: Document assembler (default if None)
        """
        self.config = config
        self._owns_client = http_client is None
        self._http_client: HttpClient = http_client or AsyncHttpClient.from_config(config.network)
        self._resolver = resolver or ContentResolver.from_config(self._http_client, config)
        self._assembler = assembler or DocumentAssembler()
        self._stats = SyncStats()

    @property
    def stats(self) -> SyncStats:
        """Get statistics of the last run."""
        return self._stats

    async def __aenter__(self) -> MessageSync:
        """Open the HTTP session if this sync owns it."""
        if self._owns_client and isinstance(self._http_client, AsyncHttpClient):
            await self._http_client.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Close the HTTP session if this sync owns it."""
        if self._owns_client and isinstance(self._http_client, AsyncHttpClient):
            await self._http_client.__aexit__(exc_type, exc_val, exc_tb)

    async def fetch_messages(self) -> list[LineMessage]:
        """
        Download and decode the pending message list.

        Raises:
            FetchError: The endpoint could not be reached or returned non-2xx
            MessageFeedError: The body is not a JSON list of messages
        """
        endpoint = self.config.message_endpoint
        if not endpoint:
            raise MessageFeedError("No message endpoint configured")

        response = await fetch_ok(self._http_client, endpoint)
        try:
            return MessageList.validate_json(response.content)
        except ValidationError as e:
            raise MessageFeedError(f"Invalid message list from {endpoint}: {e}") from e

    def _ensure_directory(self) -> Path:
        directory = self.config.document_directory
        if not self.config.dry_run and not directory.exists():
            directory.mkdir(parents=True)
            logger.info(f"Created document directory {directory}")
        return directory

    async def _process(self, message: LineMessage, directory: Path) -> SyncEvent:
        path = message_file_path(directory, message)

        if path.exists():
            self._stats.messages_skipped += 1
            return SyncEvent(
                type=SyncEventType.MESSAGE_SKIPPED,
                message_id=message.message_id,
                path=path,
                message=f"{path} already exists",
            )

        try:
            content = await self._resolver.resolve(message.text)
            document = self._assembler.assemble(content, message.metadata)
            if not self.config.dry_run:
                path.write_text(document, encoding="utf-8")
                logger.info(f"Saved message {message.message_id} to {path}")
        except (ClipError, OSError) as e:
            logger.error(f"Failed to clip message {message.message_id}: {e}")
            self._stats.messages_failed += 1
            return SyncEvent(
                type=SyncEventType.MESSAGE_FAILED,
                message_id=message.message_id,
                url=message.text if message.text.startswith("https://") else None,
                error=str(e),
            )

        self._stats.messages_saved += 1
        return SyncEvent(
            type=SyncEventType.MESSAGE_SAVED,
            message_id=message.message_id,
            url=content.url,
            path=path,
            message=f"Saved {content.source.value} message as {path.name}",
        )

    async def run(self) -> AsyncIterator[SyncEvent]:
        """
        Run one sync pass, yielding events as messages are processed.

        Feed-level failures end the run with a FAILED event; per-message
        failures produce MESSAGE_FAILED and the run continues.
        """
        self._stats = SyncStats()
        start = time.monotonic()

        yield SyncEvent(
            type=SyncEventType.STARTED,
            url=self.config.message_endpoint,
            message=f"Syncing into {self.config.document_directory}",
        )

        try:
            directory = self._ensure_directory()
            messages = await self.fetch_messages()
        except (ClipError, OSError) as e:
            logger.error(f"Sync failed: {e}")
            self._stats.duration_seconds = time.monotonic() - start
            yield SyncEvent(type=SyncEventType.FAILED, url=self.config.message_endpoint, error=str(e))
            return

        self._stats.messages_received = len(messages)
        yield SyncEvent(
            type=SyncEventType.MESSAGES_RECEIVED,
            total=len(messages),
            message=f"Received {len(messages)} messages",
        )

        for message in messages:
            yield await self._process(message, directory)

        self._stats.duration_seconds = time.monotonic() - start
        yield SyncEvent(
            type=SyncEventType.COMPLETED,
            total=len(messages),
            message=(
                f"{self._stats.messages_saved} saved, {self._stats.messages_skipped} skipped, "
                f"{self._stats.messages_failed} failed"
            ),
        )
