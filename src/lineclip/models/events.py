"""Event types for the streaming sync API."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Optional


class SyncEventType(str, Enum):
    """Types of events emitted during a sync run."""

    # Lifecycle events
    STARTED = "started"
    COMPLETED = "completed"
    FAILED = "failed"

    # Message feed
    MESSAGES_RECEIVED = "messages_received"

    # Per-message outcomes
    MESSAGE_SAVED = "message_saved"
    MESSAGE_SKIPPED = "message_skipped"
    MESSAGE_FAILED = "message_failed"


@dataclass
class SyncEvent:
    """
    Event emitted during a sync run.

    Example:
        async for event in sync.run():
            if event.type == SyncEventType.MESSAGE_SAVED:
                print(f"Saved: {event.path}")
            elif event.type == SyncEventType.MESSAGE_FAILED:
                print(f"Error: {event.message_id} - {event.error}")
    """

    type: SyncEventType

    # Timestamp (always UTC)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    url: Optional[str] = None
    message_id: Optional[str] = None
    path: Optional[Path] = None
    message: Optional[str] = None
    error: Optional[str] = None
    total: Optional[int] = None

    @property
    def is_error(self) -> bool:
        """Check if this is an error event."""
        return self.type in (SyncEventType.FAILED, SyncEventType.MESSAGE_FAILED)


@dataclass
class SyncStats:
    """Cumulative statistics for a sync run."""

    messages_received: int = 0
    messages_saved: int = 0
    messages_skipped: int = 0
    messages_failed: int = 0
    duration_seconds: float = 0.0

    def to_dict(self) -> dict:
        """Convert stats to dictionary for serialization."""
        return {
            "messages_received": self.messages_received,
            "messages_saved": self.messages_saved,
            "messages_skipped": self.messages_skipped,
            "messages_failed": self.messages_failed,
            "duration_seconds": round(self.duration_seconds, 2),
        }
