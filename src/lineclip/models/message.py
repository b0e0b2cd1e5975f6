"""Chat message models received from the message endpoint."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

Timestamp = Union[int, float, str]


def _from_epoch_millis(millis: float, value: Timestamp) -> datetime:
    try:
        return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as err:
        raise ValueError(f"Invalid timestamp: {value!r}") from err


def parse_timestamp(value: Timestamp) -> datetime:
    """
    Parse a message timestamp into an aware UTC datetime.

    Accepts epoch milliseconds (as a number or a numeric string) and
    ISO-8601 strings. Naive ISO strings are taken as UTC.

    Raises:
        ValueError: If the value is neither form
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid timestamp: {value!r}")

    if isinstance(value, (int, float)):
        return _from_epoch_millis(value, value)

    text = str(value).strip()
    if not text:
        raise ValueError("Empty timestamp")

    try:
        millis = float(text)
    except ValueError:
        pass
    else:
        return _from_epoch_millis(millis, value)

    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as err:
        raise ValueError(f"Invalid timestamp: {value!r}") from err

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


class MessageMetadata(BaseModel):
    """Per-message metadata consumed by the document assembler."""

    timestamp: Timestamp
    message_id: str = Field(alias="messageId")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @field_validator("timestamp")
    @classmethod
    def _check_timestamp(cls, v: Timestamp) -> Timestamp:
        parse_timestamp(v)
        return v

    @property
    def sent_at(self) -> datetime:
        """Timestamp as an aware UTC datetime."""
        return parse_timestamp(self.timestamp)


class LineMessage(MessageMetadata):
    """
    A single chat message as served by the message endpoint.

    JSON format:
        {"messageId": "4711", "text": "https://example.com", "timestamp": 1700000000000}
    """

    text: str

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    @property
    def metadata(self) -> MessageMetadata:
        """Metadata part of the message."""
        return MessageMetadata(timestamp=self.timestamp, message_id=self.message_id)


MessageList = TypeAdapter(list[LineMessage])
