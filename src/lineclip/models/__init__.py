"""Lineclip content, message, configuration and event models."""

from .config import ClipConfig, ConversionConfig, NetworkConfig, RepositoryConfig
from .content import Content, SourceType
from .events import SyncEvent, SyncEventType, SyncStats
from .message import LineMessage, MessageList, MessageMetadata, parse_timestamp

__all__ = [
    # Content
    "Content",
    "SourceType",
    # Messages
    "LineMessage",
    "MessageList",
    "MessageMetadata",
    "parse_timestamp",
    # Config
    "ClipConfig",
    "ConversionConfig",
    "NetworkConfig",
    "RepositoryConfig",
    # Events
    "SyncEvent",
    "SyncEventType",
    "SyncStats",
]
