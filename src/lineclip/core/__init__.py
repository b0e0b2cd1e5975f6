"""Message resolution and sync orchestration."""

from .resolver import ContentResolver, classify, resolve
from .sync import MessageSync, message_file_path

__all__ = [
    "ContentResolver",
    "MessageSync",
    "classify",
    "message_file_path",
    "resolve",
]
