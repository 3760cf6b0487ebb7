"""Data models for Aria."""

from aria.models.files import (
    ExtractionResult,
    FileKind,
    FileRecord,
    PreparedFile,
    RawFile,
    TruncatedContent,
)
from aria.models.session import BusyState, ChatRole, ChatTurn, SessionState

__all__ = [
    "FileKind",
    "RawFile",
    "ExtractionResult",
    "TruncatedContent",
    "PreparedFile",
    "FileRecord",
    "ChatRole",
    "ChatTurn",
    "BusyState",
    "SessionState",
]
