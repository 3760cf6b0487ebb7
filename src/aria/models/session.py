"""Conversation and session state models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from aria.models.files import FileRecord, RawFile


class ChatRole(Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class ChatTurn:
    """One entry of the transcript."""

    role: ChatRole
    text: str

    @classmethod
    def system(cls, text: str) -> "ChatTurn":
        return cls(ChatRole.SYSTEM, text)

    @classmethod
    def user(cls, text: str) -> "ChatTurn":
        return cls(ChatRole.USER, text)

    @classmethod
    def assistant(cls, text: str) -> "ChatTurn":
        return cls(ChatRole.ASSISTANT, text)

    def to_message(self) -> dict[str, str]:
        """Render as a Messages API message."""
        return {"role": self.role.value, "content": self.text}


class BusyState(Enum):
    IDLE = "idle"
    EXTRACTING_FILES = "extracting-files"
    AWAITING_SERVICE = "awaiting-service"


@dataclass
class SessionState:
    """Everything one conversation knows about.

    Only the session controller mutates this object. The transcript is
    append-only; it is never reordered or edited, only cleared on reset.
    """

    transcript: list[ChatTurn] = field(default_factory=list)
    analyzed_files: list[FileRecord] = field(default_factory=list)
    pending_files: list[RawFile] = field(default_factory=list)
    last_error: Optional[str] = None
    busy: BusyState = BusyState.IDLE
    warnings: list[str] = field(default_factory=list)  # transient, from the last queue_files
