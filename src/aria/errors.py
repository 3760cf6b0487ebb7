"""Exception types raised by Aria components."""

from typing import Optional


class AriaError(Exception):
    """Base class for all Aria errors."""


class RejectedFormat(AriaError):
    """A file's extension is not one Aria can extract."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Skipped {name}: unsupported format")


class ExtractionError(AriaError):
    """A file could not be decoded or parsed."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Error processing {name}: {reason}")


class ServiceError(AriaError):
    """The analysis service returned a failure (or never answered)."""

    def __init__(self, status_code: Optional[int], message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(message)


class EmptyInput(AriaError):
    """Nothing to send: no pending files, or a blank chat message."""


class SessionBusy(AriaError):
    """An operation was attempted while another one is in flight."""
