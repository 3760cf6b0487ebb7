"""Size-bounding strategies for extracted text."""

from aria.truncators.window_truncator import (
    DEFAULT_MAX_CHARS,
    TRUNCATION_MARKER,
    WindowTruncator,
    truncate,
)

__all__ = ["WindowTruncator", "truncate", "DEFAULT_MAX_CHARS", "TRUNCATION_MARKER"]
