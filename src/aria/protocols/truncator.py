"""Protocol for text size-bounding strategies."""

from typing import Protocol, runtime_checkable

from aria.models import TruncatedContent


@runtime_checkable
class Truncator(Protocol):
    """Protocol for strategies that bound text to a character budget."""

    def truncate(self, text: str) -> TruncatedContent:
        """Return the text, shortened if it exceeds the budget."""
        ...
