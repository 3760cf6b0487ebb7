"""Header-plus-window truncation strategy."""

from aria.models import TruncatedContent

DEFAULT_MAX_CHARS = 15000
TRUNCATION_MARKER = "\n\n[... content truncated for length ...]"


class WindowTruncator:
    """Default truncation: keep the first 3 lines, then a window of what follows.

    This strategy keeps the parts of tabular data a reader needs most:
    - The header lines (column names, sheet banners) are always kept whole
    - The text right after the header fills the remaining budget
    - A fixed marker records that the rest was dropped

    The output depends only on the input text and the budget.
    """

    HEADER_LINES = 3
    RESERVE = 200
    # Joining newline plus the marker; the most the output may exceed max_chars by
    MARKER_OVERHEAD = 1 + len(TRUNCATION_MARKER)

    def __init__(self, max_chars: int = DEFAULT_MAX_CHARS):
        if max_chars <= 0:
            raise ValueError(f"max_chars must be positive, got {max_chars}")
        self.max_chars = max_chars

    def truncate(self, text: str) -> TruncatedContent:
        """Bound text to the character budget.

        Args:
            text: The extracted text

        Returns:
            TruncatedContent; the text is unchanged when it already fits
        """
        if len(text) <= self.max_chars:
            return TruncatedContent(text=text, was_truncated=False)

        # A header longer than the budget is kept whole, so the length bound
        # only holds when the first lines fit.
        header = "\n".join(text.split("\n")[: self.HEADER_LINES])
        remaining = max(self.max_chars - len(header) - self.RESERVE, 0)
        middle = text[len(header) : len(header) + remaining]

        return TruncatedContent(
            text=header + "\n" + middle + TRUNCATION_MARKER,
            was_truncated=True,
        )


def truncate(text: str, max_chars: int = DEFAULT_MAX_CHARS) -> TruncatedContent:
    """Bound text to ``max_chars`` with the default strategy."""
    return WindowTruncator(max_chars).truncate(text)
