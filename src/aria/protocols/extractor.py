"""Protocol for format-specific content extractors."""

from typing import Protocol, runtime_checkable

from aria.models import ExtractionResult, FileKind, RawFile


@runtime_checkable
class Extractor(Protocol):
    """Protocol for content extractors.

    Each implementation handles one FileKind (delimited text, spreadsheet,
    word document). Uses structural subtyping - no inheritance required.
    """

    @property
    def kind(self) -> FileKind:
        """Return the kind of file this extractor understands."""
        ...

    def extract(self, raw: RawFile) -> ExtractionResult:
        """Turn raw bytes into normalized text and counters.

        Raises ExtractionError when the input is malformed.
        """
        ...
