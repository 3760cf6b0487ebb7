"""Data models for uploaded files and their extracted content."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


class FileKind(Enum):
    """Content kinds Aria knows how to extract."""

    DELIMITED_TEXT = "delimited-text"
    SPREADSHEET = "spreadsheet"
    WORD_DOCUMENT = "word-document"


@dataclass(frozen=True)
class RawFile:
    """A file exactly as supplied by the upload surface."""

    name: str
    data: bytes = field(repr=False)
    size_bytes: int = -1

    def __post_init__(self) -> None:
        if self.size_bytes < 0:
            object.__setattr__(self, "size_bytes", len(self.data))

    @classmethod
    def from_path(cls, path: Path | str) -> "RawFile":
        """Read a local file into a RawFile."""
        file_path = Path(path)
        data = file_path.read_bytes()
        return cls(name=file_path.name, data=data, size_bytes=len(data))


@dataclass(frozen=True)
class ExtractionResult:
    """Normalized text plus the counters relevant to its kind."""

    text: str
    kind: FileKind
    line_count: Optional[int] = None
    row_count: Optional[int] = None
    sheet_count: Optional[int] = None
    word_count: Optional[int] = None

    def counters(self) -> dict[str, int]:
        """Return only the counters set for this kind."""
        values = {
            "line_count": self.line_count,
            "row_count": self.row_count,
            "sheet_count": self.sheet_count,
            "word_count": self.word_count,
        }
        return {key: value for key, value in values.items() if value is not None}


@dataclass(frozen=True)
class TruncatedContent:
    """Text bounded to a character budget."""

    text: str
    was_truncated: bool


@dataclass(frozen=True)
class PreparedFile:
    """A pending file after detection, extraction and truncation."""

    raw: RawFile
    extraction: ExtractionResult
    content: TruncatedContent

    @property
    def name(self) -> str:
        return self.raw.name

    @property
    def text(self) -> str:
        return self.content.text

    @property
    def was_truncated(self) -> bool:
        return self.content.was_truncated


@dataclass(frozen=True)
class FileRecord:
    """Summary of a file that has been presented to the analysis service."""

    name: str
    size_bytes: int
    kind: FileKind
    was_truncated: bool
    line_count: Optional[int] = None
    row_count: Optional[int] = None
    sheet_count: Optional[int] = None
    word_count: Optional[int] = None

    @classmethod
    def from_prepared(cls, prepared: PreparedFile) -> "FileRecord":
        extraction = prepared.extraction
        return cls(
            name=prepared.name,
            size_bytes=prepared.raw.size_bytes,
            kind=extraction.kind,
            was_truncated=prepared.was_truncated,
            line_count=extraction.line_count,
            row_count=extraction.row_count,
            sheet_count=extraction.sheet_count,
            word_count=extraction.word_count,
        )

    @property
    def size_kb(self) -> float:
        return self.size_bytes / 1024

    def describe(self) -> str:
        """Short label used in chat context, e.g. ``ledger.csv (12.3KB)``."""
        return f"{self.name} ({self.size_kb:.1f}KB)"
