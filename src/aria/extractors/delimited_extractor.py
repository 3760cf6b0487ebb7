"""Extractor for CSV and plain-text files."""

from aria.models import ExtractionResult, FileKind, RawFile

# Tried in order; latin-1 maps every byte so decoding always succeeds
FALLBACK_ENCODINGS = ("utf-8-sig", "cp1252", "latin-1")


def decode_text(data: bytes) -> str:
    """Decode bytes as text, preferring UTF-8."""
    for encoding in FALLBACK_ENCODINGS:
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    return data.decode("utf-8", errors="replace")


def count_non_blank_lines(text: str) -> int:
    return sum(1 for line in text.split("\n") if line.strip())


class DelimitedTextExtractor:
    """Extractor for delimited text (.csv, .txt).

    The decoded text is passed through verbatim.
    """

    kind = FileKind.DELIMITED_TEXT

    def extract(self, raw: RawFile) -> ExtractionResult:
        text = decode_text(raw.data)
        return ExtractionResult(
            text=text,
            kind=self.kind,
            line_count=count_non_blank_lines(text),
        )
