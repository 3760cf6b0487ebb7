"""Extractor for Word documents."""

import io

from docx import Document

from aria.errors import ExtractionError
from aria.models import ExtractionResult, FileKind, RawFile


def document_text(data: bytes) -> str:
    """Extract plain text from a .docx package.

    Paragraphs come first, one per line, then table rows with their cells
    separated by tabs.
    """
    document = Document(io.BytesIO(data))
    lines = [paragraph.text for paragraph in document.paragraphs]
    for table in document.tables:
        for row in table.rows:
            lines.append("\t".join(cell.text for cell in row.cells))
    return "\n".join(lines).strip()


class WordDocumentExtractor:
    """Extractor for Word documents (.docx, and .doc files that are really .docx)."""

    kind = FileKind.WORD_DOCUMENT

    def extract(self, raw: RawFile) -> ExtractionResult:
        try:
            text = document_text(raw.data)
        except Exception as e:
            raise ExtractionError(raw.name, f"Failed to parse Word document: {e}") from e

        return ExtractionResult(
            text=text,
            kind=self.kind,
            word_count=len(text.split()),
        )
