"""Content extractors for Aria."""

import logging

from aria.errors import ExtractionError
from aria.extractors.delimited_extractor import DelimitedTextExtractor
from aria.extractors.spreadsheet_extractor import SpreadsheetExtractor
from aria.extractors.word_extractor import WordDocumentExtractor
from aria.models import ExtractionResult, FileKind, RawFile
from aria.protocols import Extractor

logger = logging.getLogger(__name__)

# Registry of available extractors, searched front to back
_EXTRACTORS: list[Extractor] = [
    DelimitedTextExtractor(),
    SpreadsheetExtractor(),
    WordDocumentExtractor(),
]


def get_extractor(kind: FileKind) -> Extractor:
    """Find the extractor for a content kind.

    Args:
        kind: The detected FileKind

    Returns:
        The registered Extractor for that kind

    Raises:
        LookupError: if nothing is registered for the kind
    """
    for extractor in _EXTRACTORS:
        if extractor.kind == kind:
            return extractor
    raise LookupError(f"No extractor registered for {kind.value}")


def register_extractor(extractor: Extractor) -> None:
    """Register a custom extractor; it takes precedence over earlier ones.

    Args:
        extractor: An object implementing the Extractor protocol
    """
    _EXTRACTORS.insert(0, extractor)


def extract(raw: RawFile, kind: FileKind) -> ExtractionResult:
    """Extract normalized text from one file.

    Raises:
        ExtractionError: on malformed input
    """
    result = get_extractor(kind).extract(raw)
    logger.debug(f"Extracted {raw.name} as {kind.value}: {len(result.text):,} chars")
    return result


__all__ = [
    "extract",
    "get_extractor",
    "register_extractor",
    "ExtractionError",
    "DelimitedTextExtractor",
    "SpreadsheetExtractor",
    "WordDocumentExtractor",
]
