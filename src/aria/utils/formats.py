"""File format detection utilities."""

from typing import Optional

from aria.models import FileKind

# Extension (lower-case, no dot) -> content kind
EXTENSION_KINDS = {
    # Delimited text
    "csv": FileKind.DELIMITED_TEXT,
    "txt": FileKind.DELIMITED_TEXT,
    # Spreadsheets
    "xlsx": FileKind.SPREADSHEET,
    "xls": FileKind.SPREADSHEET,
    # Word documents
    "doc": FileKind.WORD_DOCUMENT,
    "docx": FileKind.WORD_DOCUMENT,
}

SUPPORTED_EXTENSIONS = tuple(sorted(EXTENSION_KINDS))


def file_extension(filename: str) -> Optional[str]:
    """Return the lower-cased text after the final dot, or None if there is no dot."""
    if "." not in filename:
        return None
    return filename.rsplit(".", 1)[1].lower()


def detect(filename: str) -> Optional[FileKind]:
    """Map a filename to its content kind.

    Args:
        filename: Name of the uploaded file (a path is fine too)

    Returns:
        The FileKind, or None when the file must be rejected
    """
    extension = file_extension(filename)
    if extension is None:
        return None
    return EXTENSION_KINDS.get(extension)


def is_supported(filename: str) -> bool:
    return detect(filename) is not None
