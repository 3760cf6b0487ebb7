"""Extractor for Excel workbooks (.xlsx and legacy .xls)."""

import csv
import io
import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Iterable, Iterator

import openpyxl
import xlrd

from aria.errors import ExtractionError
from aria.models import ExtractionResult, FileKind, RawFile

logger = logging.getLogger(__name__)

ZIP_MAGIC = b"PK\x03\x04"
OLE2_MAGIC = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"


@dataclass
class Sheet:
    """One worksheet rendered to CSV."""

    name: str
    csv_text: str
    row_count: int

    @property
    def banner(self) -> str:
        return f"\n=== SHEET: {self.name} ({self.row_count} rows) ===\n"


def cell_text(value: Any) -> str:
    """Render a cell value the way a spreadsheet would display it."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        if value.time() == time(0):
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, (date, time)):
        return value.isoformat()
    return str(value)


def render_sheet(name: str, rows: Iterable[Iterable[Any]]) -> Sheet:
    """Render rows of cell values to CSV and count the non-blank ones.

    Blank rows are kept as empty lines so the sheet's layout survives.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    lines: list[str] = []
    row_count = 0

    for row in rows:
        cells = [cell_text(value) for value in row]
        if not any(cell.strip() for cell in cells):
            lines.append("")
            continue
        writer.writerow(cells)
        lines.append(buffer.getvalue().rstrip("\n"))
        buffer.seek(0)
        buffer.truncate()
        row_count += 1

    # Trailing blank rows carry no information
    while lines and not lines[-1]:
        lines.pop()

    return Sheet(name=name, csv_text="\n".join(lines), row_count=row_count)


def _read_ooxml(data: bytes) -> Iterator[Sheet]:
    workbook = openpyxl.load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    try:
        for worksheet in workbook.worksheets:
            yield render_sheet(worksheet.title, worksheet.iter_rows(values_only=True))
    finally:
        workbook.close()


def _read_biff(data: bytes) -> Iterator[Sheet]:
    book = xlrd.open_workbook(file_contents=data)
    for sheet in book.sheets():
        rows = []
        for index in range(sheet.nrows):
            values = []
            for cell in sheet.row(index):
                if cell.ctype == xlrd.XL_CELL_EMPTY:
                    values.append(None)
                elif cell.ctype == xlrd.XL_CELL_DATE:
                    values.append(xlrd.xldate.xldate_as_datetime(cell.value, book.datemode))
                elif cell.ctype == xlrd.XL_CELL_BOOLEAN:
                    values.append(bool(cell.value))
                else:
                    values.append(cell.value)
            rows.append(values)
        yield render_sheet(sheet.name, rows)


def read_sheets(data: bytes) -> list[Sheet]:
    """Parse a workbook into its sheets, in workbook order."""
    if data.startswith(ZIP_MAGIC):
        return list(_read_ooxml(data))
    if data.startswith(OLE2_MAGIC):
        return list(_read_biff(data))
    raise ValueError("not an Excel workbook")


class SpreadsheetExtractor:
    """Extractor for Excel workbooks.

    OOXML workbooks are read with openpyxl, legacy BIFF workbooks with xlrd.
    Every sheet becomes a CSV block preceded by a banner carrying its name
    and non-blank row count.
    """

    kind = FileKind.SPREADSHEET

    def extract(self, raw: RawFile) -> ExtractionResult:
        try:
            sheets = read_sheets(raw.data)
        except Exception as e:
            raise ExtractionError(raw.name, f"Failed to parse Excel file: {e}") from e

        text = "".join(sheet.banner + sheet.csv_text for sheet in sheets)
        row_count = sum(sheet.row_count for sheet in sheets)
        logger.debug(f"{raw.name}: {len(sheets)} sheets, {row_count} rows")

        return ExtractionResult(
            text=text,
            kind=self.kind,
            row_count=row_count,
            sheet_count=len(sheets),
        )
