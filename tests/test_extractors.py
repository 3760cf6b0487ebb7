"""
Tests for aria/extractors
Delimited text, spreadsheet and Word extraction plus the registry.
"""
from datetime import datetime
from types import SimpleNamespace

import pytest
import xlrd
from xlrd.sheet import Cell

from aria.errors import ExtractionError
from aria.extractors import extract, get_extractor, register_extractor
from aria.extractors import _EXTRACTORS
from aria.extractors.delimited_extractor import decode_text
from aria.extractors.spreadsheet_extractor import OLE2_MAGIC, cell_text, render_sheet
from aria.models import ExtractionResult, FileKind, RawFile
from aria.protocols import Extractor

from conftest import make_docx, make_workbook


class TestDelimitedText:
    """Test CSV / TXT extraction."""

    def test_text_is_verbatim(self):
        data = "customer,balance\r\nAcme,100\n\nGlobex,250\n"
        result = extract(RawFile("ledger.csv", data.encode()), FileKind.DELIMITED_TEXT)
        assert result.text == data
        assert result.kind is FileKind.DELIMITED_TEXT

    def test_line_count_skips_blank_lines(self):
        data = "a,b\n\n   \n1,2\n3,4\n"
        result = extract(RawFile("t.csv", data.encode()), FileKind.DELIMITED_TEXT)
        assert result.line_count == 3
        assert result.row_count is None
        assert result.counters() == {"line_count": 3}

    def test_utf8_bom_is_stripped(self):
        result = extract(RawFile("t.csv", b"\xef\xbb\xbfname\nAcme"), FileKind.DELIMITED_TEXT)
        assert result.text == "name\nAcme"

    def test_non_utf8_falls_back(self):
        """Test Windows-1252 exports decode instead of failing."""
        assert decode_text("Café,€5".encode("cp1252")) == "Café,€5"

    def test_empty_file(self):
        result = extract(RawFile("empty.txt", b""), FileKind.DELIMITED_TEXT)
        assert result.text == ""
        assert result.line_count == 0


class TestSpreadsheet:
    """Test workbook extraction."""

    def test_two_sheets_counts_and_order(self):
        """Test row and sheet counters and banner order."""
        q1 = [["customer", "balance"]] + [[f"C{i}", i * 100] for i in range(9)]
        q2 = [["customer", "balance"]] + [[f"D{i}", i] for i in range(4)]
        data = make_workbook({"Q1": q1, "Q2": q2})

        result = extract(RawFile("aging.xlsx", data), FileKind.SPREADSHEET)

        assert result.row_count == 15
        assert result.sheet_count == 2
        first = result.text.index("=== SHEET: Q1 (10 rows) ===")
        second = result.text.index("=== SHEET: Q2 (5 rows) ===")
        assert first < second

    def test_sheet_rendered_as_csv(self):
        data = make_workbook({"Open": [["customer", "note"], ["Acme, Inc", 1200.0]]})
        result = extract(RawFile("open.xlsx", data), FileKind.SPREADSHEET)
        assert result.text == '\n=== SHEET: Open (2 rows) ===\ncustomer,note\n"Acme, Inc",1200'

    def test_blank_rows_not_counted(self):
        data = make_workbook({"S": [["a"], [None], ["b"]]})
        result = extract(RawFile("s.xlsx", data), FileKind.SPREADSHEET)
        assert result.row_count == 2

    def test_garbage_raises(self):
        with pytest.raises(ExtractionError) as excinfo:
            extract(RawFile("bad.xlsx", b"this is not a workbook"), FileKind.SPREADSHEET)
        assert excinfo.value.name == "bad.xlsx"
        assert "Failed to parse Excel file" in str(excinfo.value)

    def test_corrupt_zip_raises(self):
        with pytest.raises(ExtractionError):
            extract(RawFile("bad.xlsx", b"PK\x03\x04" + b"\x00" * 64), FileKind.SPREADSHEET)

    def test_corrupt_legacy_workbook_raises(self):
        data = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1" + b"\x00" * 64
        with pytest.raises(ExtractionError):
            extract(RawFile("bad.xls", data), FileKind.SPREADSHEET)

    def test_legacy_workbook_read_with_xlrd(self, monkeypatch):
        """Test BIFF cells (dates, booleans, blanks) are rendered like OOXML ones."""
        text, number, date, boolean = (
            xlrd.XL_CELL_TEXT, xlrd.XL_CELL_NUMBER, xlrd.XL_CELL_DATE, xlrd.XL_CELL_BOOLEAN,
        )
        rows = [
            [Cell(text, "customer"), Cell(text, "due"), Cell(text, "paid")],
            [Cell(text, "Acme"), Cell(date, 45000.0), Cell(boolean, 1)],
            [Cell(xlrd.XL_CELL_EMPTY, ""), Cell(xlrd.XL_CELL_EMPTY, ""), Cell(xlrd.XL_CELL_EMPTY, "")],
            [Cell(text, "Globex"), Cell(number, 250.0), Cell(boolean, 0)],
        ]
        sheet = SimpleNamespace(name="Aging", nrows=len(rows), row=lambda index: rows[index])
        book = SimpleNamespace(datemode=0, sheets=lambda: [sheet])
        opened = []

        def open_workbook(file_contents):
            opened.append(file_contents)
            return book

        monkeypatch.setattr(xlrd, "open_workbook", open_workbook)
        data = OLE2_MAGIC + b"\x00" * 64

        result = extract(RawFile("aging.xls", data), FileKind.SPREADSHEET)

        assert opened == [data]
        assert result.row_count == 3
        assert result.sheet_count == 1
        assert result.text == (
            "\n=== SHEET: Aging (3 rows) ===\n"
            "customer,due,paid\nAcme,2023-03-15,TRUE\n\nGlobex,250,FALSE"
        )


class TestSheetRendering:
    """Test cell formatting and CSV rendering helpers."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, ""),
            (True, "TRUE"),
            (1200.0, "1200"),
            (12.5, "12.5"),
            (datetime(2024, 3, 1), "2024-03-01"),
            (datetime(2024, 3, 1, 9, 30), "2024-03-01 09:30:00"),
            ("Acme", "Acme"),
        ],
    )
    def test_cell_text(self, value, expected):
        assert cell_text(value) == expected

    def test_trailing_blank_rows_dropped(self):
        sheet = render_sheet("S", [["a", "b"], [None, None], [None, None]])
        assert sheet.csv_text == "a,b"
        assert sheet.row_count == 1

    def test_inner_blank_rows_kept_as_empty_lines(self):
        sheet = render_sheet("S", [["a"], [None], ["b"]])
        assert sheet.csv_text == "a\n\nb"


class TestWordDocument:
    """Test .docx extraction."""

    def test_paragraphs_and_tables(self):
        data = make_docx(
            ["Customer aging report", "Acme owes 1200 dollars"],
            table=[["Name", "Balance"], ["Acme", "1200"]],
        )
        result = extract(RawFile("memo.docx", data), FileKind.WORD_DOCUMENT)

        assert result.text == "Customer aging report\nAcme owes 1200 dollars\nName\tBalance\nAcme\t1200"
        assert result.word_count == 11
        assert result.counters() == {"word_count": 11}

    def test_legacy_doc_raises(self):
        """Test binary .doc files are reported as unreadable."""
        data = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1" + b"\x00" * 64
        with pytest.raises(ExtractionError) as excinfo:
            extract(RawFile("memo.doc", data), FileKind.WORD_DOCUMENT)
        assert "Failed to parse Word document" in str(excinfo.value)


class TestRegistry:
    """Test extractor lookup and registration."""

    def test_builtin_extractors_implement_protocol(self):
        for kind in FileKind:
            assert isinstance(get_extractor(kind), Extractor)

    def test_registered_extractor_takes_precedence(self):
        class UpperCaseExtractor:
            kind = FileKind.DELIMITED_TEXT

            def extract(self, raw: RawFile) -> ExtractionResult:
                return ExtractionResult(text=raw.data.decode().upper(), kind=self.kind)

        custom = UpperCaseExtractor()
        register_extractor(custom)
        try:
            assert get_extractor(FileKind.DELIMITED_TEXT) is custom
            assert extract(RawFile("a.txt", b"abc"), FileKind.DELIMITED_TEXT).text == "ABC"
        finally:
            _EXTRACTORS.remove(custom)
