"""
Pytest configuration for the Aria test suite.

Provides:
- FakeAnalysisService: an in-memory AnalysisService that records requests
- Builders for in-memory .xlsx and .docx files
"""
import asyncio
import io
from typing import Any, Optional

import pytest
from docx import Document
from openpyxl import Workbook

from aria.errors import ServiceError
from aria.models import RawFile
from aria.orchestrator import AnalysisOrchestrator
from aria.session import SessionController


class FakeAnalysisService:
    """AnalysisService double.

    Replies with ``reply`` (or raises ``error``). When ``gate`` is set, each
    call waits for it, which lets tests observe the session mid-request.
    """

    def __init__(self, reply: str = "Aria analyzing your sales data... Processing complete."):
        self.reply = reply
        self.payload: Optional[dict[str, Any]] = None
        self.error: Optional[ServiceError] = None
        self.gate: Optional[asyncio.Event] = None
        self.started = asyncio.Event()
        self.requests: list[dict[str, Any]] = []

    async def create_message(self, *, model, max_tokens, system, messages):
        self.requests.append(
            {"model": model, "max_tokens": max_tokens, "system": system, "messages": messages}
        )
        self.started.set()
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        if self.payload is not None:
            return self.payload
        return {"content": [{"type": "text", "text": self.reply}]}


def make_workbook(sheets: dict[str, list[list[Any]]]) -> bytes:
    """Build an .xlsx file in memory, one worksheet per entry, in order."""
    workbook = Workbook()
    workbook.remove(workbook.active)
    for name, rows in sheets.items():
        worksheet = workbook.create_sheet(title=name)
        for row in rows:
            worksheet.append(row)
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def make_docx(paragraphs: list[str], table: Optional[list[list[str]]] = None) -> bytes:
    """Build a .docx file in memory."""
    document = Document()
    for text in paragraphs:
        document.add_paragraph(text)
    if table:
        docx_table = document.add_table(rows=len(table), cols=len(table[0]))
        for r, row in enumerate(table):
            for c, value in enumerate(row):
                docx_table.cell(r, c).text = value
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def text_file(name: str, size: int) -> RawFile:
    """A delimited-text file of exactly ``size`` characters with a header row."""
    header = "customer,invoice,balance,days\n"
    row = "Acme Corp,INV-1001,1200.00,45\n"
    body = (row * (size // len(row) + 1))[: size - len(header)]
    return RawFile(name=name, data=(header + body).encode("utf-8"))


@pytest.fixture
def service():
    return FakeAnalysisService()


@pytest.fixture
def orchestrator(service):
    return AnalysisOrchestrator(service, model="test-model")


@pytest.fixture
def controller(orchestrator):
    return SessionController(orchestrator)
