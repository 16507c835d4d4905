from __future__ import annotations

import base64
import io

import pytest
from pypdf import PdfReader, PdfWriter

BASE_WIDTH = 100


def make_pdf(page_count: int) -> bytes:
    """Build a PDF whose page i is BASE_WIDTH + i points wide."""
    writer = PdfWriter()
    for i in range(page_count):
        writer.add_blank_page(width=BASE_WIDTH + i, height=200)
    output = io.BytesIO()
    writer.write(output)
    return output.getvalue()


def source_indices(pdf_bytes: bytes) -> list[int]:
    """Recover which source pages a derived PDF contains, from their widths."""
    reader = PdfReader(io.BytesIO(pdf_bytes))
    return [round(float(page.mediabox.width)) - BASE_WIDTH for page in reader.pages]


@pytest.fixture
def pdf_factory():
    return make_pdf


@pytest.fixture
def ten_page_pdf() -> bytes:
    return make_pdf(10)


@pytest.fixture
def ten_page_b64(ten_page_pdf) -> str:
    return base64.b64encode(ten_page_pdf).decode("ascii")
