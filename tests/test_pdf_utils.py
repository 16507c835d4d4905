import io

import pytest
from pypdf import PdfReader

from conftest import make_pdf, source_indices
from pdftrim.errors import InvalidDocumentError, OutOfRangeError
from pdftrim.pdf_utils import copy_pages, extract_pages, open_pdf
from pdftrim.selector import FirstAndLast, LastN, TrimToFirst


def test_open_pdf_counts_pages():
    assert len(open_pdf(make_pdf(4)).pages) == 4


@pytest.mark.parametrize("payload", [b"", b"this is not a pdf"])
def test_open_pdf_rejects_garbage(payload):
    with pytest.raises(InvalidDocumentError):
        open_pdf(payload)


def test_copy_pages_keeps_requested_order():
    reader = open_pdf(make_pdf(5))
    assert source_indices(copy_pages(reader, [4, 0, 2])) == [4, 0, 2]


def test_extract_first_pages():
    pdf = make_pdf(6)
    result = extract_pages(pdf, TrimToFirst(3))
    assert source_indices(result.pdf_bytes) == [0, 1, 2]
    assert result.original_size == len(pdf)
    assert result.trimmed_size == len(result.pdf_bytes)
    assert result.selection.page_count == 6


def test_extract_last_pages():
    result = extract_pages(make_pdf(6), LastN(2))
    assert source_indices(result.pdf_bytes) == [4, 5]


def test_extract_first_and_last():
    result = extract_pages(make_pdf(10), FirstAndLast(2, 3))
    assert source_indices(result.pdf_bytes) == [0, 1, 7, 8, 9]
    assert len(PdfReader(io.BytesIO(result.pdf_bytes)).pages) == 5


def test_extract_out_of_range():
    with pytest.raises(OutOfRangeError):
        extract_pages(make_pdf(2), TrimToFirst(3))
