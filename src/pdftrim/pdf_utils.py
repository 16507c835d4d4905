from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Iterable

import logfire
from pypdf import PdfReader, PdfWriter
from pypdf.errors import PyPdfError

from pdftrim.errors import InvalidDocumentError
from pdftrim.selector import SelectionRequest, SelectionResult, select


@dataclass(frozen=True)
class ExtractionResult:
    pdf_bytes: bytes
    selection: SelectionResult
    original_size: int

    @property
    def trimmed_size(self) -> int:
        return len(self.pdf_bytes)


def open_pdf(pdf_bytes: bytes) -> PdfReader:
    """Open PDF bytes, raising InvalidDocumentError if they are not a readable PDF."""
    try:
        reader = PdfReader(io.BytesIO(pdf_bytes))
        # Page tree is parsed lazily; force it so broken files fail here
        len(reader.pages)
    except PyPdfError as e:
        raise InvalidDocumentError(f"Could not read PDF: {e}") from e
    return reader


def copy_pages(reader: PdfReader, indices: Iterable[int]) -> bytes:
    """Copy pages at the given zero-based indices, in order, into new PDF bytes."""
    writer = PdfWriter()
    for i in indices:
        writer.add_page(reader.pages[i])

    output = io.BytesIO()
    writer.write(output)
    return output.getvalue()


def extract_pages(pdf_bytes: bytes, request: SelectionRequest) -> ExtractionResult:
    """Open a PDF, select pages for ``request`` and return the new document."""
    with logfire.span(
        "extract pages {request}", request=repr(request), input_bytes=len(pdf_bytes)
    ) as span:
        reader = open_pdf(pdf_bytes)
        selection = select(len(reader.pages), request)
        span.set_attribute("page_count", selection.page_count)
        span.set_attribute("returned_pages", selection.returned_pages)

        new_bytes = copy_pages(reader, selection.indices)

    logfire.info(
        "Extracted {returned} of {total} pages",
        returned=selection.returned_pages,
        total=selection.page_count,
    )
    return ExtractionResult(
        pdf_bytes=new_bytes,
        selection=selection,
        original_size=len(pdf_bytes),
    )
