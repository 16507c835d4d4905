from __future__ import annotations

import base64

import logfire

from pdftrim import config

logfire.configure(
    service_name="pdftrim",
    environment=config.ENVIRONMENT,
    send_to_logfire="if-token-present",
)

from fastapi import FastAPI, File, Form, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.concurrency import run_in_threadpool

from pdftrim.errors import (
    InvalidFileTypeError,
    MissingFieldError,
    PayloadTooLargeError,
    PdfTrimError,
    ProcessingError,
)
from pdftrim.models import (
    Base64Request,
    ErrorResponse,
    FirstLastRequest,
    PageCountRequest,
    TrimResponse,
)
from pdftrim.pdf_utils import ExtractionResult, extract_pages
from pdftrim.selector import FirstAndLast, LastN, SelectionRequest, TrimToFirst
from pdftrim.validation import decode_pdf_data, parse_page_count

app = FastAPI(
    title="pdftrim",
    description="Trim PDFs to their first and/or last pages",
)
logfire.instrument_fastapi(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=[
        "Origin", "X-Requested-With", "Content-Type", "Accept", "Authorization",
    ],
)

ENDPOINTS = [
    ("GET", "/health", "Health check"),
    ("POST", "/api/trim-pdf", "Trim PDF to first N pages (JSON with base64)"),
    ("POST", "/trim-pdf", "Trim PDF to first N pages (multipart form)"),
    ("POST", "/api/last-2-pages", "Extract last 2 pages (JSON with base64)"),
    ("POST", "/api/last-n-pages", "Extract last N pages (JSON with base64)"),
    ("POST", "/api/merge-first-last-pages", "Merge first N and last M pages (JSON with base64)"),
]


# ---------------------------------------------------------------------------
# Error rendering
# ---------------------------------------------------------------------------
@app.exception_handler(PdfTrimError)
async def _client_error(request: Request, exc: PdfTrimError):
    logfire.info("Rejected {path}: {error}", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=str(exc)).model_dump(exclude_none=True),
    )


@app.exception_handler(ProcessingError)
async def _processing_error(request: Request, exc: ProcessingError):
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error=exc.message, details=str(exc.cause)).model_dump(),
    )


@app.exception_handler(RequestValidationError)
async def _invalid_body(request: Request, exc: RequestValidationError):
    """Report malformed bodies as 400 with the same shape as other client errors."""
    problems = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        problems.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(error="Invalid request: " + "; ".join(problems)).model_dump(
            exclude_none=True
        ),
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
async def _extract(
    pdf_bytes: bytes, request: SelectionRequest, failure: str
) -> ExtractionResult:
    """Run the blocking PDF work off the event loop.

    Client errors propagate unchanged; anything else becomes a ProcessingError
    carrying the route's failure message.
    """
    try:
        return await run_in_threadpool(extract_pages, pdf_bytes, request)
    except PdfTrimError:
        raise
    except Exception as e:
        logfire.exception("{failure}", failure=failure)
        raise ProcessingError(failure, e) from e


def _pdf_response(result: ExtractionResult, filename: str) -> Response:
    return Response(
        content=result.pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


def _encode(
    result: ExtractionResult,
    return_format: str | None,
    filename: str,
    **extra: int,
) -> Response:
    fmt = (return_format or config.RETURN_FORMAT).strip().lower()
    if fmt != "base64":
        return _pdf_response(result, filename)

    body = TrimResponse(
        pdf_data=base64.b64encode(result.pdf_bytes).decode("ascii"),
        original_size=result.original_size,
        trimmed_size=result.trimmed_size,
        original_page_count=result.selection.page_count,
        returned_pages=result.selection.returned_pages,
        **extra,
    )
    return JSONResponse(body.model_dump(by_alias=True, exclude_none=True))


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return {"status": "Server is running", "port": config.PORT}


# ---------------------------------------------------------------------------
# Page extraction
# ---------------------------------------------------------------------------
@app.post("/api/trim-pdf")
async def trim_pdf_json(body: PageCountRequest):
    """Keep the first N pages of a base64 PDF."""
    pdf_bytes = decode_pdf_data(body.pdf_data)
    pages = parse_page_count(body.pages, "pages", hint="number of pages to keep")

    result = await _extract(pdf_bytes, TrimToFirst(pages), "Failed to process PDF")
    return _encode(result, body.return_format, "trimmed.pdf", pages_trimmed=pages)


@app.post("/trim-pdf")
async def trim_pdf_upload(
    file: UploadFile | None = File(None),
    pages: str | None = Form(None),
):
    """Keep the first N pages of an uploaded PDF. Always answers with the PDF itself."""
    if file is None:
        raise MissingFieldError("file", 'upload a PDF with field name "file"')
    if file.content_type != "application/pdf":
        raise InvalidFileTypeError()
    count = parse_page_count(pages, "pages", hint="number of pages to keep")

    # Declared size lets oversized uploads fail before they are loaded into memory
    if file.size is not None and file.size > config.MAX_UPLOAD_BYTES:
        raise PayloadTooLargeError(config.MAX_UPLOAD_MB)
    pdf_bytes = await file.read()
    if len(pdf_bytes) > config.MAX_UPLOAD_BYTES:
        raise PayloadTooLargeError(config.MAX_UPLOAD_MB)

    result = await _extract(pdf_bytes, TrimToFirst(count), "Failed to process PDF")
    return _pdf_response(result, "trimmed.pdf")


@app.post("/api/last-2-pages")
async def last_two_pages(body: Base64Request):
    """Extract the last 2 pages of a base64 PDF."""
    pdf_bytes = decode_pdf_data(body.pdf_data)

    result = await _extract(pdf_bytes, LastN(2), "Failed to extract last 2 pages")
    return _encode(result, body.return_format, "last-pages.pdf")


@app.post("/api/last-n-pages")
async def last_n_pages(body: PageCountRequest):
    """Extract the last N pages of a base64 PDF."""
    pdf_bytes = decode_pdf_data(body.pdf_data)
    pages = parse_page_count(body.pages, "pages", hint="pages to extract from the end")

    result = await _extract(pdf_bytes, LastN(pages), "Failed to extract pages")
    return _encode(result, body.return_format, "last-pages.pdf")


@app.post("/api/merge-first-last-pages")
async def merge_first_last_pages(body: FirstLastRequest):
    """Combine the first N and last M pages of a base64 PDF into one document."""
    pdf_bytes = decode_pdf_data(body.pdf_data)
    first = parse_page_count(body.first_pages, "firstPages", allow_zero=True)
    last = parse_page_count(body.last_pages, "lastPages", allow_zero=True)
    if first == 0 and last == 0:
        raise MissingFieldError(
            "firstPages or lastPages", "at least one must be greater than 0"
        )

    result = await _extract(pdf_bytes, FirstAndLast(first, last), "Failed to merge pages")
    return _encode(
        result,
        body.return_format,
        "first-last-pages.pdf",
        first_pages_extracted=result.selection.first_count,
        last_pages_extracted=result.selection.last_count,
    )


def main():
    import uvicorn

    logfire.info(
        "pdftrim listening on http://{host}:{port}", host=config.HOST, port=config.PORT
    )
    for method, path, summary in ENDPOINTS:
        logfire.info("  {method} {path} - {summary}", method=method, path=path, summary=summary)

    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    main()
