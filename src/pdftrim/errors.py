"""Client-facing errors raised while validating a request or selecting pages."""
from __future__ import annotations


class PdfTrimError(Exception):
    """Base class for errors reported back to the caller as a 4xx response."""

    status_code = 400


class MissingFieldError(PdfTrimError):
    """A required request field is absent or empty."""

    def __init__(self, field: str, hint: str = ""):
        self.field = field
        message = f"Missing required field: {field}"
        if hint:
            message += f" ({hint})"
        super().__init__(message)


class InvalidNumberError(PdfTrimError):
    """A page-count field is not an integer in the accepted range."""

    def __init__(self, field: str, allow_zero: bool = False):
        self.field = field
        kind = "non-negative integer" if allow_zero else "positive integer"
        super().__init__(f'Please provide a valid "{field}" field ({kind})')


class InvalidDocumentError(PdfTrimError):
    """The payload could not be decoded or opened as a PDF."""


class OutOfRangeError(PdfTrimError):
    """More pages were requested than the document has."""

    def __init__(self, page_count: int, requested: int, message: str):
        self.page_count = page_count
        self.requested = requested
        super().__init__(message)


class NoPagesSelectedError(PdfTrimError):
    """Overlap resolution left nothing to copy."""

    def __init__(self):
        super().__init__(
            "No pages to extract after accounting for overlap and total page count."
        )


class InvalidFileTypeError(PdfTrimError):
    """An uploaded file is not declared as a PDF."""

    def __init__(self):
        super().__init__("Invalid file type. Please upload a PDF file.")


class PayloadTooLargeError(PdfTrimError):
    def __init__(self, limit_mb: int, status_code: int = 400):
        self.status_code = status_code
        super().__init__(f"File too large. Maximum size is {limit_mb}MB.")


class ProcessingError(Exception):
    """An unexpected failure while building the output PDF (rendered as a 500)."""

    def __init__(self, message: str, cause: Exception):
        self.message = message
        self.cause = cause
        super().__init__(f"{message}: {cause}")
