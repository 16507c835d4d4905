"""Turn raw request fields into page counts and PDF bytes."""
from __future__ import annotations

import base64
import binascii
import re

from pdftrim import config
from pdftrim.errors import (
    InvalidDocumentError,
    InvalidNumberError,
    MissingFieldError,
    PayloadTooLargeError,
)

_DATA_URL_PREFIX = re.compile(r"^data:application/pdf;base64,")
_INTEGER = re.compile(r"^[+-]?\d+$")


def parse_page_count(
    value: int | str | None,
    field: str,
    allow_zero: bool = False,
    hint: str = "",
) -> int:
    """Parse a page-count field that may arrive as an int or a form string.

    Raises:
        MissingFieldError: If the field is absent or blank.
        InvalidNumberError: If it is not an integer, or is below the minimum.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise MissingFieldError(field, hint)
    if isinstance(value, bool):
        raise InvalidNumberError(field, allow_zero=allow_zero)
    if isinstance(value, str):
        text = value.strip()
        if not _INTEGER.match(text):
            raise InvalidNumberError(field, allow_zero=allow_zero)
        try:
            value = int(text)
        except ValueError:
            # longer than the interpreter's int-conversion digit limit
            raise InvalidNumberError(field, allow_zero=allow_zero) from None
    if value < (0 if allow_zero else 1):
        raise InvalidNumberError(field, allow_zero=allow_zero)
    return value


def decode_pdf_data(value: str | None) -> bytes:
    """Decode a base64 PDF payload, with or without a data-URL prefix."""
    if not value:
        raise MissingFieldError("pdfData", "base64 encoded PDF content")
    if len(value) > config.MAX_JSON_BYTES:
        raise PayloadTooLargeError(config.MAX_JSON_MB, status_code=413)

    encoded = _DATA_URL_PREFIX.sub("", value, count=1)
    try:
        return base64.b64decode(encoded)
    except (binascii.Error, ValueError):
        raise InvalidDocumentError(
            "Invalid base64 PDF data. Please ensure the PDF is properly encoded."
        ) from None
