from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class Base64Request(_CamelModel):
    """Body shared by every JSON endpoint."""

    pdf_data: str | None = Field(default=None, alias="pdfData")
    return_format: str | None = Field(default=None, alias="returnFormat")


class PageCountRequest(Base64Request):
    """Request body for POST /api/trim-pdf and POST /api/last-n-pages."""

    # Strings are accepted because automation tools often send "3"
    pages: int | str | None = None


class FirstLastRequest(Base64Request):
    """Request body for POST /api/merge-first-last-pages."""

    first_pages: int | str | None = Field(default=None, alias="firstPages")
    last_pages: int | str | None = Field(default=None, alias="lastPages")


class TrimResponse(_CamelModel):
    """JSON response carrying the derived PDF as base64."""

    success: bool = True
    pdf_data: str = Field(alias="pdfData")
    original_size: int = Field(alias="originalSize")
    trimmed_size: int = Field(alias="trimmedSize")
    original_page_count: int = Field(alias="originalPageCount")
    returned_pages: int = Field(alias="returnedPages")
    pages_trimmed: int | None = Field(default=None, alias="pagesTrimmed")
    first_pages_extracted: int | None = Field(default=None, alias="firstPagesExtracted")
    last_pages_extracted: int | None = Field(default=None, alias="lastPagesExtracted")


class ErrorResponse(_CamelModel):
    error: str
    details: str | None = None
