"""Page selection: decide which zero-based page indices go into the output PDF.

Everything here is pure. Callers hand in the source page count and a
selection request and get back the ordered indices to copy.

When a first/last request asks for more pages than the document has, the
last block is kept whole and the first block shrinks to the pages that
precede it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from pdftrim.errors import (
    InvalidNumberError,
    MissingFieldError,
    NoPagesSelectedError,
    OutOfRangeError,
)


@dataclass(frozen=True)
class TrimToFirst:
    """Keep the first ``pages`` pages."""

    pages: int


@dataclass(frozen=True)
class LastN:
    """Keep the last ``pages`` pages."""

    pages: int


@dataclass(frozen=True)
class FirstAndLast:
    """Keep the first ``first`` pages plus the last ``last`` pages."""

    first: int
    last: int


SelectionRequest = Union[TrimToFirst, LastN, FirstAndLast]


@dataclass(frozen=True)
class SelectionResult:
    page_count: int
    indices: tuple[int, ...]
    first_count: int = 0  # effective, after clamping
    last_count: int = 0

    @property
    def returned_pages(self) -> int:
        return len(self.indices)


def _require_count(value: int, field: str, allow_zero: bool = False) -> None:
    minimum = 0 if allow_zero else 1
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise InvalidNumberError(field, allow_zero=allow_zero)


def trim_to_first(page_count: int, n: int) -> SelectionResult:
    _require_count(n, "pages")
    if n > page_count:
        raise OutOfRangeError(
            page_count, n,
            f"Cannot trim to {n} pages. PDF only has {page_count} pages.",
        )
    return SelectionResult(
        page_count=page_count,
        indices=tuple(range(n)),
        first_count=n,
    )


def last_n(page_count: int, n: int) -> SelectionResult:
    _require_count(n, "pages")
    if n > page_count:
        raise OutOfRangeError(
            page_count, n,
            f"PDF only has {page_count} page(s). Cannot extract last {n} pages.",
        )
    return SelectionResult(
        page_count=page_count,
        indices=tuple(range(page_count - n, page_count)),
        last_count=n,
    )


def first_and_last(page_count: int, first: int, last: int) -> SelectionResult:
    """Union of the first ``first`` and last ``last`` pages, in source order.

    Both bounds are checked against ``page_count`` as requested, before any
    overlap adjustment. The reported counts are the effective ones, so
    ``first_count + last_count`` always equals the number of indices.

    Raises:
        InvalidNumberError: If either count is negative or not an integer.
        MissingFieldError: If both counts are zero.
        OutOfRangeError: If either count exceeds ``page_count``.
        NoPagesSelectedError: If nothing is left after overlap resolution.
    """
    _require_count(first, "firstPages", allow_zero=True)
    _require_count(last, "lastPages", allow_zero=True)
    if first == 0 and last == 0:
        raise MissingFieldError(
            "firstPages or lastPages",
            "at least one must be greater than 0",
        )

    if first > page_count:
        raise OutOfRangeError(
            page_count, first,
            f"PDF only has {page_count} page(s). "
            f"Cannot extract {first} pages from the start.",
        )
    if last > page_count:
        raise OutOfRangeError(
            page_count, last,
            f"PDF only has {page_count} page(s). "
            f"Cannot extract {last} pages from the end.",
        )

    effective_first = max(0, min(first, page_count - last))
    effective_last = min(last, page_count)

    indices = list(range(effective_first))
    for i in range(page_count - effective_last, page_count):
        if i >= effective_first:
            indices.append(i)

    if not indices:
        raise NoPagesSelectedError()

    return SelectionResult(
        page_count=page_count,
        indices=tuple(indices),
        first_count=effective_first,
        last_count=effective_last,
    )


def select(page_count: int, request: SelectionRequest) -> SelectionResult:
    """Apply any selection request to a document of ``page_count`` pages."""
    if isinstance(request, TrimToFirst):
        return trim_to_first(page_count, request.pages)
    if isinstance(request, LastN):
        return last_n(page_count, request.pages)
    if isinstance(request, FirstAndLast):
        return first_and_last(page_count, request.first, request.last)
    raise TypeError(f"Unsupported selection request: {request!r}")
