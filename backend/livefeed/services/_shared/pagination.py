"""Page-number to offset/limit translation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

DEFAULT_PAGE = 1


@dataclass(frozen=True, slots=True)
class PageWindow:
    """
    Offset/limit window for a 1-based page.

    :param page: Effective page number (``>= 1``).
    :param skip: Rows to skip.
    :param limit: Rows to take.
    """

    page: int
    skip: int
    limit: int


def coerce_page(raw: Any) -> int:
    """
    Read a page number from untrusted input.

    ``None``, non-numeric values and anything below 1 fall back to page 1.
    """
    if raw is None or isinstance(raw, bool):
        return DEFAULT_PAGE
    try:
        page = int(str(raw).strip())
    except ValueError:
        return DEFAULT_PAGE
    return page if page >= 1 else DEFAULT_PAGE


def page_window(page_number: Any, page_size: int) -> PageWindow:
    """
    Compute the window for ``page_number`` at ``page_size`` rows per page.

    >>> page_window(3, 2)
    PageWindow(page=3, skip=4, limit=2)
    >>> page_window(None, 2)
    PageWindow(page=1, skip=0, limit=2)

    :raises ValueError: if ``page_size`` is not positive.
    """
    if page_size < 1:
        raise ValueError("page_size must be >= 1")
    page = coerce_page(page_number)
    return PageWindow(page=page, skip=(page - 1) * page_size, limit=page_size)
