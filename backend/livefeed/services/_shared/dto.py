# comments in English; reST docstrings strict
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PageMeta:
    """
    Output pagination metadata.

    :param page: Current page (1-based).
    :type page: int
    :param limit: Page size.
    :type limit: int
    :param total: Total rows available.
    :type total: int
    :param has_prev: Whether a previous page exists.
    :type has_prev: bool
    :param has_next: Whether a next page exists.
    :type has_next: bool
    """

    page: int
    limit: int
    total: int
    has_prev: bool
    has_next: bool

    @classmethod
    def of(cls, *, page: int, limit: int, total: int) -> "PageMeta":
        return cls(
            page=page,
            limit=limit,
            total=total,
            has_prev=page > 1,
            has_next=page * limit < total,
        )
