"""Typed page/limit parameters with explicit defaulting and clamping."""

from dataclasses import dataclass
from math import ceil

from app.configs import settings


def coerce_positive_int(value: object, default: int) -> int:
    """
    Coerce a loosely typed value into a positive integer.

    Args:
        value: Raw value, usually a query string such as ``"2"``
        default: Value used when ``value`` is missing, non-numeric or below 1

    Returns:
        int: The parsed positive integer or ``default``
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        number = int(str(value).strip())
    except ValueError:
        return default
    return number if number >= 1 else default


@dataclass(frozen=True)
class PageParams:
    """
    One-based page number and page size.

    Attributes
    ----------
    page : int
        Requested page, starting at 1.
    limit : int
        Page size, never above ``settings.MAX_PAGE_LIMIT``.
    """

    page: int = 1
    limit: int = 10

    @classmethod
    def from_raw(
        cls,
        page: object = None,
        limit: object = None,
        *,
        default_limit: int | None = None,
        max_limit: int | None = None,
    ) -> "PageParams":
        """
        Build page parameters from raw query values.

        Args:
            page: Raw page value
            limit: Raw limit value
            default_limit: Limit used when ``limit`` is missing or invalid
            max_limit: Upper bound for ``limit``

        Returns:
            PageParams: Normalised parameters
        """
        default_limit = default_limit or settings.DEFAULT_PAGE_LIMIT
        max_limit = max_limit or settings.MAX_PAGE_LIMIT
        return cls(
            page=coerce_positive_int(page, 1),
            limit=min(coerce_positive_int(limit, default_limit), max_limit),
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def total_pages(self, total: int) -> int:
        return ceil(total / self.limit) if total > 0 else 0

    def has_next(self, total: int) -> bool:
        return self.page < self.total_pages(total)

    @property
    def has_prev(self) -> bool:
        return self.page > 1
