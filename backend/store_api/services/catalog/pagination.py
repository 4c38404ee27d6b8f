"""
Page window calculation for catalog listings.

Page and limit are coerced, never rejected:
- page < 1 or non-numeric -> 1
- limit < 1 or non-numeric -> default page size
- limit above the maximum -> maximum
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from shared.config.constants import Limits


def _to_int(value: Any) -> int | None:
    """Integer value of value, or None when it is not an integer."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def coerce_page(value: Any) -> int:
    page = _to_int(value)
    if page is None or page < 1:
        return 1
    return page


def coerce_limit(
    value: Any,
    default: int = Limits.DEFAULT_PAGE_SIZE,
    max_limit: int = Limits.MAX_PAGE_SIZE,
) -> int:
    limit = _to_int(value)
    if limit is None or limit < 1:
        return default
    return min(limit, max_limit)


@dataclass
class PageRequest:
    """
    Requested page with validation.

    Attributes:
        page: 1-indexed page number
        limit: Items per page (1 to max_limit)
        default_limit: Used when limit is missing or not a positive integer
        max_limit: Maximum allowed limit
    """

    page: Any = 1
    limit: Any = None
    default_limit: int = Limits.DEFAULT_PAGE_SIZE
    max_limit: int = Limits.MAX_PAGE_SIZE

    def __post_init__(self):
        """Normalize values."""
        self.page = coerce_page(self.page)
        self.limit = coerce_limit(self.limit, default=self.default_limit, max_limit=self.max_limit)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def window(self, total_items: int) -> "PageWindow":
        """Page window of this request over total_items results."""
        total = max(0, int(total_items))
        return PageWindow(
            page=self.page,
            limit=self.limit,
            offset=self.offset,
            take=self.limit,
            total_pages=math.ceil(total / self.limit) if total else 0,
        )


@dataclass(frozen=True)
class PageWindow:
    """Slice of a result set: items [offset, offset + take)."""

    page: int
    limit: int
    offset: int
    take: int
    total_pages: int

    def to_dict(self, total: int) -> dict[str, int]:
        """Listing metadata in response field names."""
        return {
            "total": total,
            "page": self.page,
            "limit": self.limit,
            "totalPages": self.total_pages,
        }


def paginate(
    page: Any,
    limit: Any,
    total_items: int,
    default_limit: int = Limits.DEFAULT_PAGE_SIZE,
    max_limit: int = Limits.MAX_PAGE_SIZE,
) -> PageWindow:
    """
    Compute the page window for total_items results.

    total_pages is ceil(total_items / limit), 0 for an empty result.
    """
    request = PageRequest(page=page, limit=limit, default_limit=default_limit, max_limit=max_limit)
    return request.window(total_items)
