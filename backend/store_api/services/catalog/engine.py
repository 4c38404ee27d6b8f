"""
Catalog Query Engine.

query_catalog() runs a listing over an immutable snapshot of product
records, always in this order:

1. filter (logical AND of every present filter)
2. total = size of the filtered set
3. sort (stable; records without a value for the sort field go last)
4. paginate [offset, offset + take)

The engine is pure: no I/O and no shared state.

Usage:
    from store_api.services.catalog import (
        PageRequest, compile_sort, normalize_filters, query_catalog,
    )

    page = query_catalog(
        snapshot,
        normalize_filters(params),
        compile_sort("price_asc"),
        PageRequest(page=1, limit=10),
        locale="en",
    )
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from shared.config.constants import ErrorMessages, Locales, SortDirection, SortFields
from shared.config.logging import catalog_logger as logger
from shared.utils.exceptions import ValidationError
from store_api.services.catalog.filters import ProductFilters
from store_api.services.catalog.pagination import PageRequest, PageWindow
from store_api.services.catalog.records import SORT_KEYS, ProductRecord
from store_api.services.catalog.sorting import SortInstruction


@dataclass(frozen=True)
class CatalogPage:
    """One page of a listing plus metadata about the whole filtered set."""

    items: tuple[ProductRecord, ...]
    total: int
    window: PageWindow
    locale: str

    @property
    def page(self) -> int:
        return self.window.page

    @property
    def limit(self) -> int:
        return self.window.limit

    @property
    def total_pages(self) -> int:
        return self.window.total_pages


def _matches(record: ProductRecord, filters: ProductFilters) -> bool:
    if filters.category_id is not None and record.category_id != filters.category_id:
        return False
    if filters.is_available is not None and record.is_available != filters.is_available:
        return False
    if filters.price_min is not None and record.price < filters.price_min:
        return False
    if filters.price_max is not None and record.price > filters.price_max:
        return False
    if filters.rating_min is not None:
        if record.rating is None or record.rating < filters.rating_min:
            return False
    if filters.is_featured is not None and record.is_featured != filters.is_featured:
        return False
    if filters.is_popular is not None and record.is_popular != filters.is_popular:
        return False
    if filters.is_trending is not None and record.is_trending != filters.is_trending:
        return False
    if filters.search and not record.matches_search(filters.search):
        return False
    return True


def _sorted(
    records: list[ProductRecord], sort: SortInstruction, locale: str
) -> list[ProductRecord]:
    key = SORT_KEYS[sort.field]
    present = [r for r in records if key(r, locale) is not None]
    missing = [r for r in records if key(r, locale) is None]
    # sorted() is stable for reverse=True too, so ties keep input order
    ordered = sorted(present, key=lambda r: key(r, locale), reverse=sort.descending)
    return ordered + missing


def _check_inputs(filters: Any, sort: Any) -> None:
    if not isinstance(filters, ProductFilters):
        raise ValidationError(
            ErrorMessages.INVALID_PARAMETERS,
            details=[{"field": "filters", "message": "filters must be normalized first"}],
        )
    if (
        not isinstance(sort, SortInstruction)
        or sort.field not in SortFields.ALL
        or sort.direction not in SortDirection.ALL
    ):
        raise ValidationError(
            ErrorMessages.INVALID_PARAMETERS,
            details=[{"field": "sort", "message": "sort must be compiled first"}],
        )


def query_catalog(
    products: Iterable[ProductRecord],
    filters: ProductFilters,
    sort: SortInstruction,
    page_request: PageRequest | None = None,
    locale: str | None = None,
) -> CatalogPage:
    """
    Filter, count, sort and paginate products.

    Raises:
        ValidationError: If filters/sort were not produced by
            normalize_filters()/compile_sort().
    """
    _check_inputs(filters, sort)
    page_request = page_request or PageRequest()
    locale = locale or Locales.DEFAULT

    matched = [p for p in products if _matches(p, filters)]
    total = len(matched)

    ordered = _sorted(matched, sort, locale)

    window = page_request.window(total)
    items = tuple(ordered[window.offset:window.offset + window.take])

    logger.debug(
        "Catalog query",
        total=total,
        returned=len(items),
        sort=sort.token,
        page=window.page,
        limit=window.limit,
    )
    return CatalogPage(items=items, total=total, window=window, locale=locale)
