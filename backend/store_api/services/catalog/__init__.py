"""
Catalog query core: locale resolution, filter normalization,
sort compilation, pagination and the query engine.
"""

from store_api.services.catalog.locale import (
    Single,
    Localized,
    MultilingualValue,
    as_multilingual,
    resolve_multilingual,
    localize_document,
)
from store_api.services.catalog.filters import ProductFilters, normalize_filters
from store_api.services.catalog.sorting import (
    SortInstruction,
    build_sort_token,
    compile_sort,
)
from store_api.services.catalog.pagination import PageRequest, PageWindow, paginate
from store_api.services.catalog.records import (
    ProductRecord,
    load_product_snapshot,
    record_from_model,
)
from store_api.services.catalog.engine import CatalogPage, query_catalog

__all__ = [
    "Single",
    "Localized",
    "MultilingualValue",
    "as_multilingual",
    "resolve_multilingual",
    "localize_document",
    "ProductFilters",
    "normalize_filters",
    "SortInstruction",
    "build_sort_token",
    "compile_sort",
    "PageRequest",
    "PageWindow",
    "paginate",
    "ProductRecord",
    "load_product_snapshot",
    "record_from_model",
    "CatalogPage",
    "query_catalog",
]
