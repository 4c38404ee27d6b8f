"""
Property-based testing with Hypothesis for the catalog engine.
"""

import math
from datetime import datetime, timedelta, timezone

from hypothesis import given, settings, strategies as st

from store_api.services.catalog import (
    PageRequest,
    ProductFilters,
    ProductRecord,
    as_multilingual,
    compile_sort,
    query_catalog,
    resolve_multilingual,
)
from shared.config.constants import SortFields

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)

locale_codes = st.sampled_from(["fr", "en", "es", "de"])
texts = st.text(alphabet="abcdefghij", min_size=1, max_size=8)


@st.composite
def product_records(draw):
    count = draw(st.integers(min_value=0, max_value=40))
    records = []
    for i in range(count):
        records.append(ProductRecord(
            id=f"p{i}",
            name=as_multilingual(draw(st.one_of(texts, st.dictionaries(locale_codes, texts, min_size=1)))),
            slug=f"p{i}",
            price=draw(st.floats(min_value=0, max_value=100, allow_nan=False)),
            rating=draw(st.one_of(st.none(), st.floats(min_value=0, max_value=5, allow_nan=False))),
            is_popular=draw(st.booleans()),
            is_featured=draw(st.booleans()),
            popularity_score=draw(st.integers(min_value=0, max_value=100)),
            created_at=BASE_TIME + timedelta(minutes=draw(st.integers(min_value=0, max_value=1000))),
        ))
    return records


sort_tokens = st.builds(
    lambda field, direction: f"{field}_{direction}",
    st.sampled_from(sorted(SortFields.ALL)),
    st.sampled_from(["asc", "desc"]),
)

filter_sets = st.builds(
    ProductFilters,
    is_popular=st.one_of(st.none(), st.booleans()),
    is_featured=st.one_of(st.none(), st.booleans()),
    price_max=st.one_of(st.none(), st.floats(min_value=0, max_value=100, allow_nan=False)),
)


class TestCatalogProperties:
    """Properties that hold for every listing."""

    @given(records=product_records(), filters=filter_sets, token=sort_tokens,
           page=st.integers(min_value=1, max_value=6), limit=st.integers(min_value=1, max_value=15))
    @settings(max_examples=100)
    def test_page_metadata_is_consistent(self, records, filters, token, page, limit):
        """Property: total counts the filtered set and a page never exceeds limit."""
        result = query_catalog(records, filters, compile_sort(token), PageRequest(page=page, limit=limit))

        assert len(result.items) <= limit
        assert result.total_pages == (math.ceil(result.total / limit) if result.total else 0)
        assert result.total <= len(records)

    @given(records=product_records(), filters=filter_sets, token=sort_tokens,
           limit=st.integers(min_value=1, max_value=15))
    @settings(max_examples=100)
    def test_pages_partition_the_filtered_set(self, records, filters, token, limit):
        """Property: walking every page yields each matching product exactly once."""
        sort = compile_sort(token)
        first = query_catalog(records, filters, sort, PageRequest(page=1, limit=limit))

        seen = []
        for page in range(1, first.total_pages + 1):
            seen.extend(r.id for r in query_catalog(records, filters, sort, PageRequest(page=page, limit=limit)).items)

        assert len(seen) == first.total
        assert len(set(seen)) == len(seen)

    @given(records=product_records(), token=sort_tokens)
    @settings(max_examples=100)
    def test_sorting_does_not_filter(self, records, token):
        """Property: sorting is a permutation of the input."""
        result = query_catalog(records, ProductFilters(), compile_sort(token), PageRequest(page=1, limit=100))

        assert sorted(r.id for r in result.items) == sorted(r.id for r in records)

    @given(records=product_records())
    @settings(max_examples=50)
    def test_price_ascending_is_ordered(self, records):
        """Property: price_asc yields non-decreasing prices."""
        result = query_catalog(records, ProductFilters(), compile_sort("price_asc"), PageRequest(page=1, limit=100))
        prices = [r.price for r in result.items]

        assert prices == sorted(prices)

    @given(records=product_records(), direction=st.sampled_from(["asc", "desc"]))
    @settings(max_examples=50)
    def test_unrated_products_are_last(self, records, direction):
        """Property: once an unrated product appears, all following ones are unrated."""
        result = query_catalog(
            records, ProductFilters(), compile_sort(f"rating_{direction}"), PageRequest(page=1, limit=100)
        )
        ratings = [r.rating for r in result.items]
        if None in ratings:
            first_missing = ratings.index(None)
            assert all(r is None for r in ratings[first_missing:])


class TestLocaleProperties:

    @given(value=st.dictionaries(locale_codes, texts, min_size=1), locale=locale_codes)
    def test_resolution_returns_one_of_the_values(self, value, locale):
        """Property: a non-empty map always resolves to one of its texts."""
        assert resolve_multilingual(value, locale) in value.values()

    @given(value=st.dictionaries(locale_codes, texts, min_size=1), locale=locale_codes)
    def test_requested_locale_is_preferred(self, value, locale):
        """Property: an existing translation for the locale is always chosen."""
        if locale in value:
            assert resolve_multilingual(value, locale) == value[locale]
