"""
Tests for page window calculation.
"""

from store_api.services.catalog.pagination import PageRequest, coerce_limit, coerce_page, paginate


class TestCoercion:

    def test_page_below_one_becomes_one(self):
        assert coerce_page(0) == 1
        assert coerce_page(-3) == 1
        assert coerce_page("abc") == 1
        assert coerce_page(None) == 1

    def test_page_strings_are_parsed(self):
        assert coerce_page("3") == 3

    def test_limit_defaults_and_caps(self):
        assert coerce_limit(None) == 20
        assert coerce_limit("0") == 20
        assert coerce_limit("x") == 20
        assert coerce_limit(500) == 100
        assert coerce_limit("15") == 15

    def test_limit_with_custom_bounds(self):
        assert coerce_limit(None, default=10) == 10
        assert coerce_limit(80, max_limit=50) == 50

    def test_booleans_are_not_numbers(self):
        assert coerce_page(True) == 1


class TestPaginate:

    def test_window_for_first_page(self):
        window = paginate(1, 10, 25)
        assert (window.page, window.limit, window.offset, window.take) == (1, 10, 0, 10)
        assert window.total_pages == 3

    def test_window_for_later_page(self):
        window = paginate(3, 10, 25)
        assert window.offset == 20
        assert window.total_pages == 3

    def test_empty_result_has_no_pages(self):
        assert paginate(1, 10, 0).total_pages == 0

    def test_page_past_the_end_is_kept(self):
        window = paginate(9, 10, 25)
        assert window.page == 9
        assert window.offset == 80

    def test_to_dict_uses_response_names(self):
        assert paginate(2, 10, 12).to_dict(12) == {
            "total": 12,
            "page": 2,
            "limit": 10,
            "totalPages": 2,
        }

    def test_page_request_offset(self):
        request = PageRequest(page="2", limit="5")
        assert request.offset == 5

    def test_page_request_uses_its_own_bounds(self):
        request = PageRequest(page=1, limit="0", default_limit=5, max_limit=150)
        assert request.limit == 5
        assert PageRequest(limit=140, max_limit=150).limit == 140

    def test_page_request_window(self):
        window = PageRequest(page=2, limit=140, max_limit=150).window(300)
        assert (window.offset, window.take, window.total_pages) == (140, 140, 3)

    def test_paginate_with_custom_bounds(self):
        assert paginate(1, None, 10, default_limit=4).total_pages == 3
        assert paginate(1, 500, 10, max_limit=200).limit == 200
