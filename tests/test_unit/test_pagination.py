"""Unit tests for page clamping arithmetic."""
import math

import pytest
from customer_app.utils.pagination import compute_page_window, page_numbers


class TestPageWindow:
    @pytest.mark.parametrize("page_size", [1, 2, 3, 5, 7, 10])
    @pytest.mark.parametrize("total", [0, 1, 4, 5, 6, 12, 25, 100])
    def test_window_invariants(self, total, page_size):
        for requested in (1, 2, 3, 10, 1000):
            w = compute_page_window(total, requested, page_size)
            assert w.total_pages == max(1, math.ceil(total / page_size))
            assert 1 <= w.page <= w.total_pages
            assert w.offset == (w.page - 1) * page_size
            assert w.offset >= 0
            if total > 0:
                assert w.offset < total

    def test_requested_page_beyond_data_is_clamped(self):
        w = compute_page_window(total=12, requested_page=10, page_size=5)
        assert w.total_pages == 3
        assert w.page == 3
        assert w.offset == 10

    def test_empty_table(self):
        w = compute_page_window(total=0, requested_page=4, page_size=5)
        assert w.total_pages == 1
        assert w.page == 1
        assert w.offset == 0

    def test_page_below_one_is_raised(self):
        assert compute_page_window(total=12, requested_page=0, page_size=5).page == 1
        assert compute_page_window(total=12, requested_page=-3, page_size=5).page == 1

    def test_zero_page_size_is_floored(self):
        w = compute_page_window(total=3, requested_page=2, page_size=0)
        assert w.page_size == 1
        assert w.total_pages == 3
        assert w.offset == 1

    def test_exact_multiple(self):
        w = compute_page_window(total=10, requested_page=2, page_size=5)
        assert w.total_pages == 2
        assert w.offset == 5


class TestPageNumbers:
    def test_centered(self):
        assert page_numbers(5, 10) == [3, 4, 5, 6, 7]

    def test_clipped_at_edges(self):
        assert page_numbers(1, 10) == [1, 2, 3]
        assert page_numbers(10, 10) == [8, 9, 10]

    def test_single_page(self):
        assert page_numbers(1, 1) == [1]
