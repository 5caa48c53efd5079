"""Pagination arithmetic."""
import math
from typing import NamedTuple


class PageWindow(NamedTuple):
    page: int
    page_size: int
    total_pages: int
    offset: int


def compute_page_window(total: int, requested_page: int, page_size: int) -> PageWindow:
    """Clamp a requested page against the number of matching rows.

    total_pages is never below 1, so an empty table still has page 1 with
    offset 0. page_size is floored to 1.
    """
    page_size = max(1, page_size)
    total_pages = max(1, math.ceil(max(0, total) / page_size))
    page = min(max(1, requested_page), total_pages)
    offset = (page - 1) * page_size
    return PageWindow(page=page, page_size=page_size, total_pages=total_pages, offset=offset)


def page_numbers(page: int, total_pages: int, radius: int = 2) -> list[int]:
    """Page numbers to show in a pager, centered on the current page."""
    start = max(1, page - radius)
    end = min(total_pages, page + radius)
    return list(range(start, end + 1))
