"""Listing query builder: search, sort and paginate customer records.

Two dependent reads per request. The count runs first because the clamped
page, and therefore LIMIT/OFFSET, depends on the total.
"""
import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from customer_app.utils.errors import CountQueryError, SelectQueryError, StoreError
from customer_app.utils.pagination import compute_page_window

logger = logging.getLogger(__name__)

DEFAULT_SORT = "id_desc"
DEFAULT_PAGE_SIZE = 5

# The only source of ORDER BY text. Text columns compare case-insensitively;
# missing companies sort as the smallest value; id breaks ties so paging is
# stable across duplicate names.
SORT_ORDERS: dict[str, str] = {
    "id_desc": "id DESC",
    "id_asc": "id ASC",
    "name_asc": "lower(name) ASC, id ASC",
    "name_desc": "lower(name) DESC, id DESC",
    "company_asc": "lower(company) ASC NULLS FIRST, id ASC",
    "company_desc": "lower(company) DESC NULLS LAST, id DESC",
    "created_asc": "created_at ASC, id ASC",
    "created_desc": "created_at DESC, id DESC",
}

SEARCH_COLUMNS = ("name", "company", "email")


class ListingRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1)
    query: str = ""
    sort_key: str = DEFAULT_SORT


class ListingResult(BaseModel):
    rows: list[dict[str, Any]]
    page: int
    page_size: int
    total_pages: int
    total: int
    query: str
    sort_key: str

    def to_context(self) -> dict[str, Any]:
        """Template/JSON context using the listing page's parameter names."""
        return {
            "customers": self.rows,
            "page": self.page,
            "pageSize": self.page_size,
            "totalPages": self.total_pages,
            "total": self.total,
            "q": self.query,
            "sort": self.sort_key,
        }


def resolve_sort(sort_key: str) -> str:
    """Map a sort key to its ORDER BY expression, defaulting to newest first."""
    return SORT_ORDERS.get(sort_key, SORT_ORDERS[DEFAULT_SORT])


def build_filter(query: str) -> tuple[str, list[str]]:
    """Return a WHERE clause and its parameters for a search string.

    Blank queries produce no clause at all.
    """
    query = (query or "").strip()
    if not query:
        return "", []
    like = f"%{query}%"
    clause = " WHERE " + " OR ".join(f"{col} ILIKE %s" for col in SEARCH_COLUMNS)
    return clause, [like] * len(SEARCH_COLUMNS)


def build_count_sql(where: str) -> str:
    return f"SELECT COUNT(*) AS count FROM customers{where}"


def build_select_sql(where: str, order_by: str) -> str:
    return f"SELECT * FROM customers{where} ORDER BY {order_by} LIMIT %s OFFSET %s"


async def list_customers(store, request: ListingRequest) -> ListingResult:
    """Run the count and select phases for one listing request.

    Args:
        store: object exposing async fetch_one(sql, params) and
            fetch_all(sql, params).
        request: parsed listing parameters.

    Raises:
        CountQueryError: the count query failed.
        SelectQueryError: the page query failed.
    """
    where, params = build_filter(request.query)
    order_by = resolve_sort(request.sort_key)

    try:
        count_row = await store.fetch_one(build_count_sql(where), list(params))
    except StoreError as e:
        raise CountQueryError(f"Count query failed: {e}") from e
    total = int(count_row["count"]) if count_row else 0

    window = compute_page_window(total, request.page, request.page_size)
    logger.info(
        f'q="{request.query}", sort="{request.sort_key}", total={total}, '
        f"page={window.page}/{window.total_pages}, pageSize={window.page_size}"
    )

    try:
        rows = await store.fetch_all(
            build_select_sql(where, order_by),
            [*params, window.page_size, window.offset],
        )
    except StoreError as e:
        raise SelectQueryError(f"Select query failed: {e}") from e

    return ListingResult(
        rows=rows or [],
        page=window.page,
        page_size=window.page_size,
        total_pages=window.total_pages,
        total=total,
        query=request.query,
        sort_key=request.sort_key,
    )
