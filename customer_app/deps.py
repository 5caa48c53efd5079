"""FastAPI dependencies."""
from typing import Optional

from fastapi import Query, Request

from customer_app.db import CustomerStore
from customer_app.forms import parse_listing_request
from customer_app.listing import ListingRequest


def get_store(request: Request) -> CustomerStore:
    """The store opened by the app lifespan."""
    return request.app.state.store


def listing_params(
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    q: Optional[str] = Query(None),
    sort: Optional[str] = Query(None),
) -> ListingRequest:
    # Raw strings so bad values fall back to defaults instead of a 422.
    return parse_listing_request(page=page, page_size=page_size, q=q, sort=sort)
