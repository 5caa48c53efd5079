"""Parsing of query-string, path and form values into typed fields.

Listing parameters are lenient: anything unparseable falls back to a
default. Create/update forms are strict about the name.
"""
from typing import Any, Iterable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from customer_app.config import config
from customer_app.listing import DEFAULT_SORT, ListingRequest
from customer_app.utils.errors import NotFoundError, ValidationError


def _parse_int(value: Any, default: int) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default


def parse_listing_request(
    page: Optional[str] = None,
    page_size: Optional[str] = None,
    q: Optional[str] = None,
    sort: Optional[str] = None,
) -> ListingRequest:
    """Build a ListingRequest from raw query-string values."""
    requested_page = max(1, _parse_int(page, 1))
    requested_size = max(1, _parse_int(page_size, config.default_page_size))
    query = q.strip() if isinstance(q, str) else ""
    sort_key = sort.strip() if isinstance(sort, str) and sort.strip() else DEFAULT_SORT
    return ListingRequest(
        page=requested_page,
        page_size=requested_size,
        query=query,
        sort_key=sort_key,
    )


class CustomerForm(BaseModel):
    """Fields submitted by the new/edit forms."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    email: Optional[str] = None
    company: Optional[str] = None

    @field_validator("email", "company", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def as_params(self) -> tuple[str, Optional[str], Optional[str]]:
        return self.name, self.email, self.company

    @classmethod
    def parse(
        cls, name: Optional[str], email: Optional[str], company: Optional[str]
    ) -> "CustomerForm":
        """Validate raw form values, raising the app's ValidationError."""
        if name is None or not name.strip():
            raise ValidationError("Name is required.", field="name")
        return cls(name=name, email=email, company=company)


def parse_ids(values: Union[None, str, int, Iterable[Any]]) -> list[int]:
    """Coerce a scalar or list of raw ids to ints, dropping non-numeric ones."""
    if values is None:
        return []
    if isinstance(values, (str, int)):
        values = [values]
    ids = []
    for raw in values:
        try:
            ids.append(int(str(raw).strip()))
        except ValueError:
            continue
    return ids


def parse_record_id(raw: str) -> int:
    """Parse a path id; an id that cannot exist is reported as not found."""
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise NotFoundError() from None
