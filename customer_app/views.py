"""Template rendering."""
from pathlib import Path
from typing import Any
from urllib.parse import urlencode

from fastapi import Request
from fastapi.templating import Jinja2Templates

from customer_app.listing import SORT_ORDERS
from customer_app.utils.errors import RenderError
from customer_app.utils.formatting import format_optional, format_timestamp
from customer_app.utils.pagination import page_numbers

TEMPLATES_DIR = Path(__file__).parent / "templates"
STATIC_DIR = Path(__file__).parent / "static"

PAGE_SIZE_CHOICES = (5, 10, 20, 50)

SORT_LABELS = {
    "id_desc": "Newest first",
    "id_asc": "Oldest first",
    "name_asc": "Name A-Z",
    "name_desc": "Name Z-A",
    "company_asc": "Company A-Z",
    "company_desc": "Company Z-A",
    "created_asc": "Created (oldest)",
    "created_desc": "Created (newest)",
}


def page_url(page: int, page_size: int, q: str = "", sort: str = "") -> str:
    """Link to a listing page that keeps the current search and sort."""
    params = {"page": page, "pageSize": page_size}
    if q:
        params["q"] = q
    if sort:
        params["sort"] = sort
    return "/?" + urlencode(params)


templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.globals.update(
    page_url=page_url,
    page_numbers=page_numbers,
    sort_options=[(key, SORT_LABELS[key]) for key in SORT_ORDERS],
    page_size_choices=PAGE_SIZE_CHOICES,
)
templates.env.filters.update(optional=format_optional, timestamp=format_timestamp)


def render(request: Request, name: str, context: dict[str, Any] = None):
    """Render a template, turning any rendering failure into RenderError."""
    try:
        return templates.TemplateResponse(request, name, context or {})
    except Exception as e:
        raise RenderError(f"Failed to render {name}: {e}") from e
