"""Customer CRUD and listing routes."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, RedirectResponse

from customer_app.db import CustomerStore
from customer_app.deps import get_store, listing_params
from customer_app.forms import CustomerForm, parse_ids, parse_record_id
from customer_app.listing import ListingRequest, list_customers
from customer_app.utils.errors import NotFoundError
from customer_app.utils.formatting import ResponseFormat
from customer_app.views import render

logger = logging.getLogger(__name__)

router = APIRouter()

INSERT_SQL = "INSERT INTO customers (name, email, company) VALUES (%s, %s, %s)"
SELECT_ONE_SQL = "SELECT * FROM customers WHERE id = %s"
UPDATE_SQL = "UPDATE customers SET name = %s, email = %s, company = %s WHERE id = %s"
DELETE_SQL = "DELETE FROM customers WHERE id = %s"
DELETE_MANY_SQL = "DELETE FROM customers WHERE id = ANY(%s)"


def _back_to_list() -> RedirectResponse:
    return RedirectResponse("/", status_code=303)


@router.get("/")
async def index(
    request: Request,
    listing: ListingRequest = Depends(listing_params),
    fmt: ResponseFormat = Query(ResponseFormat.HTML, alias="format"),
    store: CustomerStore = Depends(get_store),
):
    logger.info("GET / - received (search + pagination + sort)")
    result = await list_customers(store, listing)
    context = result.to_context()
    if fmt == ResponseFormat.JSON:
        return JSONResponse(jsonable_encoder(context))
    return render(request, "index.html", context)


@router.get("/new")
async def new_customer(request: Request):
    return render(request, "new.html")


@router.post("/create")
async def create_customer(
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    company: Optional[str] = Form(None),
    store: CustomerStore = Depends(get_store),
):
    form = CustomerForm.parse(name, email, company)
    await store.execute(INSERT_SQL, form.as_params())
    logger.info(f"Created customer {form.name!r}")
    return _back_to_list()


@router.get("/edit/{customer_id}")
async def edit_customer(
    request: Request,
    customer_id: str,
    store: CustomerStore = Depends(get_store),
):
    record_id = parse_record_id(customer_id)
    row = await store.fetch_one(SELECT_ONE_SQL, (record_id,))
    if not row:
        raise NotFoundError()
    return render(request, "edit.html", {"customer": row})


@router.post("/update/{customer_id}")
async def update_customer(
    customer_id: str,
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    company: Optional[str] = Form(None),
    store: CustomerStore = Depends(get_store),
):
    form = CustomerForm.parse(name, email, company)
    record_id = parse_record_id(customer_id)
    affected = await store.execute(UPDATE_SQL, (*form.as_params(), record_id))
    if not affected:
        logger.warning(f"Update matched no customer with id={record_id}")
    return _back_to_list()


@router.post("/delete/{customer_id}")
async def delete_customer(
    customer_id: str,
    store: CustomerStore = Depends(get_store),
):
    record_id = parse_record_id(customer_id)
    await store.execute(DELETE_SQL, (record_id,))
    return _back_to_list()


@router.post("/delete-multiple")
async def delete_multiple(
    request: Request,
    store: CustomerStore = Depends(get_store),
):
    form = await request.form()
    raw_ids = form.getlist("ids") or form.getlist("ids[]")
    ids = parse_ids(raw_ids)
    if not ids:
        return _back_to_list()
    affected = await store.execute(DELETE_MANY_SQL, (ids,))
    logger.info(f"Bulk delete removed {affected} of {len(ids)} requested customers")
    return _back_to_list()
