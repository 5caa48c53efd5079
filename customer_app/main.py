"""Customer records app: main entry point."""
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles

from customer_app.config import config
from customer_app.db import CustomerStore
from customer_app.routes.customers import router as customers_router
from customer_app.routes.system import router as system_router
from customer_app.schema import ensure_schema
from customer_app.utils.errors import AppError, StoreError, handle_error
from customer_app.views import STATIC_DIR

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(app: FastAPI):
    """Open the store and bootstrap the schema; close the store on exit."""
    store: CustomerStore = app.state.store
    if store.is_open:
        logger.info("Customer app started (store supplied by caller)")
    elif config.db_host:
        try:
            await store.initialize(config.conninfo())
            await ensure_schema(store)
            logger.info("Customer app started (pool connected, schema ready)")
        except StoreError as e:
            logger.warning(f"Store initialization failed (requests will fail): {e}")
    else:
        logger.info(
            "Customer app started (no CUSTOMERS_DB_HOST set, "
            "database routes will fail until configured)"
        )

    yield

    await store.close()
    logger.info("Customer app stopped")


async def app_error_handler(request: Request, exc: AppError):
    status, message = handle_error(exc)
    return PlainTextResponse(message, status_code=status)


def create_app(store: CustomerStore = None) -> FastAPI:
    app = FastAPI(title="Customers", version="1.0.0", lifespan=app_lifespan)
    app.state.store = store if store is not None else CustomerStore()
    app.add_exception_handler(AppError, app_error_handler)
    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
    app.include_router(system_router)
    app.include_router(customers_router)
    return app


app = create_app()


def main():
    logger.info(f"App running on http://localhost:{config.port}")
    uvicorn.run(app, host=config.host, port=config.port)


if __name__ == "__main__":
    main()
