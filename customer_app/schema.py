"""Schema bootstrap for the customers table."""
import logging

logger = logging.getLogger(__name__)

CREATE_CUSTOMERS_SQL = """
CREATE TABLE IF NOT EXISTS customers (
    id SERIAL PRIMARY KEY,
    name TEXT NOT NULL,
    email TEXT,
    company TEXT,
    created_at TIMESTAMPTZ NOT NULL DEFAULT now()
)
""".strip()


async def ensure_schema(store):
    """Create the customers table if it does not exist yet."""
    await store.execute(CREATE_CUSTOMERS_SQL)
    logger.info("Customer schema ready")
