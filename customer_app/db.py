"""Async PostgreSQL store for customer records.

Exposes the three-call interface the rest of the app depends on:
execute() for writes, fetch_one() and fetch_all() for reads. Reads run in a
READ ONLY transaction and are refused up front if they are not SELECTs.
Driver failures surface as StoreError; nothing is retried.
"""
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Optional, Sequence

import psycopg
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from customer_app.config import config
from customer_app.governance.sql_guard import SQLGovernor, read_guard, write_guard
from customer_app.utils.errors import StoreError

logger = logging.getLogger(__name__)


class CustomerStore:
    """Manages the async connection pool and runs parameterized SQL.

    SQL templates use psycopg positional placeholders (%s); parameters are
    always bound by the driver, never formatted into the SQL text.
    """

    def __init__(self):
        self._pool: Optional[AsyncConnectionPool] = None

    @property
    def is_open(self) -> bool:
        return self._pool is not None

    async def initialize(self, conninfo: str):
        """Open the connection pool."""
        self._pool = AsyncConnectionPool(
            conninfo=conninfo,
            min_size=config.pool_min_size,
            max_size=config.pool_max_size,
            open=False,
            kwargs={"row_factory": dict_row, "autocommit": True},
            check=AsyncConnectionPool.check_connection,
        )
        await self._pool.open()
        logger.info("Customer store connection pool initialized")

    async def close(self):
        if self._pool:
            await self._pool.close()
            self._pool = None
            logger.info("Customer store connection pool closed")

    @asynccontextmanager
    async def connection(self) -> AsyncGenerator[psycopg.AsyncConnection, None]:
        if not self._pool:
            raise StoreError("Store not initialized. Call initialize() first.")
        async with self._pool.connection() as conn:
            yield conn

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run a single write statement and return the affected row count."""
        self._guard(write_guard, sql)
        try:
            async with self.connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(sql, params)
                    return cur.rowcount
        except psycopg.Error as e:
            raise StoreError(f"Write failed: {e}") from e

    async def fetch_one(
        self, sql: str, params: Sequence[Any] = ()
    ) -> Optional[dict[str, Any]]:
        """Run a read and return the first row, or None."""
        rows = await self._read(sql, params, limit=1)
        return rows[0] if rows else None

    async def fetch_all(
        self, sql: str, params: Sequence[Any] = ()
    ) -> list[dict[str, Any]]:
        """Run a read and return every row."""
        return await self._read(sql, params)

    async def _read(
        self, sql: str, params: Sequence[Any], limit: Optional[int] = None
    ) -> list[dict[str, Any]]:
        self._guard(read_guard, sql)
        try:
            async with self.connection() as conn:
                async with conn.transaction():
                    await conn.execute("SET TRANSACTION READ ONLY")
                    async with conn.cursor() as cur:
                        await cur.execute(sql, params)
                        if limit is None:
                            rows = await cur.fetchall()
                        else:
                            rows = await cur.fetchmany(limit)
                        return [dict(row) for row in rows]
        except psycopg.Error as e:
            raise StoreError(f"Read failed: {e}") from e

    @staticmethod
    def _guard(governor: SQLGovernor, sql: str):
        result = governor.check(sql)
        if not result.allowed:
            kind = result.statement_type.value if result.statement_type else "unknown"
            logger.error(f"Refused {kind} statement: {sql[:100]}")
            raise StoreError(result.error_message)
