"""Shared test fixtures for customer app tests."""
import pytest
from unittest.mock import AsyncMock


class PagedStore:
    """In-memory stand-in for the store's read interface.

    Answers the count query with the number of rows it holds and the page
    query by slicing on the trailing LIMIT/OFFSET parameters. Every call is
    recorded as (method, sql, params).
    """

    def __init__(self, rows):
        self.rows = list(rows)
        self.calls = []

    async def fetch_one(self, sql, params=()):
        self.calls.append(("fetch_one", sql, list(params)))
        return {"count": len(self.rows)}

    async def fetch_all(self, sql, params=()):
        self.calls.append(("fetch_all", sql, list(params)))
        limit, offset = params[-2], params[-1]
        return self.rows[offset:offset + limit]

    async def execute(self, sql, params=()):
        self.calls.append(("execute", sql, list(params)))
        return 0


def make_rows(count):
    return [
        {
            "id": i,
            "name": f"Customer {i}",
            "email": f"c{i}@example.com",
            "company": "Acme" if i % 2 else None,
            "created_at": None,
        }
        for i in range(count, 0, -1)
    ]


@pytest.fixture
def mock_store():
    """Mock store with empty results."""
    mock = AsyncMock()
    mock.fetch_one = AsyncMock(return_value={"count": 0})
    mock.fetch_all = AsyncMock(return_value=[])
    mock.execute = AsyncMock(return_value=1)
    return mock


@pytest.fixture
def paged_store():
    return PagedStore(make_rows(12))


@pytest.fixture
def sample_rows():
    return [
        {"id": 2, "name": "Bob", "email": "bob@example.com", "company": None, "created_at": None},
        {"id": 1, "name": "Alice", "email": "alice@example.com", "company": "Acme", "created_at": None},
    ]


@pytest.fixture
def store_with_rows():
    """Factory for a PagedStore holding `count` customers, newest first."""
    return lambda count: PagedStore(make_rows(count))
