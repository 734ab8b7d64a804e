"""
Live PostgreSQL fixtures.

Runs only when TEST_DATABASE_URL points at a disposable database; every
test starts from empty tables.
"""

import pytest
import pytest_asyncio

from crud_backend.config.settings import ServiceVariant
from crud_backend.database.connection import Database
from crud_backend.database.schema import ensure_schema

from pg_helpers import TEST_DATABASE_URL, reset_tables


@pytest_asyncio.fixture
async def database():
    await reset_tables(TEST_DATABASE_URL)
    db = Database(TEST_DATABASE_URL, min_size=1, max_size=2)
    await db.connect()
    await ensure_schema(db.pool, ServiceVariant.RELATIONS)
    yield db
    await db.close()


@pytest.fixture
def dsn():
    return TEST_DATABASE_URL
