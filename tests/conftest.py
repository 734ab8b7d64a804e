"""
Shared fixtures: a mocked asyncpg pool and realistic test data
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict
from unittest.mock import AsyncMock, MagicMock

import pytest
from faker import Faker

from mock_db import make_pool


@pytest.fixture
def fake() -> Faker:
    return Faker()


@pytest.fixture
def conn() -> AsyncMock:
    """Connection double; set ``fetchrow``/``fetch`` return values per test"""
    return AsyncMock()


@pytest.fixture
def pool(conn) -> MagicMock:
    return make_pool(conn)


@pytest.fixture
def user_row(fake) -> Dict[str, Any]:
    return {"id": 1, "email": fake.email(), "name": fake.name()}


@pytest.fixture
def post_row(fake) -> Dict[str, Any]:
    return {
        "id": 1,
        "title": fake.sentence(nb_words=4),
        "content": fake.paragraph(),
        "author_id": 1,
        "created_at": datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
    }


@pytest.fixture
def post_rows(fake):
    """Three rows for author 1, already newest first"""
    base = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    return [
        {
            "id": post_id,
            "title": fake.sentence(nb_words=3),
            "content": fake.paragraph(),
            "author_id": 1,
            "created_at": base + timedelta(minutes=post_id),
        }
        for post_id in (3, 2, 1)
    ]
