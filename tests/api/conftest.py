"""
Application fixtures: both services with mocked repositories.

The clients are created without entering the lifespan, so no database
connection is attempted.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from crud_backend.api.dependencies import (
    get_post_repository,
    get_user_repository,
    get_user_with_posts_repository,
)
from crud_backend.app import create_app
from crud_backend.config.settings import ServiceVariant
from crud_backend.database.connection import Database
from crud_backend.repositories.post_repository import PostRepository
from crud_backend.repositories.user_repository import UserRepository, UserWithPostsRepository


@pytest.fixture
def database():
    db = MagicMock(spec=Database)
    db.ping = AsyncMock(return_value=True)
    return db


@pytest.fixture
def user_repo():
    return AsyncMock(spec=UserRepository)


@pytest.fixture
def user_posts_repo():
    return AsyncMock(spec=UserWithPostsRepository)


@pytest.fixture
def post_repo():
    return AsyncMock(spec=PostRepository)


@pytest.fixture
def crud_client(database, user_repo):
    app = create_app(ServiceVariant.CRUD, database=database, auto_create_schema=False)
    app.dependency_overrides[get_user_repository] = lambda: user_repo
    return TestClient(app)


@pytest.fixture
def relations_client(database, user_posts_repo, post_repo):
    app = create_app(ServiceVariant.RELATIONS, database=database, auto_create_schema=False)
    app.dependency_overrides[get_user_repository] = lambda: user_posts_repo
    app.dependency_overrides[get_user_with_posts_repository] = lambda: user_posts_repo
    app.dependency_overrides[get_post_repository] = lambda: post_repo
    return TestClient(app)
