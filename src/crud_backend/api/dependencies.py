"""
FastAPI dependencies handing repositories to the routes.

The database handle lives on ``app.state`` (set by the lifespan), so each
repository is built around the pool the running application owns.
"""

from fastapi import Depends, Request

from crud_backend.config.settings import ServiceVariant
from crud_backend.database.connection import Database
from crud_backend.repositories.post_repository import PostRepository
from crud_backend.repositories.user_repository import UserRepository, UserWithPostsRepository


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_user_repository(request: Request, database: Database = Depends(get_database)) -> UserRepository:
    """Relation-aware users on the relations service, plain users otherwise"""
    if request.app.state.service_variant == ServiceVariant.RELATIONS:
        return UserWithPostsRepository(database.pool)
    return UserRepository(database.pool)


def get_user_with_posts_repository(database: Database = Depends(get_database)) -> UserWithPostsRepository:
    return UserWithPostsRepository(database.pool)


def get_post_repository(database: Database = Depends(get_database)) -> PostRepository:
    return PostRepository(database.pool)
