"""
Router composition root: mounts per-entity routers under their path prefixes
"""

from fastapi import APIRouter

from crud_backend.api.routes import posts
from crud_backend.api.routes.users import build_users_router
from crud_backend.config.settings import ServiceVariant


def build_api_router(variant: ServiceVariant) -> APIRouter:
    router = APIRouter()
    with_posts = variant == ServiceVariant.RELATIONS

    router.include_router(build_users_router(include_posts=with_posts), prefix="/users", tags=["Users"])
    if with_posts:
        router.include_router(posts.router, prefix="/posts", tags=["Posts"])

    return router
