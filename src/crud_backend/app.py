"""
FastAPI application factory for the users and users+posts services
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from crud_backend import __version__
from crud_backend.api.router import build_api_router
from crud_backend.api.routes import health
from crud_backend.config import settings
from crud_backend.config.settings import ServiceVariant
from crud_backend.database.connection import Database
from crud_backend.database.schema import ensure_schema
from crud_backend.utils.error_handling import setup_error_handling

logger = logging.getLogger(__name__)


def create_app(
    variant: Optional[ServiceVariant] = None,
    database: Optional[Database] = None,
    auto_create_schema: Optional[bool] = None,
) -> FastAPI:
    """Build one of the two services.

    The database handle is opened when the application starts and closed
    when it shuts down; nothing connects at import time.
    """
    variant = variant or settings.SERVICE_VARIANT
    database = database or Database.from_settings()
    if auto_create_schema is None:
        auto_create_schema = settings.AUTO_CREATE_SCHEMA

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager"""
        await database.connect()
        try:
            if auto_create_schema:
                await ensure_schema(database.pool, variant)
            logger.info(f"Service '{variant.value}' started")
            yield
        finally:
            await database.close()

    app = FastAPI(
        title=f"CRUD Backend ({variant.value})",
        description="Users" if variant == ServiceVariant.CRUD else "Users and their posts",
        version=__version__,
        lifespan=lifespan
    )
    app.state.database = database
    app.state.service_variant = variant

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    setup_error_handling(app)

    app.include_router(health.router, tags=["Health"])
    app.include_router(build_api_router(variant), prefix=settings.API_PREFIX)

    return app
