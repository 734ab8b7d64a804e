"""
Table definitions for both service variants.

Statements are idempotent so they can run on every startup; there is no
migration history.
"""

import logging
from typing import List

import asyncpg

from crud_backend.config.settings import ServiceVariant

logger = logging.getLogger(__name__)

USERS_TABLE = """
    CREATE TABLE IF NOT EXISTS users (
        id BIGSERIAL PRIMARY KEY,
        email TEXT NOT NULL UNIQUE,
        name TEXT
    )
"""

# Deleting a user who still owns posts is rejected rather than cascaded.
POSTS_TABLE = """
    CREATE TABLE IF NOT EXISTS posts (
        id BIGSERIAL PRIMARY KEY,
        title TEXT NOT NULL,
        content TEXT,
        author_id BIGINT NOT NULL REFERENCES users(id) ON DELETE RESTRICT,
        created_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
"""

POSTS_AUTHOR_INDEX = "CREATE INDEX IF NOT EXISTS posts_author_id_idx ON posts (author_id)"
POSTS_CREATED_AT_INDEX = "CREATE INDEX IF NOT EXISTS posts_created_at_idx ON posts (created_at DESC)"


def schema_statements(variant: ServiceVariant) -> List[str]:
    """DDL statements needed by a service variant, in dependency order"""
    statements = [USERS_TABLE]
    if variant == ServiceVariant.RELATIONS:
        statements.extend([POSTS_TABLE, POSTS_AUTHOR_INDEX, POSTS_CREATED_AT_INDEX])
    return statements


async def ensure_schema(pool: asyncpg.Pool, variant: ServiceVariant) -> None:
    """Create missing tables for the given variant"""
    statements = schema_statements(variant)
    async with pool.acquire() as conn:
        async with conn.transaction():
            for statement in statements:
                await conn.execute(statement)
    logger.info(f"Schema ensured for '{variant.value}' service ({len(statements)} statements)")
