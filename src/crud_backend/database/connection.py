"""
Database connection and pool management
"""

import asyncpg
import logging
from typing import Optional

from crud_backend.config import settings

logger = logging.getLogger(__name__)


class DatabaseNotConnectedError(RuntimeError):
    """Raised when the pool is used before connect() or after close()"""


class Database:
    """Process-wide handle owning one asyncpg connection pool.

    Built once at startup and handed to the repositories; the application
    lifespan opens it with ``connect()`` and releases it with ``close()``.
    """

    def __init__(
        self,
        dsn: Optional[str],
        min_size: int = 2,
        max_size: int = 10,
        command_timeout: float = 60,
    ):
        self.dsn = dsn
        self.min_size = min_size
        self.max_size = max_size
        self.command_timeout = command_timeout
        self._pool: Optional[asyncpg.Pool] = None

    @classmethod
    def from_settings(cls) -> "Database":
        """Build a handle from environment configuration"""
        return cls(
            settings.DATABASE_URL,
            min_size=settings.DB_POOL_MIN_SIZE,
            max_size=settings.DB_POOL_MAX_SIZE,
            command_timeout=settings.DB_COMMAND_TIMEOUT,
        )

    @property
    def is_connected(self) -> bool:
        return self._pool is not None

    @property
    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise DatabaseNotConnectedError("Database pool is not initialized")
        return self._pool

    async def connect(self) -> None:
        """Initialize database connection pool"""
        if not self.dsn:
            raise ValueError("DATABASE_URL environment variable is required")
        if self._pool is not None:
            return

        self._pool = await asyncpg.create_pool(
            self.dsn,
            min_size=self.min_size,
            max_size=self.max_size,
            command_timeout=self.command_timeout,
            statement_cache_size=0  # pgbouncer compatibility
        )

        # Test connection
        async with self._pool.acquire() as conn:
            await conn.fetchval("SELECT 1")

        logger.info(f"Database initialized successfully (pool size {self.min_size}-{self.max_size})")

    async def close(self) -> None:
        """Close database connection pool"""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
        logger.info("Database connections closed")

    async def ping(self) -> bool:
        async with self.pool.acquire() as conn:
            return await conn.fetchval("SELECT 1") == 1
