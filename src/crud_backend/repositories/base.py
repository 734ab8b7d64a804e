"""
Base repository with the asyncpg plumbing shared by all entities
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import asyncpg

logger = logging.getLogger(__name__)


class RecordNotFoundError(LookupError):
    """A mutating operation targeted an id with no matching row"""

    def __init__(self, resource: str, record_id: Any):
        self.resource = resource
        self.record_id = record_id
        super().__init__(f"{resource} {record_id} not found")


class BaseRepository:
    """Runs single-statement queries against an injected pool.

    Driver errors (constraint violations, bad values) propagate unchanged;
    the only translation is turning an empty UPDATE/DELETE ... RETURNING
    into RecordNotFoundError.
    """

    resource_name = "record"

    def __init__(self, pool: asyncpg.Pool):
        self.pool = pool

    async def _fetch_one(self, query: str, *args) -> Optional[asyncpg.Record]:
        async with self.pool.acquire() as conn:
            return await conn.fetchrow(query, *args)

    async def _fetch_all(self, query: str, *args) -> List[asyncpg.Record]:
        async with self.pool.acquire() as conn:
            return await conn.fetch(query, *args)

    async def _fetch_existing(self, record_id: int, query: str, *args) -> asyncpg.Record:
        row = await self._fetch_one(query, *args)
        if row is None:
            raise RecordNotFoundError(self.resource_name, record_id)
        return row

    @staticmethod
    def _build_assignments(values: Dict[str, Any], start: int = 1) -> Tuple[str, Sequence[Any]]:
        """Build a ``col = $n`` list for an UPDATE.

        Column names come from model field names, never from request keys.
        """
        assignments = []
        params = []
        for offset, (column, value) in enumerate(values.items()):
            assignments.append(f"{column} = ${start + offset}")
            params.append(value)
        return ", ".join(assignments), params
