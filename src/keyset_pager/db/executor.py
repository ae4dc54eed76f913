"""PostgreSQL query executor for keyset pagination."""

import logging
from typing import Any, List, Optional, Sequence, Tuple

import asyncpg
from asyncpg import Pool

from ..pagination.condition import PARAMSTYLES, Condition
from ..pagination.query import BaseQuery
from ..pagination.sort_keys import SortKey, build_order_clause
from .connection import get_db_pool


logger = logging.getLogger(__name__)


def compose_query(
    base_query: BaseQuery,
    sort_keys: Sequence[SortKey],
    condition: Optional[Condition],
    limit: Optional[int],
    paramstyle: str = "dollar"
) -> Tuple[str, List[Any]]:
    """Wrap a base query with the keyset predicate, ordering and limit.

    Args:
        base_query: Query to paginate, using ``paramstyle`` parameters
        sort_keys: Sort keys, most significant first
        condition: Predicate numbered after the base query's parameters
        limit: Row limit, or None for all rows
        paramstyle: Placeholder style used for the limit parameter

    Returns:
        Tuple of (query, parameters)
    """
    params = list(base_query.params)
    parts = [f"SELECT * FROM ({base_query.sql}) AS page_base"]

    if condition is not None:
        parts.append(f"WHERE {condition.sql}")
        params.extend(condition.values)

    order_clause = build_order_clause(sort_keys)
    if order_clause:
        parts.append(order_clause)

    if limit is not None:
        params.append(limit)
        parts.append(f"LIMIT {PARAMSTYLES[paramstyle](len(params))}")

    return "\n".join(parts), params


class AsyncpgExecutor:
    """Runs paginated queries on an asyncpg pool."""

    paramstyle = "dollar"

    def __init__(self, pool: Optional[Pool] = None):
        self._pool = pool

    async def fetch(
        self,
        base_query: BaseQuery,
        sort_keys: Sequence[SortKey],
        condition: Optional[Condition],
        limit: Optional[int]
    ) -> List[asyncpg.Record]:
        """Execute the composed query and return its rows.

        Raises:
            asyncpg.PostgresError: Propagated unchanged
        """
        pool = self._pool or await get_db_pool()
        query, params = compose_query(base_query, sort_keys, condition, limit, self.paramstyle)

        try:
            async with pool.acquire() as conn:
                rows = await conn.fetch(query, *params)
        except asyncpg.PostgresError as e:
            logger.error(f"Database error executing paginated query: {e}")
            raise

        logger.debug(f"Paginated query returned {len(rows)} row(s)")
        return rows
