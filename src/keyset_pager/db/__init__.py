"""Database access for keyset-pager."""

from .connection import DatabaseManager, db_manager, get_db_pool
from .executor import AsyncpgExecutor, compose_query

__all__ = [
    "DatabaseManager",
    "db_manager",
    "get_db_pool",
    "AsyncpgExecutor",
    "compose_query"
]
