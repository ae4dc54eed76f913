"""Keyset (seek-based) pagination for SQL queries."""

from .config import Settings, get_settings, configure_logging
from .errors import (
    PaginationError,
    InvalidTokenError,
    TokenDecodeError,
    TokenArityMismatchError,
    UnsatisfiableConstructionError
)
from .pagination import (
    Direction,
    NullPlacement,
    SortKey,
    Condition,
    BaseQuery,
    PaginationParams,
    QueryExecutor,
    build_after_predicate,
    build_order_clause,
    encode_page_token,
    decode_page_token,
    paginate
)
from .db import AsyncpgExecutor

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "PaginationError",
    "InvalidTokenError",
    "TokenDecodeError",
    "TokenArityMismatchError",
    "UnsatisfiableConstructionError",
    "Direction",
    "NullPlacement",
    "SortKey",
    "Condition",
    "BaseQuery",
    "PaginationParams",
    "QueryExecutor",
    "build_after_predicate",
    "build_order_clause",
    "encode_page_token",
    "decode_page_token",
    "paginate",
    "AsyncpgExecutor"
]
