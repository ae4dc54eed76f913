"""Pagination module for keyset (seek-based) pagination."""

from .sort_keys import (
    Direction,
    NullPlacement,
    SortKey,
    validate_sort_keys,
    build_order_clause
)
from .condition import (
    PARAMSTYLES,
    Condition,
    build_after_predicate
)
from .token import (
    PageTokenData,
    encode_page_token,
    decode_page_token
)
from .query import (
    BaseQuery,
    PaginationParams,
    QueryExecutor,
    paginate,
    paginate_query_results
)

__all__ = [
    "Direction",
    "NullPlacement",
    "SortKey",
    "validate_sort_keys",
    "build_order_clause",
    "PARAMSTYLES",
    "Condition",
    "build_after_predicate",
    "PageTokenData",
    "encode_page_token",
    "decode_page_token",
    "BaseQuery",
    "PaginationParams",
    "QueryExecutor",
    "paginate",
    "paginate_query_results"
]
