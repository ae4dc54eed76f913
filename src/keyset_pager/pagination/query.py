"""Paginated query orchestration around a caller-supplied executor."""

import logging
from typing import Any, List, Optional, Protocol, Sequence, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..config import get_settings
from ..errors.problem_details import (
    BadRequestError, TokenArityMismatchError, UnsatisfiableConstructionError
)
from .condition import Condition, build_after_predicate
from .sort_keys import SortKey, validate_sort_keys
from .token import decode_page_token, encode_page_token


logger = logging.getLogger(__name__)


class BaseQuery(BaseModel):
    """A SELECT statement without ORDER BY or LIMIT, plus its parameters.

    Parameters use the executor's paramstyle. Sort key expressions refer to
    the statement's output columns.
    """

    sql: str = Field(min_length=1, description="SELECT statement to paginate")
    params: List[Any] = Field(default_factory=list, description="Parameters of the statement")


class PaginationParams(BaseModel):
    """Pagination input as received from a caller."""

    page_size: int = Field(
        default_factory=lambda: get_settings().default_page_size,
        ge=0,
        description="Rows per page, 0 for all rows"
    )
    page_token: Optional[str] = Field(default=None, description="Token of the page to fetch")

    @field_validator("page_size")
    @classmethod
    def validate_page_size(cls, v):
        """Cap the page size at the configured maximum."""
        max_page_size = get_settings().max_page_size
        if v > max_page_size:
            raise ValueError(f"page_size must be <= {max_page_size}")
        return v

    @classmethod
    def from_request(
        cls,
        page_size: Optional[int] = None,
        page_token: Optional[str] = None
    ) -> "PaginationParams":
        """Validate pagination input from a request.

        A missing page size falls back to the configured default and an empty
        token means the first page.

        Raises:
            BadRequestError: If the input is out of range
        """
        data: dict = {"page_token": page_token or None}
        if page_size is not None:
            data["page_size"] = page_size

        try:
            return cls(**data)
        except ValidationError as e:
            problems = "; ".join(
                f"{' -> '.join(str(x) for x in error['loc'])}: {error['msg']}"
                for error in e.errors()
            )
            raise BadRequestError(f"Invalid pagination parameters: {problems}")


class QueryExecutor(Protocol):
    """Runs a paginated query against a store.

    ``paramstyle`` names the placeholder style of ``BaseQuery.sql`` and of the
    conditions handed to ``fetch``.
    """

    paramstyle: str

    async def fetch(
        self,
        base_query: BaseQuery,
        sort_keys: Sequence[SortKey],
        condition: Optional[Condition],
        limit: Optional[int]
    ) -> List[Any]:
        ...


def paginate_query_results(
    rows: Sequence[Any],
    page_size: int,
    sort_keys: Sequence[SortKey]
) -> Tuple[List[Any], str]:
    """Process query results for pagination.

    Args:
        rows: Rows fetched with a limit of ``page_size + 1``
        page_size: Requested page size, 0 for no limit
        sort_keys: Sort keys used to order the rows

    Returns:
        Tuple of (page_rows, next_page_token); the token is empty on the last page
    """
    if page_size == 0 or len(rows) <= page_size:
        return list(rows), ""

    page_rows = list(rows[:page_size])
    last_row = page_rows[-1]
    next_page_token = encode_page_token([key.extract(last_row) for key in sort_keys])
    return page_rows, next_page_token


async def paginate(
    executor: QueryExecutor,
    base_query: BaseQuery,
    sort_keys: Sequence[SortKey],
    page_size: int,
    page_token: Optional[str] = None
) -> Tuple[List[Any], str]:
    """Fetch one page of ``base_query`` in keyset order.

    Args:
        executor: Executor running the composed query
        base_query: Query to paginate
        sort_keys: Sort keys, most significant first
        page_size: Rows per page, 0 for all remaining rows
        page_token: Token returned by the previous call, empty for the first page

    Returns:
        Tuple of (rows, next_page_token); the token is empty when no page follows

    Raises:
        BadRequestError: If page_size is negative
        TokenDecodeError: If the page token is malformed
        TokenArityMismatchError: If the page token does not fit the sort keys
        UnsatisfiableConstructionError: If no sort keys are given
    """
    if page_size < 0:
        raise BadRequestError(f"page_size must be >= 0, got {page_size}")
    if not sort_keys:
        raise UnsatisfiableConstructionError()
    validate_sort_keys(sort_keys)

    condition = None
    if page_token:
        last_values = decode_page_token(page_token)
        if len(last_values) != len(sort_keys):
            logger.warning(
                f"Page token holds {len(last_values)} value(s) for {len(sort_keys)} sort key(s)"
            )
            raise TokenArityMismatchError(expected=len(sort_keys), actual=len(last_values))
        condition = build_after_predicate(
            sort_keys,
            last_values,
            paramstyle=executor.paramstyle,
            start=len(base_query.params) + 1
        )

    # Query for one more row than requested to check for more pages
    limit = page_size + 1 if page_size else None
    rows = await executor.fetch(base_query, sort_keys, condition, limit)

    page_rows, next_page_token = paginate_query_results(rows, page_size, sort_keys)
    logger.debug(f"Fetched page of {len(page_rows)} row(s), has_more={bool(next_page_token)}")
    return page_rows, next_page_token
