"""Keyset "strictly after" predicate construction."""

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from pydantic import BaseModel, Field

from ..errors.problem_details import TokenArityMismatchError, UnsatisfiableConstructionError
from .sort_keys import SortKey


logger = logging.getLogger(__name__)


# Placeholder renderers keyed by paramstyle; each receives the 1-based parameter index.
PARAMSTYLES: Dict[str, Callable[[int], str]] = {
    "qmark": lambda index: "?",
    "numeric": lambda index: f":{index}",
    "dollar": lambda index: f"${index}",
    "format": lambda index: "%s",
}


class Condition(BaseModel):
    """A SQL predicate with its positional bound values."""

    sql: str = Field(description="Predicate text with positional placeholders")
    values: List[Any] = Field(default_factory=list, description="Bound values in placeholder order")


def build_after_predicate(
    sort_keys: Sequence[SortKey],
    last_values: Sequence[Any],
    *,
    paramstyle: str = "qmark",
    start: int = 1
) -> Condition:
    """Build the predicate selecting rows that sort strictly after ``last_values``.

    The first sort key is the most significant. NULL is only ever tested with
    ``IS NULL``/``IS NOT NULL``; every non-NULL value is bound, never inlined.

    Args:
        sort_keys: Sort keys of the query, most significant first
        last_values: Sort key values of the last row of the previous page
        paramstyle: Placeholder style, one of ``PARAMSTYLES``
        start: Index of the first placeholder for numbered styles

    Returns:
        Condition whose placeholders match its values one to one

    Raises:
        UnsatisfiableConstructionError: If no sort keys are given
        TokenArityMismatchError: If the value count differs from the key count
        ValueError: If the paramstyle is unknown
    """
    if not sort_keys:
        raise UnsatisfiableConstructionError()
    if len(sort_keys) != len(last_values):
        raise TokenArityMismatchError(expected=len(sort_keys), actual=len(last_values))
    if paramstyle not in PARAMSTYLES:
        raise ValueError(f"Unknown paramstyle {paramstyle!r}, expected one of {sorted(PARAMSTYLES)}")

    condition = _build(list(sort_keys), list(last_values), PARAMSTYLES[paramstyle], start)
    logger.debug(f"Built keyset predicate over {len(sort_keys)} sort key(s): {condition.sql}")
    return condition


def _advance(
    key: SortKey,
    value: Any,
    placeholder: Callable[[int], str],
    index: int
) -> Tuple[Optional[str], List[Any]]:
    """Predicate for rows whose value for ``key`` sorts strictly after ``value``.

    Returns ``None`` when nothing can sort after it (NULL placed last).
    """
    column = key.expression
    if value is None:
        if key.nulls_last:
            return None, []
        return f"({column} IS NOT NULL)", []

    compare = f"({column} {key.comparator} {placeholder(index)})"
    if key.nulls_last:
        # trailing NULLs follow every non-NULL value
        return f"({compare} OR ({column} IS NULL))", [value]
    return compare, [value]


def _build(
    sort_keys: List[SortKey],
    last_values: List[Any],
    placeholder: Callable[[int], str],
    index: int
) -> Condition:
    key, value = sort_keys[0], last_values[0]
    column = key.expression

    advance, values = _advance(key, value, placeholder, index)
    index += len(values)

    if len(sort_keys) == 1:
        if advance is None:
            return Condition(sql=f"({column} IS NULL AND {column} IS NOT NULL)")
        return Condition(sql=advance, values=values)

    if value is None:
        tie = f"({column} IS NULL)"
    else:
        tie = f"({column} = {placeholder(index)})"
        values = values + [value]
        index += 1

    rest = _build(sort_keys[1:], last_values[1:], placeholder, index)
    tail = f"({tie} AND {rest.sql})"
    sql = tail if advance is None else f"({advance} OR {tail})"
    return Condition(sql=sql, values=values + rest.values)
