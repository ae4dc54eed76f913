"""Sort key descriptors and ORDER BY rendering."""

from enum import Enum
from typing import Any, Callable, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Direction(str, Enum):
    """Sort direction of a single column."""

    ASC = "ASC"
    DESC = "DESC"


class NullPlacement(str, Enum):
    """Where SQL NULLs sort relative to non-NULL values."""

    FIRST = "FIRST"
    LAST = "LAST"


class SortKey(BaseModel):
    """One column of a composite keyset order.

    ``extractor`` reads the column's value from a fetched row. When it is not
    given the row is indexed by ``expression``, which works for plain column
    names on ``asyncpg.Record`` and ``dict`` rows.
    """

    model_config = ConfigDict(frozen=True)

    expression: str = Field(min_length=1, description="Column name or SQL expression")
    direction: Direction = Field(default=Direction.ASC, description="Sort direction")
    nulls: NullPlacement = Field(default=NullPlacement.LAST, description="NULL placement")
    extractor: Optional[Callable[[Any], Any]] = Field(default=None, exclude=True)

    @field_validator("direction", "nulls", mode="before")
    @classmethod
    def normalize_keyword(cls, v):
        """Accept lower-case keywords such as "asc" or "last"."""
        if isinstance(v, str):
            return v.upper()
        return v

    @classmethod
    def asc(cls, expression: str, nulls: NullPlacement = NullPlacement.LAST,
            extractor: Optional[Callable[[Any], Any]] = None) -> "SortKey":
        """Ascending key; NULLS LAST by default, as in PostgreSQL."""
        return cls(expression=expression, direction=Direction.ASC, nulls=nulls, extractor=extractor)

    @classmethod
    def desc(cls, expression: str, nulls: NullPlacement = NullPlacement.FIRST,
             extractor: Optional[Callable[[Any], Any]] = None) -> "SortKey":
        """Descending key; NULLS FIRST by default, as in PostgreSQL."""
        return cls(expression=expression, direction=Direction.DESC, nulls=nulls, extractor=extractor)

    @property
    def comparator(self) -> str:
        """Operator selecting values that sort after a given value."""
        return ">" if self.direction == Direction.ASC else "<"

    @property
    def nulls_last(self) -> bool:
        return self.nulls == NullPlacement.LAST

    def extract(self, row: Any) -> Any:
        """Read this key's value from a fetched row."""
        if self.extractor is not None:
            return self.extractor(row)
        return row[self.expression]

    def to_sql(self) -> str:
        """Render the key as an ORDER BY item."""
        return f"{self.expression} {self.direction.value} NULLS {self.nulls.value}"


def validate_sort_keys(sort_keys: Sequence[SortKey]) -> None:
    """Reject sort key lists that repeat an expression.

    Raises:
        ValueError: If an expression appears more than once
    """
    seen = set()
    for key in sort_keys:
        if key.expression in seen:
            raise ValueError(f"Duplicate sort key expression: {key.expression!r}")
        seen.add(key.expression)


def build_order_clause(sort_keys: Sequence[SortKey]) -> str:
    """Build ORDER BY clause for pagination.

    Args:
        sort_keys: Sort keys, most significant first

    Returns:
        ORDER BY clause string, or an empty string when there are no keys
    """
    if not sort_keys:
        return ""
    return "ORDER BY " + ", ".join(key.to_sql() for key in sort_keys)
