"""Exception hierarchy for the query splitter."""

from __future__ import annotations

from typing import Any


class QuerySplitError(RuntimeError):
    """Base exception for query splitting errors."""


class QueryParsingError(QuerySplitError, ValueError):
    """Raised when the statement is not parseable SQL."""


class UnsupportedQueryError(QuerySplitError):
    """Raised when the statement shape cannot be split."""


class SchemaError(QuerySplitError):
    """Raised when the target table cannot back a split."""


class TableNotFoundError(SchemaError):
    pass


class NoPrimaryKeyError(SchemaError):
    pass


class SplitColumnNotIndexedError(SchemaError):
    def __init__(self, column: str, table: str) -> None:
        super().__init__(
            f"Split column '{column}' is not indexed or does not exist in table '{table}'."
        )
        self.column = column
        self.table = table


class NumericParseError(QuerySplitError, ValueError):
    """Raised when min/max values cannot be read as the declared column type."""


class RangeTooSmallError(QuerySplitError):
    """Raised when the column range cannot be divided into the requested split count."""

    def __init__(self, *, split_count: int, min_value: Any, max_value: Any) -> None:
        super().__init__(
            f"Range [{min_value!r}, {max_value!r}] is too small to split into {split_count} parts."
        )
        self.split_count = split_count
        self.min_value = min_value
        self.max_value = max_value


__all__ = [
    "NoPrimaryKeyError",
    "NumericParseError",
    "QueryParsingError",
    "QuerySplitError",
    "RangeTooSmallError",
    "SchemaError",
    "SplitColumnNotIndexedError",
    "TableNotFoundError",
    "UnsupportedQueryError",
]
