from __future__ import annotations

from typing import Any

from splitquery.catalog import SchemaCatalog
from splitquery.errors import QuerySplitError
from splitquery.models.schema import ColumnType
from splitquery.models.split import BoundarySet, MinMaxResult, QuerySplit, ResolvedTarget, SplitRequest
from splitquery.planner.aggregates import build_min_max_query
from splitquery.planner.assembler import assemble_splits
from splitquery.planner.boundaries import compute_boundaries
from splitquery.planner.validator import validate_query


class QuerySplitter:
    """Splits one SELECT into ``split_count`` range queries on an indexed column.

    Call :meth:`validate` first, run :meth:`min_max_query` against the store,
    then pass the column type and min/max result to :meth:`split`.
    """

    def __init__(
        self,
        sql: str,
        bind_variables: dict[str, Any] | None,
        split_column: str | None,
        split_count: int,
        catalog: SchemaCatalog,
        *,
        dialect: str = "mysql",
    ) -> None:
        self._sql = sql
        self._bind_variables = dict(bind_variables or {})
        self._split_column = split_column or None
        self._split_count = max(int(split_count), 1)
        self._catalog = catalog
        self._dialect = dialect
        self._target: ResolvedTarget | None = None

    @classmethod
    def from_request(cls, request: SplitRequest, catalog: SchemaCatalog, *, dialect: str = "mysql") -> "QuerySplitter":
        return cls(
            request.sql,
            request.bind_variables,
            request.split_column,
            request.split_count,
            catalog,
            dialect=dialect,
        )

    @property
    def split_count(self) -> int:
        return self._split_count

    @property
    def target(self) -> ResolvedTarget:
        if self._target is None:
            raise QuerySplitError("validate() must succeed before the splitter can be used.")
        return self._target

    def validate(self) -> ResolvedTarget:
        self._target = validate_query(
            self._sql,
            self._catalog,
            self._split_column,
            dialect=self._dialect,
        )
        return self._target

    def min_max_query(self) -> str:
        return build_min_max_query(self.target)

    def boundaries(self, column_type: ColumnType | str, min_max: MinMaxResult | None) -> BoundarySet:
        return compute_boundaries(column_type, min_max, self._split_count)

    def split(self, column_type: ColumnType | str, min_max: MinMaxResult | None) -> list[QuerySplit]:
        target = self.target
        boundary_set = self.boundaries(column_type, min_max)
        return assemble_splits(
            target,
            boundary_set.values,
            boundary_set.row_count,
            self._bind_variables,
        )
