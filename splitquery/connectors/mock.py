from __future__ import annotations

from typing import Any

import pyarrow as pa
import pyarrow.compute as pc

from splitquery.connectors.base import SplitSource
from splitquery.errors import SchemaError
from splitquery.models.schema import ColumnType
from splitquery.models.split import MinMaxResult, ResolvedTarget


def column_type_from_arrow(data_type: pa.DataType) -> ColumnType:
    if pa.types.is_signed_integer(data_type):
        return ColumnType.SIGNED
    if pa.types.is_unsigned_integer(data_type):
        return ColumnType.UNSIGNED
    if pa.types.is_floating(data_type):
        return ColumnType.FLOAT
    if (
        pa.types.is_binary(data_type)
        or pa.types.is_large_binary(data_type)
        or pa.types.is_fixed_size_binary(data_type)
    ):
        return ColumnType.BINARY
    return ColumnType.OTHER


class MockArrowSplitSource(SplitSource):
    """Answers type and min/max lookups from in-memory Arrow tables.

    The WHERE clause of the min/max query is not evaluated; the whole column
    is aggregated.
    """

    def __init__(self, *, source_id: str, tables: dict[str, pa.Table], dialect: str = "mysql") -> None:
        self.source_id = source_id
        self._tables = tables
        self._dialect = dialect

    def dialect(self) -> str:
        return self._dialect

    async def column_type(self, target: ResolvedTarget) -> ColumnType:
        column = self._column(target)
        return column_type_from_arrow(column.type)

    async def min_max(
        self,
        target: ResolvedTarget,
        *,
        sql: str,
        bind_variables: dict[str, Any],
    ) -> MinMaxResult:
        column = self._column(target)
        if len(column) == 0:
            return MinMaxResult(rows=[(None, None)])
        stats = pc.min_max(column).as_py()
        return MinMaxResult(rows=[(stats["min"], stats["max"])])

    def _column(self, target: ResolvedTarget) -> pa.ChunkedArray:
        table = self._tables.get(target.table_name)
        if table is None:
            raise SchemaError(f"Unknown mock table '{target.table_name}'.")
        if target.split_column not in table.column_names:
            raise SchemaError(
                f"Column '{target.split_column}' does not exist in mock table '{target.table_name}'."
            )
        return table.column(target.split_column)
