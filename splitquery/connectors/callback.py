from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Sequence

from splitquery.connectors.base import SplitSource
from splitquery.models.schema import ColumnType
from splitquery.models.split import MinMaxResult, ResolvedTarget
from splitquery.planner.aggregates import build_column_type_query

QueryRunner = Callable[[str, dict[str, Any]], Awaitable[Sequence[Sequence[Any]]]]


class CallbackSplitSource(SplitSource):
    """
    Adapter over an async SQL runner.

    The runner receives rendered SQL plus bind variables and returns result rows;
    connection handling, retries and timeouts stay with the runner.
    """

    def __init__(
        self,
        *,
        source_id: str,
        runner: QueryRunner,
        dialect: str = "mysql",
        logger: logging.Logger | None = None,
    ) -> None:
        self.source_id = source_id
        self._runner = runner
        self._dialect = dialect
        self._logger = logger or logging.getLogger(__name__)

    def dialect(self) -> str:
        return self._dialect

    async def column_type(self, target: ResolvedTarget) -> ColumnType:
        sql, bind_variables = build_column_type_query(target)
        rows = await self._runner(sql, bind_variables)
        if not rows or not rows[0]:
            self._logger.warning(
                "No declared type found for column=%s table=%s source=%s",
                target.split_column,
                target.table_name,
                self.source_id,
            )
            return ColumnType.OTHER
        return ColumnType.from_sql_type(str(rows[0][0]))

    async def min_max(
        self,
        target: ResolvedTarget,
        *,
        sql: str,
        bind_variables: dict[str, Any],
    ) -> MinMaxResult:
        self._logger.debug("Fetching min/max table=%s source=%s", target.table_name, self.source_id)
        rows = await self._runner(sql, bind_variables)
        return MinMaxResult(rows=[tuple(row) for row in rows])
