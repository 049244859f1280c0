from __future__ import annotations

from typing import Any

from splitquery.models.schema import ColumnType
from splitquery.models.split import MinMaxResult, ResolvedTarget


class SplitSource:
    """Store-side collaborator that answers the pre-split queries."""

    source_id: str

    def dialect(self) -> str:
        raise NotImplementedError

    async def column_type(self, target: ResolvedTarget) -> ColumnType:
        raise NotImplementedError

    async def min_max(
        self,
        target: ResolvedTarget,
        *,
        sql: str,
        bind_variables: dict[str, Any],
    ) -> MinMaxResult:
        raise NotImplementedError
