from __future__ import annotations

import logging
from typing import Any

from splitquery.catalog import SchemaCatalog
from splitquery.config import Settings, settings as default_settings
from splitquery.connectors import SplitSource
from splitquery.errors import QuerySplitError, RangeTooSmallError
from splitquery.models import ColumnType, MinMaxResult, QuerySplit, ResolvedTarget, SplitRequest
from splitquery.planner import QuerySplitter, assemble_splits

_MIN_MAX_TYPES = {ColumnType.SIGNED, ColumnType.UNSIGNED, ColumnType.FLOAT}


class QuerySplitService:
    """Runs the full split flow: validate, fetch column facts from the source, split."""

    def __init__(
        self,
        *,
        catalog: SchemaCatalog,
        source: SplitSource | None = None,
        settings: Settings | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._catalog = catalog
        self._source = source
        self._settings = settings or default_settings
        self._logger = logger or logging.getLogger(__name__)

    async def split_query(self, request: SplitRequest | dict[str, Any]) -> list[QuerySplit]:
        request = self._coerce_request(request)
        splitter = self._build_splitter(request)
        target = splitter.validate()

        column_type = await self._resolve_column_type(target)
        min_max: MinMaxResult | None = None
        if column_type in _MIN_MAX_TYPES and splitter.split_count > 1:
            min_max = await self._require_source().min_max(
                target,
                sql=splitter.min_max_query(),
                bind_variables=dict(request.bind_variables),
            )
        return self._split(splitter, request, column_type, min_max)

    def split_with_min_max(
        self,
        request: SplitRequest | dict[str, Any],
        column_type: ColumnType | str,
        min_max: MinMaxResult | None,
    ) -> list[QuerySplit]:
        """Split using a column type and min/max the caller already fetched."""
        request = self._coerce_request(request)
        splitter = self._build_splitter(request)
        splitter.validate()
        return self._split(splitter, request, column_type, min_max)

    def _split(
        self,
        splitter: QuerySplitter,
        request: SplitRequest,
        column_type: ColumnType | str,
        min_max: MinMaxResult | None,
    ) -> list[QuerySplit]:
        try:
            splits = splitter.split(column_type, min_max)
        except RangeTooSmallError as exc:
            if not self._settings.FALLBACK_ON_RANGE_TOO_SMALL:
                raise
            self._logger.warning(
                "Falling back to a single split for table=%s column=%s: %s",
                splitter.target.table_name,
                splitter.target.split_column,
                exc,
            )
            return assemble_splits(splitter.target, (), 0, request.bind_variables)

        self._logger.info(
            "Split query on table=%s column=%s into %s parts",
            splitter.target.table_name,
            splitter.target.split_column,
            len(splits),
        )
        return splits

    def _build_splitter(self, request: SplitRequest) -> QuerySplitter:
        split_count = self._settings.clamp_split_count(request.split_count)
        if split_count != request.split_count:
            self._logger.debug("Clamped split count from %s to %s", request.split_count, split_count)
            request = request.model_copy(update={"split_count": split_count})
        return QuerySplitter.from_request(request, self._catalog, dialect=self.dialect)

    @property
    def dialect(self) -> str:
        """The source's dialect when a source is configured, else ``Settings.DIALECT``."""
        if self._source is not None:
            return self._source.dialect()
        return self._settings.DIALECT

    async def _resolve_column_type(self, target: ResolvedTarget) -> ColumnType:
        table = self._catalog.get_table(target.table_name)
        declared = table.column_type(target.split_column) if table is not None else None
        if declared is not None:
            return declared
        return await self._require_source().column_type(target)

    def _require_source(self) -> SplitSource:
        if self._source is None:
            raise QuerySplitError(
                "No split source configured; declare the column type in the catalog "
                "or use split_with_min_max()."
            )
        return self._source

    @staticmethod
    def _coerce_request(request: SplitRequest | dict[str, Any]) -> SplitRequest:
        if isinstance(request, SplitRequest):
            return request
        return SplitRequest.model_validate(request)


__all__ = ["QuerySplitService"]
