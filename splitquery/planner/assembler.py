from __future__ import annotations

import logging
from typing import Any, Sequence

from splitquery.models.split import QuerySplit, ResolvedTarget
from splitquery.planner.rewriter import build_range_predicate, where_condition, with_where

logger = logging.getLogger(__name__)


def assemble_splits(
    target: ResolvedTarget,
    boundaries: Sequence[Any],
    row_count: int,
    bind_variables: dict[str, Any] | None = None,
) -> list[QuerySplit]:
    """Turn interior boundaries into one query per range, ordered by range.

    The first split has no lower bound and the last has no upper bound. Every
    split renders its own copy of the statement, so ``target.select`` is left
    untouched.
    """
    original_bind_variables = dict(bind_variables or {})
    if not boundaries:
        return [QuerySplit(sql=target.sql, bind_variables=original_bind_variables)]

    original_where = where_condition(target.select)
    ends = [*boundaries, None]
    splits: list[QuerySplit] = []
    start = None
    for end in ends:
        split_bind_variables = dict(original_bind_variables)
        condition = build_range_predicate(
            original_where,
            target.split_column,
            start,
            end,
            split_bind_variables,
        )
        statement = with_where(target.select, condition)
        splits.append(
            QuerySplit(
                sql=statement.sql(dialect=target.dialect),
                bind_variables=split_bind_variables,
                row_count=row_count,
            )
        )
        start = end

    logger.debug(
        "Generated %s splits for table=%s on column=%s",
        len(splits),
        target.table_name,
        target.split_column,
    )
    return splits
