"""Queries the caller runs before splitting: column min/max and declared type."""

from __future__ import annotations

from typing import Any

from sqlglot import exp

from splitquery.models.split import ResolvedTarget
from splitquery.planner.rewriter import where_condition
from splitquery.planner.validator import single_table


def build_min_max_query(target: ResolvedTarget) -> str:
    """Render ``SELECT MIN(col), MAX(col) FROM table [WHERE ...]`` for the split column.

    The original WHERE clause is kept so the range reflects the rows the query
    can actually return; run it with the request's bind variables.
    """
    table = single_table(target.select, dialect=target.dialect).copy()
    query = exp.select(
        exp.Min(this=exp.column(target.split_column)),
        exp.Max(this=exp.column(target.split_column)),
    ).from_(table)
    condition = where_condition(target.select)
    if condition is not None:
        query = query.where(condition.copy())
    return query.sql(dialect=target.dialect)


def build_column_type_query(target: ResolvedTarget) -> tuple[str, dict[str, Any]]:
    """Render an ``information_schema.columns`` lookup of the split column's declared type."""
    query = (
        exp.select(exp.column("column_type"))
        .from_(exp.table_("columns", db="information_schema"))
        .where(
            exp.and_(
                exp.EQ(this=exp.column("table_name"), expression=exp.Placeholder(this="table_name")),
                exp.EQ(this=exp.column("column_name"), expression=exp.Placeholder(this="column_name")),
            )
        )
    )
    bind_variables = {"table_name": target.table_name, "column_name": target.split_column}
    return query.sql(dialect=target.dialect), bind_variables
