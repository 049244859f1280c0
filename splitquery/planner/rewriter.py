from __future__ import annotations

from typing import Any

from sqlglot import exp

START_BIND_VAR = "_splitquery_start"
END_BIND_VAR = "_splitquery_end"


def build_range_predicate(
    where: exp.Expression | None,
    split_column: str,
    start: Any,
    end: Any,
    bind_variables: dict[str, Any],
) -> exp.Expression | None:
    """Return ``where`` restricted to ``split_column`` in ``[start, end)``.

    ``None`` for ``start`` or ``end`` means that side is unbounded. Bound values
    are written into ``bind_variables`` under the fixed start/end names; the
    caller must pass a map owned by a single split. ``where`` is copied into the
    result and never modified.
    """
    if start is None and end is None:
        return where

    clauses: list[exp.Expression] = []
    if start is not None:
        clauses.append(exp.GTE(this=exp.column(split_column), expression=exp.Placeholder(this=START_BIND_VAR)))
        bind_variables[START_BIND_VAR] = start
    if end is not None:
        clauses.append(exp.LT(this=exp.column(split_column), expression=exp.Placeholder(this=END_BIND_VAR)))
        bind_variables[END_BIND_VAR] = end

    range_expr: exp.Expression = clauses[0]
    if len(clauses) == 2:
        range_expr = exp.And(this=clauses[0], expression=clauses[1])

    if where is None:
        return range_expr
    return exp.And(
        this=exp.Paren(this=where.copy()),
        expression=exp.Paren(this=range_expr),
    )


def with_where(select: exp.Select, condition: exp.Expression | None) -> exp.Select:
    """Return a copy of ``select`` whose WHERE clause is ``condition``."""
    statement = select.copy()
    statement.set("where", exp.Where(this=condition.copy()) if condition is not None else None)
    return statement


def where_condition(select: exp.Select) -> exp.Expression | None:
    where = select.args.get("where")
    return where.this if isinstance(where, exp.Where) else None
