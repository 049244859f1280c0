from __future__ import annotations

import sqlglot
from sqlglot import exp

from splitquery.planner.rewriter import (
    END_BIND_VAR,
    START_BIND_VAR,
    build_range_predicate,
    where_condition,
    with_where,
)


def _where(sql: str) -> exp.Expression:
    select = sqlglot.parse_one(f"SELECT * FROM orders WHERE {sql}", read="mysql")
    return select.args["where"].this


def test_both_bounds_missing_returns_original_condition() -> None:
    where = _where("status = 'open'")
    bind_variables: dict = {}

    result = build_range_predicate(where, "id", None, None, bind_variables)

    assert result is where
    assert bind_variables == {}


def test_both_bounds_missing_without_condition_returns_none() -> None:
    assert build_range_predicate(None, "id", None, None, {}) is None


def test_upper_bound_only() -> None:
    bind_variables: dict = {}

    result = build_range_predicate(None, "id", None, 25, bind_variables)

    assert result.sql(dialect="mysql") == f"id < :{END_BIND_VAR}"
    assert bind_variables == {END_BIND_VAR: 25}


def test_lower_bound_only() -> None:
    bind_variables: dict = {}

    result = build_range_predicate(None, "id", 75, None, bind_variables)

    assert result.sql(dialect="mysql") == f"id >= :{START_BIND_VAR}"
    assert bind_variables == {START_BIND_VAR: 75}


def test_closed_range_is_conjunction() -> None:
    bind_variables: dict = {}

    result = build_range_predicate(None, "id", 25, 50, bind_variables)

    assert result.sql(dialect="mysql") == f"id >= :{START_BIND_VAR} AND id < :{END_BIND_VAR}"
    assert bind_variables == {START_BIND_VAR: 25, END_BIND_VAR: 50}


def test_original_condition_is_parenthesised_and_preserved() -> None:
    where = _where("status = 'open' OR status = 'held'")
    before = where.sql(dialect="mysql")

    result = build_range_predicate(where, "id", 25, 50, {})

    assert result.sql(dialect="mysql") == (
        f"(status = 'open' OR status = 'held') AND (id >= :{START_BIND_VAR} AND id < :{END_BIND_VAR})"
    )
    assert where.sql(dialect="mysql") == before
    assert where.parent is not None


def test_with_where_returns_modified_copy() -> None:
    select = sqlglot.parse_one("SELECT id FROM orders", read="mysql")
    condition = build_range_predicate(None, "id", None, 10, {})

    rewritten = with_where(select, condition)

    assert rewritten is not select
    assert rewritten.sql(dialect="mysql") == f"SELECT id FROM orders WHERE id < :{END_BIND_VAR}"
    assert select.sql(dialect="mysql") == "SELECT id FROM orders"
    assert where_condition(select) is None
