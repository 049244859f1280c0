from __future__ import annotations

import pytest

from splitquery.catalog import InMemorySchemaCatalog
from splitquery.errors import QuerySplitError
from splitquery.models import ColumnType, MinMaxResult, TableSchema
from splitquery.planner import (
    END_BIND_VAR,
    START_BIND_VAR,
    QuerySplitter,
    assemble_splits,
    compute_boundaries,
    validate_query,
)


def _catalog() -> InMemorySchemaCatalog:
    return InMemorySchemaCatalog([TableSchema(name="orders", primary_key_columns=["id"])])


def _in_split(value: int, bind_variables: dict) -> bool:
    start = bind_variables.get(START_BIND_VAR)
    end = bind_variables.get(END_BIND_VAR)
    return (start is None or value >= start) and (end is None or value < end)


def test_splits_without_where_clause() -> None:
    target = validate_query("SELECT id, note FROM orders", _catalog())

    splits = assemble_splits(target, [25, 50, 75], 25)

    assert [split.sql for split in splits] == [
        f"SELECT id, note FROM orders WHERE id < :{END_BIND_VAR}",
        f"SELECT id, note FROM orders WHERE id >= :{START_BIND_VAR} AND id < :{END_BIND_VAR}",
        f"SELECT id, note FROM orders WHERE id >= :{START_BIND_VAR} AND id < :{END_BIND_VAR}",
        f"SELECT id, note FROM orders WHERE id >= :{START_BIND_VAR}",
    ]
    assert [split.bind_variables for split in splits] == [
        {END_BIND_VAR: 25},
        {START_BIND_VAR: 25, END_BIND_VAR: 50},
        {START_BIND_VAR: 50, END_BIND_VAR: 75},
        {START_BIND_VAR: 75},
    ]
    assert {split.row_count for split in splits} == {25}


def test_splits_keep_original_where_and_bind_variables() -> None:
    target = validate_query("SELECT * FROM orders WHERE status = 'open'", _catalog())

    splits = assemble_splits(target, [100], 100, {"tenant": 7})

    assert [split.sql for split in splits] == [
        f"SELECT * FROM orders WHERE (status = 'open') AND (id < :{END_BIND_VAR})",
        f"SELECT * FROM orders WHERE (status = 'open') AND (id >= :{START_BIND_VAR})",
    ]
    assert splits[0].bind_variables == {"tenant": 7, END_BIND_VAR: 100}
    assert splits[1].bind_variables == {"tenant": 7, START_BIND_VAR: 100}


def test_empty_boundaries_return_original_query() -> None:
    sql = "SELECT * FROM orders WHERE status = 'open'"
    target = validate_query(sql, _catalog())
    bind_variables = {"tenant": 7}

    splits = assemble_splits(target, [], 0, bind_variables)

    assert len(splits) == 1
    assert splits[0].sql == sql
    assert splits[0].bind_variables == {"tenant": 7}
    assert splits[0].bind_variables is not bind_variables
    assert splits[0].row_count == 0


def test_statement_is_unchanged_after_assembly() -> None:
    target = validate_query("SELECT * FROM orders WHERE status = 'open'", _catalog())
    before = target.select.sql(dialect="mysql")

    assemble_splits(target, [10, 20], 10)

    assert target.select.sql(dialect="mysql") == before


def test_assembly_is_repeatable() -> None:
    target = validate_query("SELECT * FROM orders WHERE status = 'open'", _catalog())

    first = assemble_splits(target, [10, 20], 10, {"tenant": 1})
    second = assemble_splits(target, [10, 20], 10, {"tenant": 1})

    assert [split.model_dump() for split in first] == [split.model_dump() for split in second]


def test_bind_maps_are_independent_per_split() -> None:
    target = validate_query("SELECT * FROM orders", _catalog())
    bind_variables = {"tenant": 1}

    splits = assemble_splits(target, [10, 20], 10, bind_variables)
    splits[0].bind_variables["tenant"] = 99

    assert bind_variables == {"tenant": 1}
    assert splits[1].bind_variables["tenant"] == 1
    assert splits[2].bind_variables["tenant"] == 1


@pytest.mark.parametrize("split_count", [2, 3, 5, 8])
def test_every_value_falls_in_exactly_one_split(split_count: int) -> None:
    target = validate_query("SELECT * FROM orders", _catalog())
    boundaries = compute_boundaries(ColumnType.SIGNED, MinMaxResult(rows=[(0, 100)]), split_count)

    splits = assemble_splits(target, boundaries.values, boundaries.row_count)

    assert len(splits) == split_count
    for value in range(-10, 121):
        matches = [split for split in splits if _in_split(value, split.bind_variables)]
        assert len(matches) == 1


def test_splitter_facade_runs_whole_pipeline() -> None:
    splitter = QuerySplitter(
        "SELECT * FROM orders",
        {"tenant": 3},
        None,
        4,
        _catalog(),
    )

    splitter.validate()
    assert splitter.min_max_query() == "SELECT MIN(id), MAX(id) FROM orders"

    splits = splitter.split(ColumnType.SIGNED, MinMaxResult(rows=[(0, 100)]))

    assert len(splits) == 4
    assert splits[1].bind_variables == {"tenant": 3, START_BIND_VAR: 25, END_BIND_VAR: 50}
    assert all(split.row_count == 25 for split in splits)


def test_splitter_collapses_when_min_max_missing() -> None:
    splitter = QuerySplitter("SELECT * FROM orders", {}, None, 4, _catalog())
    splitter.validate()

    splits = splitter.split(ColumnType.SIGNED, MinMaxResult(rows=[(None, None)]))

    assert [split.sql for split in splits] == ["SELECT * FROM orders"]


def test_splitter_requires_validation_first() -> None:
    splitter = QuerySplitter("SELECT * FROM orders", {}, None, 4, _catalog())

    with pytest.raises(QuerySplitError, match="validate"):
        splitter.split(ColumnType.SIGNED, MinMaxResult(rows=[(0, 100)]))


def test_min_max_query_keeps_original_where() -> None:
    splitter = QuerySplitter("SELECT note FROM orders WHERE status = 'open'", {}, None, 2, _catalog())
    splitter.validate()

    assert splitter.min_max_query() == "SELECT MIN(id), MAX(id) FROM orders WHERE status = 'open'"
