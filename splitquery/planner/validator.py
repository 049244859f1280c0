from __future__ import annotations

import logging

import sqlglot
from sqlglot import exp
from sqlglot.errors import ParseError, TokenError

from splitquery.catalog import SchemaCatalog
from splitquery.errors import (
    NoPrimaryKeyError,
    QueryParsingError,
    SplitColumnNotIndexedError,
    TableNotFoundError,
    UnsupportedQueryError,
)
from splitquery.models.split import ResolvedTarget

logger = logging.getLogger(__name__)

# (arg keys, clause name used in error messages)
_UNSUPPORTED_CLAUSES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("distinct",), "DISTINCT"),
    (("group",), "GROUP BY"),
    (("having",), "HAVING"),
    (("order",), "ORDER BY"),
    (("limit",), "LIMIT"),
    (("offset",), "OFFSET"),
    (("locks",), "locking clause"),
    (("joins",), "JOIN"),
    (("laterals",), "LATERAL"),
    (("into",), "INTO"),
    (("with", "with_"), "WITH"),
)


def parse_select(sql: str, *, dialect: str) -> exp.Select:
    try:
        expression = sqlglot.parse_one(sql, read=dialect)
    except (ParseError, TokenError) as exc:
        raise QueryParsingError(str(exc)) from exc

    if not isinstance(expression, exp.Select):
        raise UnsupportedQueryError(
            f"Only SELECT statements can be split, got {type(expression).__name__.upper()}."
        )
    return expression


def validate_query(
    sql: str,
    catalog: SchemaCatalog,
    split_column: str | None = None,
    *,
    dialect: str = "mysql",
) -> ResolvedTarget:
    """Check that ``sql`` can be split and resolve its table and split column."""
    select = parse_select(sql, dialect=dialect)

    for keys, clause in _UNSUPPORTED_CLAUSES:
        if _arg(select, *keys):
            raise UnsupportedQueryError(f"Unsupported query: {clause} is not allowed in a split query.")

    table = single_table(select, dialect=dialect)
    table_name = table.name
    schema = catalog.get_table(table_name)
    if schema is None:
        raise TableNotFoundError(f"Table '{table_name}' not found in schema.")
    if not schema.primary_key_columns:
        raise NoPrimaryKeyError(f"Table '{table_name}' has no primary key columns.")

    if split_column:
        resolved_column = schema.find_indexed_column(split_column)
        if resolved_column is None:
            raise SplitColumnNotIndexedError(split_column, table_name)
    else:
        resolved_column = schema.primary_key_columns[0]

    logger.debug("Validated split target table=%s split_column=%s", table_name, resolved_column)
    return ResolvedTarget(
        table_name=table_name,
        primary_key_columns=list(schema.primary_key_columns),
        split_column=resolved_column,
        select=select,
        sql=sql,
        dialect=dialect,
    )


def single_table(select: exp.Select, *, dialect: str) -> exp.Table:
    from_clause = _arg(select, "from", "from_")
    if from_clause is None:
        raise UnsupportedQueryError("Unsupported query: a FROM clause with one table is required.")
    if from_clause.expressions:
        raise UnsupportedQueryError("Unsupported query: FROM must reference exactly one table.")

    table = from_clause.this
    if not isinstance(table, exp.Table) or not isinstance(table.this, exp.Identifier):
        rendered = table.sql(dialect=dialect) if isinstance(table, exp.Expression) else str(table)
        raise UnsupportedQueryError(
            f"Unsupported query: FROM must be a plain table reference, got '{rendered}'."
        )
    if table.args.get("db") or table.args.get("catalog"):
        # The catalog is keyed by bare table name; a qualifier could point at another database.
        raise UnsupportedQueryError(
            f"Unsupported query: qualified table '{table.sql(dialect=dialect)}' is not a simple table reference."
        )
    return table


def _arg(node: exp.Expression, *keys: str):
    # Some sqlglot releases suffix keyword-named args with an underscore.
    for key in keys:
        value = node.args.get(key)
        if value:
            return value
    return None
