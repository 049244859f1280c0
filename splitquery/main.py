#!/usr/bin/env python3
"""Command line entry point: split a query against a YAML catalog and print the splits as JSON."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

import yaml

from splitquery.catalog import SchemaCatalog, load_catalog_yaml
from splitquery.config import Settings
from splitquery.errors import QuerySplitError
from splitquery.logging import setup_logging
from splitquery.models import ColumnType, MinMaxResult, SplitRequest
from splitquery.planner import validate_query
from splitquery.service import QuerySplitService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Split a SELECT into range queries on an indexed column.",
    )
    parser.add_argument("sql", help="SELECT statement to split; wrap in quotes.")
    parser.add_argument("--catalog", required=True, type=Path, help="YAML file describing tables, keys and indexes.")
    parser.add_argument("--split-count", type=int, default=1, help="Desired number of splits (values < 1 become 1).")
    parser.add_argument("--split-column", help="Indexed column to split on; defaults to the first primary key column.")
    parser.add_argument(
        "--column-type",
        help="Type of the split column: signed, unsigned, float, binary, other, or a SQL type name. "
        "Defaults to the type declared in the catalog.",
    )
    parser.add_argument("--min", dest="min_value", help="Observed MIN() of the split column.")
    parser.add_argument("--max", dest="max_value", help="Observed MAX() of the split column.")
    parser.add_argument(
        "--bind",
        action="append",
        default=[],
        metavar="NAME=JSON",
        help="Bind variable used by the statement, value given as JSON. Repeatable.",
    )
    parser.add_argument("--dialect", help="sqlglot dialect (env: SPLITQUERY_DIALECT).")
    parser.add_argument("--log-level", help="Log level (env: SPLITQUERY_LOG_LEVEL).")
    return parser


def parse_bind_variables(pairs: Sequence[str]) -> dict[str, Any]:
    bind_variables: dict[str, Any] = {}
    for pair in pairs:
        name, separator, raw_value = pair.partition("=")
        if not separator or not name:
            raise ValueError(f"Bind variable '{pair}' must look like NAME=JSON.")
        try:
            bind_variables[name] = json.loads(raw_value)
        except json.JSONDecodeError:
            bind_variables[name] = raw_value
    return bind_variables


def resolve_column_type(args: argparse.Namespace, catalog: SchemaCatalog, request: SplitRequest, dialect: str) -> str | ColumnType:
    if args.column_type:
        return args.column_type
    target = validate_query(request.sql, catalog, request.split_column, dialect=dialect)
    table = catalog.get_table(target.table_name)
    declared = table.column_type(target.split_column) if table is not None else None
    if declared is None:
        logger.warning("No type declared for column=%s table=%s; producing a single split", target.split_column, target.table_name)
        return ColumnType.OTHER
    return declared


def run(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if (args.min_value is None) != (args.max_value is None):
        parser.error("--min and --max must be given together.")

    overrides: dict[str, Any] = {}
    if args.dialect:
        overrides["DIALECT"] = args.dialect
    if args.log_level:
        overrides["LOG_LEVEL"] = args.log_level
    app_settings = Settings(**overrides)
    setup_logging(app_settings)

    try:
        catalog = load_catalog_yaml(args.catalog.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError, ValueError) as exc:
        print(f"error: could not load catalog {args.catalog}: {exc}", file=sys.stderr)
        return 2

    try:
        request = SplitRequest(
            sql=args.sql,
            bind_variables=parse_bind_variables(args.bind),
            split_column=args.split_column,
            split_count=args.split_count,
        )
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    rows = []
    if args.min_value is not None and args.max_value is not None:
        rows.append((args.min_value, args.max_value))

    service = QuerySplitService(catalog=catalog, settings=app_settings)
    try:
        splits = service.split_with_min_max(
            request,
            resolve_column_type(args, catalog, request, app_settings.DIALECT),
            MinMaxResult(rows=rows),
        )
    except QuerySplitError as exc:
        logger.debug("Split failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(json.dumps([split.model_dump(mode="json") for split in splits], indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(run())
