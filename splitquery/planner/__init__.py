from splitquery.planner.aggregates import build_column_type_query, build_min_max_query
from splitquery.planner.assembler import assemble_splits
from splitquery.planner.boundaries import compute_boundaries
from splitquery.planner.rewriter import END_BIND_VAR, START_BIND_VAR, build_range_predicate
from splitquery.planner.splitter import QuerySplitter
from splitquery.planner.validator import parse_select, validate_query

__all__ = [
    "END_BIND_VAR",
    "START_BIND_VAR",
    "QuerySplitter",
    "assemble_splits",
    "build_column_type_query",
    "build_min_max_query",
    "build_range_predicate",
    "compute_boundaries",
    "parse_select",
    "validate_query",
]
