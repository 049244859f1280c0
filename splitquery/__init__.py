from splitquery.catalog import InMemorySchemaCatalog, SchemaCatalog, load_catalog_yaml
from splitquery.errors import (
    NoPrimaryKeyError,
    NumericParseError,
    QueryParsingError,
    QuerySplitError,
    RangeTooSmallError,
    SchemaError,
    SplitColumnNotIndexedError,
    TableNotFoundError,
    UnsupportedQueryError,
)
from splitquery.models import (
    BoundarySet,
    ColumnSchema,
    ColumnType,
    IndexSchema,
    MinMaxResult,
    QuerySplit,
    ResolvedTarget,
    SplitRequest,
    TableSchema,
)
from splitquery.planner import QuerySplitter
from splitquery.service import QuerySplitService

__all__ = [
    "BoundarySet",
    "ColumnSchema",
    "ColumnType",
    "InMemorySchemaCatalog",
    "IndexSchema",
    "MinMaxResult",
    "NoPrimaryKeyError",
    "NumericParseError",
    "QueryParsingError",
    "QuerySplit",
    "QuerySplitError",
    "QuerySplitService",
    "QuerySplitter",
    "RangeTooSmallError",
    "ResolvedTarget",
    "SchemaCatalog",
    "SchemaError",
    "SplitColumnNotIndexedError",
    "SplitRequest",
    "TableNotFoundError",
    "TableSchema",
    "UnsupportedQueryError",
    "load_catalog_yaml",
]
