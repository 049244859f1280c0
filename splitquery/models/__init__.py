from splitquery.models.schema import ColumnSchema, ColumnType, IndexSchema, TableSchema
from splitquery.models.split import BoundarySet, MinMaxResult, QuerySplit, ResolvedTarget, SplitRequest

__all__ = [
    "BoundarySet",
    "ColumnSchema",
    "ColumnType",
    "IndexSchema",
    "MinMaxResult",
    "QuerySplit",
    "ResolvedTarget",
    "SplitRequest",
    "TableSchema",
]
