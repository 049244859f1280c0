from splitquery.connectors.base import SplitSource
from splitquery.connectors.callback import CallbackSplitSource, QueryRunner
from splitquery.connectors.mock import MockArrowSplitSource, column_type_from_arrow

__all__ = [
    "CallbackSplitSource",
    "MockArrowSplitSource",
    "QueryRunner",
    "SplitSource",
    "column_type_from_arrow",
]
