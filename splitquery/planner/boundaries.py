"""Split boundary computation.

Boundaries are interior values that cut ``[min, max]`` of the split column into
``split_count`` contiguous ranges. Numeric columns are divided linearly between
the observed minimum and maximum; binary columns are divided over a fixed
32-bit key space, which is a coarse heuristic rather than a histogram.
"""

from __future__ import annotations

import logging
import math
import struct
from dataclasses import dataclass
from typing import Any, Callable

from splitquery.errors import NumericParseError, RangeTooSmallError
from splitquery.models.schema import ColumnType
from splitquery.models.split import BoundarySet, MinMaxResult

logger = logging.getLogger(__name__)

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
UINT64_MAX = (1 << 64) - 1
BINARY_KEY_SPACE = 1 << 32


@dataclass(frozen=True, slots=True)
class NumericKind:
    column_type: ColumnType
    parse: Callable[[Any], Any]
    # (low, high, split_count) -> interval
    interval: Callable[[Any, Any, int], Any]
    # (low, high, interval, i, split_count) -> i-th boundary
    boundary: Callable[[Any, Any, Any, int, int], Any]


def _as_text(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        try:
            return bytes(value).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise NumericParseError(f"Could not decode {value!r} as text.") from exc
    return str(value)


def _integer_parser(*, lower: int, upper: int, label: str) -> Callable[[Any], int]:
    def _parse(value: Any) -> int:
        text = _as_text(value).strip()
        try:
            parsed = int(text)
        except ValueError as exc:
            raise NumericParseError(f"Could not parse {text!r} as {label}.") from exc
        if not lower <= parsed <= upper:
            raise NumericParseError(f"Value {parsed} is out of range for {label}.")
        return parsed

    return _parse


def _parse_float(value: Any) -> float:
    text = _as_text(value).strip()
    try:
        parsed = float(text)
    except ValueError as exc:
        raise NumericParseError(f"Could not parse {text!r} as float64.") from exc
    if not math.isfinite(parsed):
        raise NumericParseError(f"Value {text!r} is not a finite float64.")
    return parsed


def _integer_interval(low: int, high: int, split_count: int) -> int:
    return (high - low) // split_count


def _integer_boundary(low: int, high: int, interval: int, i: int, split_count: int) -> int:
    return low + interval * i


def _float_interval(low: float, high: float, split_count: int) -> float:
    # high - low overflows to inf for ranges wider than the largest finite float
    return high / split_count - low / split_count


def _float_boundary(low: float, high: float, interval: float, i: int, split_count: int) -> float:
    return (low / split_count) * (split_count - i) + (high / split_count) * i


SIGNED_64 = NumericKind(
    column_type=ColumnType.SIGNED,
    parse=_integer_parser(lower=INT64_MIN, upper=INT64_MAX, label="int64"),
    interval=_integer_interval,
    boundary=_integer_boundary,
)
UNSIGNED_64 = NumericKind(
    column_type=ColumnType.UNSIGNED,
    parse=_integer_parser(lower=0, upper=UINT64_MAX, label="uint64"),
    interval=_integer_interval,
    boundary=_integer_boundary,
)
FLOAT_64 = NumericKind(
    column_type=ColumnType.FLOAT,
    parse=_parse_float,
    interval=_float_interval,
    boundary=_float_boundary,
)

_NUMERIC_KINDS: dict[ColumnType, NumericKind] = {
    ColumnType.SIGNED: SIGNED_64,
    ColumnType.UNSIGNED: UNSIGNED_64,
    ColumnType.FLOAT: FLOAT_64,
}


def compute_boundaries(
    column_type: ColumnType | str,
    min_max: MinMaxResult | None,
    split_count: int,
) -> BoundarySet:
    """Return the interior boundaries and per-split row estimate for a column.

    Raises ``NumericParseError`` for malformed min/max values and
    ``RangeTooSmallError`` when the range cannot be cut ``split_count`` ways.
    """
    resolved_type = _resolve_column_type(column_type)
    split_count = max(int(split_count), 1)
    if split_count == 1:
        return BoundarySet(column_type=resolved_type)

    if resolved_type == ColumnType.BINARY:
        return _binary_boundaries(split_count)

    kind = _NUMERIC_KINDS.get(resolved_type)
    if kind is None:
        logger.debug("Column type %s has no boundary strategy", resolved_type.value)
        return BoundarySet(column_type=resolved_type)

    pair = min_max.single_row() if min_max is not None else None
    if pair is None:
        return BoundarySet(column_type=resolved_type)
    return _linear_boundaries(kind, pair[0], pair[1], split_count)


def _linear_boundaries(kind: NumericKind, low_value: Any, high_value: Any, split_count: int) -> BoundarySet:
    low = kind.parse(low_value)
    high = kind.parse(high_value)
    if low > high:
        raise NumericParseError(f"Minimum {low!r} is greater than maximum {high!r}.")

    interval = kind.interval(low, high, split_count)
    if interval == 0:
        raise RangeTooSmallError(split_count=split_count, min_value=low, max_value=high)

    values = tuple(kind.boundary(low, high, interval, i, split_count) for i in range(1, split_count))
    # float rounding can collapse neighbouring boundaries on very narrow ranges
    if any(current <= previous for previous, current in zip(values, values[1:])):
        raise RangeTooSmallError(split_count=split_count, min_value=low, max_value=high)

    return BoundarySet(column_type=kind.column_type, values=values, row_count=int(interval))


def _binary_boundaries(split_count: int) -> BoundarySet:
    split_size = BINARY_KEY_SPACE // split_count
    if split_size == 0:
        raise RangeTooSmallError(split_count=split_count, min_value=0, max_value=BINARY_KEY_SPACE - 1)
    values = tuple(struct.pack("!I", split_size * i) for i in range(1, split_count))
    return BoundarySet(column_type=ColumnType.BINARY, values=values, row_count=split_size)


def _resolve_column_type(column_type: ColumnType | str) -> ColumnType:
    if isinstance(column_type, ColumnType):
        return column_type
    try:
        return ColumnType(str(column_type).lower())
    except ValueError:
        return ColumnType.from_sql_type(str(column_type))
