from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from sqlglot import exp

from splitquery.models.schema import ColumnType


class SplitRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    sql: str
    bind_variables: dict[str, Any] = Field(default_factory=dict)
    split_column: str | None = None
    split_count: int = 1

    @field_validator("split_count")
    @classmethod
    def _clamp_split_count(cls, value: int) -> int:
        return max(value, 1)

    @field_validator("split_column")
    @classmethod
    def _blank_split_column(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value.strip()


@dataclass(slots=True)
class ResolvedTarget:
    table_name: str
    primary_key_columns: list[str]
    split_column: str
    select: exp.Select
    sql: str
    dialect: str


class MinMaxResult(BaseModel):
    """Result of ``SELECT MIN(col), MAX(col)`` as returned by the executor."""

    rows: list[tuple[Any, ...]] = Field(default_factory=list)

    def single_row(self) -> tuple[Any, Any] | None:
        if len(self.rows) != 1 or len(self.rows[0]) < 2:
            return None
        low, high = self.rows[0][0], self.rows[0][1]
        if low is None or high is None:
            return None
        return low, high


@dataclass(frozen=True, slots=True)
class BoundarySet:
    column_type: ColumnType
    values: tuple[Any, ...] = ()
    row_count: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.values


class QuerySplit(BaseModel):
    model_config = ConfigDict(ser_json_bytes="base64")

    sql: str
    bind_variables: dict[str, Any] = Field(default_factory=dict)
    row_count: int = 0
