from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, Field, model_validator


_SIGNED_TYPES = {
    "tinyint",
    "smallint",
    "mediumint",
    "int",
    "integer",
    "bigint",
    "int8",
    "int16",
    "int24",
    "int32",
    "int64",
}
_UNSIGNED_TYPES = {"uint8", "uint16", "uint24", "uint32", "uint64"}
_FLOAT_TYPES = {"float", "double", "real", "float32", "float64"}
_BINARY_TYPES = {"binary", "varbinary", "blob", "tinyblob", "mediumblob", "longblob", "bytea"}


class ColumnType(str, Enum):
    SIGNED = "signed"
    UNSIGNED = "unsigned"
    FLOAT = "float"
    BINARY = "binary"
    OTHER = "other"

    @classmethod
    def from_sql_type(cls, type_name: str) -> "ColumnType":
        """Map a declared SQL type such as ``BIGINT UNSIGNED`` or ``VARBINARY(16)`` to its family."""
        words = re.sub(r"\(.*?\)", " ", (type_name or "").lower()).split()
        if not words:
            return cls.OTHER
        base = words[0]
        if base in _SIGNED_TYPES:
            return cls.UNSIGNED if "unsigned" in words[1:] else cls.SIGNED
        if base in _UNSIGNED_TYPES:
            return cls.UNSIGNED
        if base in _FLOAT_TYPES:
            return cls.FLOAT
        if base in _BINARY_TYPES:
            return cls.BINARY
        return cls.OTHER


class ColumnSchema(BaseModel):
    name: str
    data_type: str


class IndexSchema(BaseModel):
    name: str
    columns: list[str] = Field(default_factory=list)


class TableSchema(BaseModel):
    name: str
    primary_key_columns: list[str] = Field(default_factory=list)
    indexes: list[IndexSchema] = Field(default_factory=list)
    columns: list[ColumnSchema] = Field(default_factory=list)

    @model_validator(mode="after")
    def _validate_index_columns(self) -> "TableSchema":
        for index in self.indexes:
            if not index.columns:
                raise ValueError(f"Index '{index.name}' on table '{self.name}' has no columns.")
        return self

    def indexes_with_primary(self) -> list[IndexSchema]:
        if not self.primary_key_columns:
            return list(self.indexes)
        primary = IndexSchema(name="PRIMARY", columns=list(self.primary_key_columns))
        return [primary, *self.indexes]

    def find_indexed_column(self, column: str) -> str | None:
        """Return the catalog spelling of ``column`` if any index covers it."""
        wanted = column.lower()
        for index in self.indexes_with_primary():
            for candidate in index.columns:
                if candidate.lower() == wanted:
                    return candidate
        return None

    def column_type(self, column: str) -> ColumnType | None:
        wanted = column.lower()
        for declared in self.columns:
            if declared.name.lower() == wanted:
                return ColumnType.from_sql_type(declared.data_type)
        return None
