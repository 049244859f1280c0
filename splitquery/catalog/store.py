from __future__ import annotations

from typing import Iterable

import yaml

from splitquery.models.schema import TableSchema


class SchemaCatalog:
    """Answers table lookups for the validator."""

    def get_table(self, name: str) -> TableSchema | None:
        raise NotImplementedError


class InMemorySchemaCatalog(SchemaCatalog):
    """In-memory table registry keyed by table name."""

    def __init__(self, tables: Iterable[TableSchema] | None = None) -> None:
        self._tables: dict[str, TableSchema] = {}
        for table in tables or []:
            self.upsert(table)

    def get_table(self, name: str) -> TableSchema | None:
        return self._tables.get(name)

    def upsert(self, table: TableSchema) -> None:
        self._tables[table.name] = table

    def remove(self, name: str) -> None:
        self._tables.pop(name, None)

    def table_names(self) -> list[str]:
        return sorted(self._tables)


def load_catalog_yaml(yaml_text: str) -> InMemorySchemaCatalog:
    """Build a catalog from a ``tables:`` YAML document."""
    data = yaml.safe_load(yaml_text) or {}
    if not isinstance(data, dict):
        raise ValueError("Catalog YAML must be a mapping with a 'tables' key.")
    entries = data.get("tables") or []
    if isinstance(entries, dict):
        entries = [{"name": name, **(body or {})} for name, body in entries.items()]
    return InMemorySchemaCatalog(TableSchema.model_validate(entry) for entry in entries)
