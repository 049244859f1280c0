from splitquery.catalog.store import InMemorySchemaCatalog, SchemaCatalog, load_catalog_yaml

__all__ = ["InMemorySchemaCatalog", "SchemaCatalog", "load_catalog_yaml"]
