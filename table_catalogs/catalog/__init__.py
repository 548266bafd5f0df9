"""Catalog resolution and table dispatch."""

from .table import Table, TableIdentifier, UNPARTITIONED_SPEC
from .base import Catalog, LocationTables
from .factory import (
    catalog_properties,
    catalog_type,
    is_hive_catalog,
    is_location_catalog,
    load_catalog,
    require_catalog,
)
from .catalogs import create_table, drop_table, list_tables, load_table

__all__ = [
    "Table",
    "TableIdentifier",
    "UNPARTITIONED_SPEC",
    "Catalog",
    "LocationTables",
    "catalog_properties",
    "catalog_type",
    "is_hive_catalog",
    "is_location_catalog",
    "load_catalog",
    "require_catalog",
    "create_table",
    "drop_table",
    "list_tables",
    "load_table",
]
