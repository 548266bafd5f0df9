"""Catalog resolution and table lifecycle dispatch."""

from .config import Configuration, load_config
from .catalog import (
    Table,
    TableIdentifier,
    create_table,
    drop_table,
    is_hive_catalog,
    list_tables,
    load_catalog,
    load_table,
)
from .exceptions import (
    AlreadyExistsError,
    MissingValueError,
    NoSuchTableError,
    UnsupportedOperationError,
)

__version__ = "0.1.0"

__all__ = [
    "Configuration",
    "load_config",
    "Table",
    "TableIdentifier",
    "create_table",
    "drop_table",
    "is_hive_catalog",
    "list_tables",
    "load_catalog",
    "load_table",
    "AlreadyExistsError",
    "MissingValueError",
    "NoSuchTableError",
    "UnsupportedOperationError",
]
