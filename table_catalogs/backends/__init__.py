"""Built-in backing catalogs."""

from .hadoop import HadoopCatalog, HadoopTables
from .hive import HiveCatalog

__all__ = [
    "HadoopCatalog",
    "HadoopTables",
    "HiveCatalog",
]
