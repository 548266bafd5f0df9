"""Filesystem-backed tables: the warehouse catalog and location-only tables."""

from typing import Dict, List, Optional
import logging

import pyarrow.fs as pafs

from ..catalog.table import Table, TableIdentifier
from ..config import Configuration, WAREHOUSE_LOCATION
from ..exceptions import AlreadyExistsError, NoSuchTableError
from .metadata import TableMetadataFiles, join_location, resolve_filesystem

logger = logging.getLogger(__name__)


class HadoopTables:
    """Tables addressed directly by storage location."""

    def __init__(self, conf: Optional[Configuration] = None):
        self.conf = conf if conf is not None else Configuration()

    def load(self, location: str) -> Table:
        table = TableMetadataFiles(location).read()
        if table is None:
            raise NoSuchTableError(f"Table does not exist at location: {location}")
        return table

    def create(
        self,
        schema: str,
        spec: Optional[str],
        properties: Optional[Dict[str, str]],
        location: str,
    ) -> Table:
        files = TableMetadataFiles(location)
        if files.exists():
            raise AlreadyExistsError(f"Table already exists at location: {location}")
        logger.info(f"Creating table at location '{location}'")
        return files.write_new(schema, spec, properties)

    def drop(self, location: str, purge: bool = True) -> None:
        files = TableMetadataFiles(location)
        if not files.exists():
            raise NoSuchTableError(f"Table does not exist at location: {location}")
        logger.info(f"Dropping table at location '{location}' (purge={purge})")
        files.delete(purge=purge)

    def exists(self, location: str) -> bool:
        return TableMetadataFiles(location).exists()

    def __repr__(self) -> str:
        return "HadoopTables()"


class HadoopCatalog:
    """Catalog deriving table locations from a warehouse root.

    A table ``ns1.ns2.tbl`` lives at ``<warehouse>/ns1/ns2/tbl``. The catalog
    can be built either as ``HadoopCatalog(conf, warehouse)`` or with no
    arguments followed by ``initialize(name, properties)``.
    """

    def __init__(
        self,
        conf: Optional[Configuration] = None,
        warehouse_location: Optional[str] = None,
        name: str = "hadoop",
        properties: Optional[Dict[str, str]] = None,
    ):
        self.conf = conf if conf is not None else Configuration()
        self.name = name
        self.properties: Dict[str, str] = dict(properties or {})
        self.warehouse_location: Optional[str] = None
        if warehouse_location is not None:
            self._set_warehouse(warehouse_location)

    def initialize(self, name: str, properties: Dict[str, str]) -> None:
        """Configure a catalog built with the no-argument constructor."""
        self.name = name
        self.properties = dict(properties)
        warehouse = self.properties.get(WAREHOUSE_LOCATION)
        if not warehouse:
            raise ValueError(
                "Cannot initialize HadoopCatalog because warehouse location is not set"
            )
        self._set_warehouse(warehouse)

    def _set_warehouse(self, warehouse_location: str) -> None:
        if not warehouse_location:
            raise ValueError(
                "Cannot initialize HadoopCatalog because warehouse location is not set"
            )
        self.warehouse_location = warehouse_location.rstrip("/")

    def _warehouse(self) -> str:
        if self.warehouse_location is None:
            raise ValueError(f"HadoopCatalog {self.name} is not initialized")
        return self.warehouse_location

    def default_location(self, identifier: TableIdentifier) -> str:
        return join_location(self._warehouse(), *identifier.namespace, identifier.name)

    def load_table(self, identifier: TableIdentifier) -> Table:
        location = self.default_location(identifier)
        table = TableMetadataFiles(location).read(identifier)
        if table is None:
            raise NoSuchTableError(f"Table does not exist: {identifier}")
        return table

    def create_table(
        self,
        identifier: TableIdentifier,
        schema: str,
        spec: Optional[str] = None,
        location: Optional[str] = None,
        properties: Optional[Dict[str, str]] = None,
    ) -> Table:
        table_location = self.default_location(identifier)
        if location is not None and location.rstrip("/") != table_location:
            raise ValueError(
                f"Cannot set a custom location for a path-based table. "
                f"Expected {table_location} but got {location}"
            )
        files = TableMetadataFiles(table_location)
        if files.exists():
            raise AlreadyExistsError(f"Table already exists: {identifier}")
        logger.info(f"Creating table {identifier} in catalog {self.name}")
        return files.write_new(schema, spec, properties, identifier)

    def drop_table(self, identifier: TableIdentifier, purge: bool = True) -> None:
        files = TableMetadataFiles(self.default_location(identifier))
        if not files.exists():
            raise NoSuchTableError(f"Table does not exist: {identifier}")
        logger.info(f"Dropping table {identifier} from catalog {self.name}")
        # table directory is removed regardless of purge
        files.delete(purge=True)

    def list_tables(self, namespace: str) -> List[TableIdentifier]:
        parts = [part for part in namespace.split(".") if part]
        fs, path = resolve_filesystem(join_location(self._warehouse(), *parts))
        if fs.get_file_info(path).type != pafs.FileType.Directory:
            return []
        identifiers = []
        for info in fs.get_file_info(pafs.FileSelector(path, recursive=False)):
            if info.type != pafs.FileType.Directory:
                continue
            candidate = TableIdentifier(namespace=tuple(parts), name=info.base_name)
            if self.table_exists(candidate):
                identifiers.append(candidate)
        identifiers.sort(key=str)
        return identifiers

    def table_exists(self, identifier: TableIdentifier) -> bool:
        return TableMetadataFiles(self.default_location(identifier)).exists()

    def close(self) -> None:
        pass

    def __enter__(self) -> "HadoopCatalog":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False

    def __repr__(self) -> str:
        return f"HadoopCatalog(name={self.name}, location={self.warehouse_location})"
