"""Metastore-backed catalog.

The metastore is a DuckDB database holding one row per table that points at
the table's current metadata file. Its path comes from the ``uri`` property;
without one it is ``metastore.duckdb`` under a local warehouse, or an
in-memory database when no warehouse is configured. Table files follow the
Hive warehouse convention ``<warehouse>/<database>.db/<table>``.
"""

from typing import Dict, List, Optional
import logging
import os

import duckdb

from ..catalog.table import Table, TableIdentifier
from ..config import URI, WAREHOUSE_LOCATION
from ..exceptions import AlreadyExistsError, NoSuchTableError
from .metadata import TableMetadataFiles, join_location, read_metadata_file

logger = logging.getLogger(__name__)

IN_MEMORY_METASTORE = ":memory:"
METASTORE_FILE = "metastore.duckdb"

CREATE_TABLES_SQL = """
    CREATE TABLE IF NOT EXISTS iceberg_tables (
        catalog_name VARCHAR NOT NULL,
        table_namespace VARCHAR NOT NULL,
        table_name VARCHAR NOT NULL,
        metadata_location VARCHAR NOT NULL,
        PRIMARY KEY (catalog_name, table_namespace, table_name)
    )
"""


def metastore_uri(properties: Dict[str, str]) -> str:
    """Resolve the metastore database path for a set of catalog properties.

    Raises:
        ValueError: If no ``uri`` is set and the warehouse is not a local path
    """
    uri = properties.get(URI)
    if uri:
        return uri
    warehouse = properties.get(WAREHOUSE_LOCATION)
    if not warehouse:
        return IN_MEMORY_METASTORE
    if "://" in warehouse:
        raise ValueError(
            f"Cannot initialize HiveCatalog because metastore uri is not set "
            f"for remote warehouse: {warehouse}"
        )
    return join_location(warehouse, METASTORE_FILE)


class HiveCatalog:
    """Catalog whose table pointers live in a metastore database."""

    def __init__(self, name: str = "hive", properties: Optional[Dict[str, str]] = None):
        """Initialize the catalog. The metastore is connected lazily.

        Properties may include:
            - uri: Metastore database path (default: metastore.duckdb in the
              warehouse, or :memory: without a warehouse)
            - warehouse: Root for tables created without a location
        """
        self.connection = None
        self.initialize(name, properties or {})

    def initialize(self, name: str, properties: Dict[str, str]) -> None:
        self.name = name
        self.properties = dict(properties)
        self.uri = metastore_uri(self.properties)
        self.warehouse_location = self.properties.get(WAREHOUSE_LOCATION)

    def _connect(self):
        if self.connection is None:
            logger.info(f"Connecting to metastore at '{self.uri}' for catalog {self.name}")
            if self.uri != IN_MEMORY_METASTORE:
                os.makedirs(os.path.dirname(os.path.abspath(self.uri)), exist_ok=True)
            self.connection = duckdb.connect(self.uri)
            self.connection.execute(CREATE_TABLES_SQL)
        return self.connection

    def close(self) -> None:
        """Close the metastore connection."""
        if self.connection is not None:
            self.connection.close()
            logger.info(f"Disconnected from metastore: {self.name}")
            self.connection = None

    def _database(self, identifier: TableIdentifier) -> str:
        if len(identifier.namespace) != 1:
            raise ValueError(f"Invalid Hive table identifier: {identifier}")
        return identifier.namespace[0]

    def _metadata_location(self, identifier: TableIdentifier) -> Optional[str]:
        row = self._connect().execute(
            """
            SELECT metadata_location
            FROM iceberg_tables
            WHERE catalog_name = ? AND table_namespace = ? AND table_name = ?
            """,
            [self.name, self._database(identifier), identifier.name],
        ).fetchone()
        if row is None:
            return None
        return row[0]

    def default_location(self, identifier: TableIdentifier) -> str:
        if not self.warehouse_location:
            raise ValueError(
                f"Cannot derive a location for {identifier}: warehouse location is not set"
            )
        database = self._database(identifier)
        return join_location(self.warehouse_location, f"{database}.db", identifier.name)

    def load_table(self, identifier: TableIdentifier) -> Table:
        metadata_location = self._metadata_location(identifier)
        if metadata_location is None:
            raise NoSuchTableError(f"Table does not exist: {identifier}")
        table = read_metadata_file(metadata_location, identifier)
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
        database = self._database(identifier)
        if self._metadata_location(identifier) is not None:
            raise AlreadyExistsError(f"Table already exists: {identifier}")

        table_location = location if location is not None else self.default_location(identifier)
        files = TableMetadataFiles(table_location)
        if files.exists():
            raise AlreadyExistsError(f"Table already exists at location: {table_location}")

        logger.info(f"Creating table {identifier} in catalog {self.name} at '{table_location}'")
        table = files.write_new(schema, spec, properties, identifier)
        try:
            self._connect().execute(
                "INSERT INTO iceberg_tables VALUES (?, ?, ?, ?)",
                [self.name, database, identifier.name, table.metadata_location],
            )
        except duckdb.ConstraintException as exc:
            files.delete(purge=False)
            raise AlreadyExistsError(f"Table already exists: {identifier}") from exc
        return table

    def drop_table(self, identifier: TableIdentifier, purge: bool = True) -> None:
        metadata_location = self._metadata_location(identifier)
        if metadata_location is None:
            raise NoSuchTableError(f"Table does not exist: {identifier}")
        table = read_metadata_file(metadata_location, identifier)

        logger.info(f"Dropping table {identifier} from catalog {self.name} (purge={purge})")
        self._connect().execute(
            """
            DELETE FROM iceberg_tables
            WHERE catalog_name = ? AND table_namespace = ? AND table_name = ?
            """,
            [self.name, self._database(identifier), identifier.name],
        )
        if purge and table is not None:
            TableMetadataFiles(table.location).delete(purge=True)

    def list_tables(self, namespace: str) -> List[TableIdentifier]:
        result = self._connect().execute(
            """
            SELECT table_name
            FROM iceberg_tables
            WHERE catalog_name = ? AND table_namespace = ?
            ORDER BY table_name
            """,
            [self.name, namespace],
        ).fetchall()
        identifiers = []
        for row in result:
            identifiers.append(TableIdentifier(namespace=(namespace,), name=row[0]))
        return identifiers

    def table_exists(self, identifier: TableIdentifier) -> bool:
        if len(identifier.namespace) != 1:
            return False
        return self._metadata_location(identifier) is not None

    def __enter__(self) -> "HiveCatalog":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False

    def __repr__(self) -> str:
        return f"HiveCatalog(name={self.name}, uri={self.uri})"
