"""Capability interfaces implemented by backing catalogs."""

from typing import Dict, List, Optional, Protocol, runtime_checkable

from .table import Table, TableIdentifier


@runtime_checkable
class Catalog(Protocol):
    """A named registry mapping table identifiers to table metadata.

    Backing catalogs share no base state; anything providing these methods
    can be returned by the catalog factory.
    """

    name: str

    def load_table(self, identifier: TableIdentifier) -> Table:
        """Load a table.

        Raises:
            NoSuchTableError: If the table does not exist
        """
        ...

    def create_table(
        self,
        identifier: TableIdentifier,
        schema: str,
        spec: Optional[str] = None,
        location: Optional[str] = None,
        properties: Optional[Dict[str, str]] = None,
    ) -> Table:
        """Create a table.

        Args:
            identifier: Table identifier
            schema: Serialized schema
            spec: Serialized partition spec, None for unpartitioned
            location: Custom table location, None to derive one
            properties: Table properties

        Raises:
            AlreadyExistsError: If the table already exists
        """
        ...

    def drop_table(self, identifier: TableIdentifier, purge: bool = True) -> None:
        """Drop a table, deleting its files when ``purge`` is set.

        Raises:
            NoSuchTableError: If the table does not exist
        """
        ...

    def list_tables(self, namespace: str) -> List[TableIdentifier]:
        """List the tables of a dotted namespace."""
        ...

    def table_exists(self, identifier: TableIdentifier) -> bool:
        ...

    def close(self) -> None:
        """Release any connection held by the catalog."""
        ...

    def __enter__(self) -> "Catalog":
        ...

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        ...


@runtime_checkable
class LocationTables(Protocol):
    """Tables addressed purely by storage location, bypassing any catalog."""

    def load(self, location: str) -> Table:
        """Raises NoSuchTableError if no table exists at ``location``."""
        ...

    def create(
        self,
        schema: str,
        spec: Optional[str],
        properties: Optional[Dict[str, str]],
        location: str,
    ) -> Table:
        ...

    def drop(self, location: str, purge: bool = True) -> None:
        ...

    def exists(self, location: str) -> bool:
        ...
