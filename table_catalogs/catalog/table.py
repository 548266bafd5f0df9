"""Table identifiers and table handles."""

import json
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

UNPARTITIONED_SPEC = json.dumps({"spec-id": 0, "fields": []})


@dataclass(frozen=True)
class TableIdentifier:
    """Namespace-qualified table name."""

    namespace: Tuple[str, ...]
    name: str

    @classmethod
    def parse(cls, identifier: str) -> "TableIdentifier":
        """Parse a dotted identifier such as ``ns.table`` or ``table``.

        Args:
            identifier: Dotted identifier string

        Returns:
            Parsed identifier

        Raises:
            ValueError: If the identifier is empty or has empty parts
        """
        if not identifier:
            raise ValueError("Invalid table identifier: empty")
        parts = identifier.split(".")
        for part in parts:
            if not part:
                raise ValueError(f"Invalid table identifier: {identifier}")
        return cls(namespace=tuple(parts[:-1]), name=parts[-1])

    @classmethod
    def of(cls, *parts: str) -> "TableIdentifier":
        """Build an identifier from its parts, the last one being the table."""
        if not parts:
            raise ValueError("Invalid table identifier: empty")
        return cls(namespace=tuple(parts[:-1]), name=parts[-1])

    def has_namespace(self) -> bool:
        return len(self.namespace) > 0

    def __str__(self) -> str:
        return ".".join(self.namespace + (self.name,))


@dataclass
class Table:
    """Snapshot of a table's current metadata.

    Holds no catalog connection, so it stays usable after the catalog that
    produced it has been closed.
    """

    location: str
    schema: str
    spec: str = UNPARTITIONED_SPEC
    properties: Dict[str, str] = field(default_factory=dict)
    identifier: Optional[TableIdentifier] = None
    metadata_location: Optional[str] = None
    table_uuid: Optional[str] = None
    format_version: int = 1
    last_updated_ms: int = 0

    def name(self) -> str:
        """Identifier for catalog tables, location for path-based ones."""
        if self.identifier is not None:
            return str(self.identifier)
        return self.location

    def describe(self) -> Dict[str, object]:
        """JSON-friendly summary of the table."""
        return {
            "name": self.name(),
            "location": self.location,
            "metadata_location": self.metadata_location,
            "table_uuid": self.table_uuid,
            "format_version": self.format_version,
            "last_updated_ms": self.last_updated_ms,
            "schema": json.loads(self.schema),
            "partition_spec": json.loads(self.spec),
            "properties": dict(self.properties),
        }

    def __repr__(self) -> str:
        return f"Table({self.name()}, location={self.location})"
