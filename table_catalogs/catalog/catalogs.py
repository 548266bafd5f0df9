"""Table dispatcher: routes load/create/drop to a location or a catalog.

A call is location-addressed when a table location is given; otherwise the
catalog named by ``catalog-name`` (or the default catalog) is resolved and
the table identifier is looked up there. No state survives a call: each one
builds its own catalog and closes it before returning.
"""

from typing import Dict, List, Mapping, Optional

from ..backends.hadoop import HadoopTables
from ..config import (
    Configuration,
    CATALOG_NAME,
    LOCATION,
    NAME,
    PARTITION_SPEC,
    TABLE_IDENTIFIER,
    TABLE_LOCATION,
    TABLE_SCHEMA,
)
from ..exceptions import MissingValueError
from ..utils.logging import get_contextual_logger
from .factory import is_location_catalog, require_catalog
from .table import Table, TableIdentifier

# Controlling keys that are never stored as table properties
RESERVED_PROPERTIES = frozenset([TABLE_SCHEMA, PARTITION_SPEC, LOCATION, NAME, CATALOG_NAME])


def _lookup(
    props: Optional[Mapping[str, str]], prop_key: str, config: Configuration, config_key: str
) -> Optional[str]:
    if props:
        value = props.get(prop_key)
        if value is not None:
            return value
    return config.get(config_key)


def _logger(catalog_name: Optional[str]):
    return get_contextual_logger(__name__, {"catalog": catalog_name or "default"})


def load_table(config: Configuration, props: Optional[Mapping[str, str]] = None) -> Table:
    """Load a table by location or by catalog identifier.

    Lookups check ``props`` (keys ``location``, ``name``, ``catalog-name``)
    before ``config`` (keys ``table.location``, ``table.identifier``,
    ``catalog-name``), so one configuration can serve many calls.
    create_table and drop_table read ``catalog-name`` from the table property
    set only, so a ``catalog-name`` in ``config`` affects loads alone.

    Args:
        config: Configuration view
        props: Optional per-call table properties

    Returns:
        The loaded table

    Raises:
        ValueError: If the location or identifier needed is not set
        NoSuchTableError: If the table does not exist
    """
    location = _lookup(props, LOCATION, config, TABLE_LOCATION)
    identifier = _lookup(props, NAME, config, TABLE_IDENTIFIER)
    catalog_name = _lookup(props, CATALOG_NAME, config, CATALOG_NAME)
    logger = _logger(catalog_name)

    if location is not None:
        logger.debug(f"Loading table at location '{location}'")
        return HadoopTables(config).load(location)

    if is_location_catalog(config, catalog_name):
        raise ValueError("Table location not set")
    if identifier is None:
        raise ValueError("Table identifier not set")

    table_id = TableIdentifier.parse(identifier)
    with require_catalog(config, catalog_name) as catalog:
        logger.debug(f"Loading table {table_id} from {catalog!r}")
        return catalog.load_table(table_id)


def create_table(config: Configuration, table_props: Mapping[str, str]) -> Table:
    """Create a table described by ``table_props``.

    Args:
        config: Configuration view
        table_props: Table property set; ``table.schema`` is required,
            ``table.partition-spec`` optional, ``location`` or ``name``
            (plus optional ``catalog-name``) address the table and every
            other key becomes a table property

    Returns:
        The created table

    Raises:
        MissingValueError: If schema, location or identifier is not set
        AlreadyExistsError: If the table already exists
    """
    schema = table_props.get(TABLE_SCHEMA)
    if schema is None:
        raise MissingValueError("Table schema not set")
    spec = table_props.get(PARTITION_SPEC)

    properties: Dict[str, str] = {}
    for key, value in table_props.items():
        if key not in RESERVED_PROPERTIES:
            properties[str(key)] = str(value)

    location = table_props.get(LOCATION)
    catalog_name = table_props.get(CATALOG_NAME)
    logger = _logger(catalog_name)

    if location is not None:
        logger.info(f"Creating table at location '{location}'")
        return HadoopTables(config).create(schema, spec, properties, location)

    if is_location_catalog(config, catalog_name):
        raise MissingValueError("Table location not set")
    name = table_props.get(NAME)
    if name is None:
        raise MissingValueError("Table identifier not set")

    table_id = TableIdentifier.parse(name)
    with require_catalog(config, catalog_name) as catalog:
        logger.info(f"Creating table {table_id} in {catalog!r}")
        return catalog.create_table(table_id, schema, spec, None, properties)


def drop_table(config: Configuration, table_props: Mapping[str, str]) -> None:
    """Drop the table addressed by ``table_props``, including its data.

    Args:
        config: Configuration view
        table_props: Table property set with ``location``, or ``name`` and
            an optional ``catalog-name``

    Raises:
        MissingValueError: If location or identifier is not set
        NoSuchTableError: If the table does not exist
    """
    location = table_props.get(LOCATION)
    catalog_name = table_props.get(CATALOG_NAME)
    logger = _logger(catalog_name)

    if location is not None:
        logger.info(f"Dropping table at location '{location}'")
        HadoopTables(config).drop(location, purge=True)
        return

    if is_location_catalog(config, catalog_name):
        raise MissingValueError("Table location not set")
    name = table_props.get(NAME)
    if name is None:
        raise MissingValueError("Table identifier not set")

    table_id = TableIdentifier.parse(name)
    with require_catalog(config, catalog_name) as catalog:
        logger.info(f"Dropping table {table_id} from {catalog!r}")
        catalog.drop_table(table_id, purge=True)


def list_tables(
    config: Configuration, namespace: str, catalog_name: Optional[str] = None
) -> List[TableIdentifier]:
    """List the tables of ``namespace`` in a catalog.

    Raises:
        ValueError: If location-only addressing is selected ("Catalog not set")
    """
    with require_catalog(config, catalog_name) as catalog:
        return catalog.list_tables(namespace)
