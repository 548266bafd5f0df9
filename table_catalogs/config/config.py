"""Configuration views and key scheme for catalog resolution."""

from collections.abc import Mapping
from typing import Any, Dict, Iterator, Optional
from pathlib import Path
import yaml

# Root under which every catalog property lives
CATALOG_CONFIG_PREFIX = "iceberg.catalog."

# Catalog property names, relative to the catalog prefix
CATALOG_TYPE = "type"
CATALOG_IMPL = "catalog-impl"
WAREHOUSE_LOCATION = "warehouse"
URI = "uri"
DEFAULT_TYPE = "default-type"

CATALOG_TYPE_HIVE = "hive"
CATALOG_TYPE_HADOOP = "hadoop"

# Per-call keys
CATALOG_NAME = "catalog-name"
TABLE_LOCATION = "table.location"
TABLE_IDENTIFIER = "table.identifier"
TABLE_SCHEMA = "table.schema"
PARTITION_SPEC = "table.partition-spec"

# Addressing keys of a table property set
LOCATION = "location"
NAME = "name"

# Catalog name (and un-namespaced type value) selecting location-only addressing
LOCATION_SENTINEL = "location_based_table"
DEFAULT_CATALOG_NAME = "default_iceberg"


def catalog_property_key(catalog_name: Optional[str], key: str) -> str:
    """Build the configuration key of a catalog property.

    Args:
        catalog_name: Catalog name, or None/empty for the default catalog
        key: Relative property name such as ``type`` or ``warehouse``

    Returns:
        ``iceberg.catalog.<name>.<key>``, or ``iceberg.catalog.<key>`` when
        no catalog name is given
    """
    if catalog_name:
        return f"{CATALOG_CONFIG_PREFIX}{catalog_name}.{key}"
    return f"{CATALOG_CONFIG_PREFIX}{key}"


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class Configuration(Mapping):
    """Immutable, ordered key to string mapping of engine configuration."""

    def __init__(self, values: Optional[Mapping] = None):
        """Initialize configuration view.

        Args:
            values: Initial entries; non-string values are stringified
        """
        self._values: Dict[str, str] = {}
        if values:
            for key, value in values.items():
                if value is None:
                    continue
                self._values[str(key)] = _stringify(value)

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def with_overrides(self, overrides: Optional[Mapping]) -> "Configuration":
        """Return a new view in which ``overrides`` take precedence.

        Args:
            overrides: Entries to layer over this configuration

        Returns:
            New configuration; this one is left untouched
        """
        merged: Dict[str, Any] = dict(self._values)
        if overrides:
            merged.update(overrides)
        return Configuration(merged)

    def with_prefix(self, prefix: str) -> Dict[str, str]:
        """Collect entries under ``prefix`` with the prefix stripped."""
        subset = {}
        for key, value in self._values.items():
            if key.startswith(prefix):
                subset[key[len(prefix):]] = value
        return subset

    def __repr__(self) -> str:
        return f"Configuration(entries={len(self._values)})"


def _flatten(data: Mapping, parent: str, out: Dict[str, Any]) -> None:
    for key, value in data.items():
        full_key = f"{parent}.{key}" if parent else str(key)
        if isinstance(value, Mapping):
            _flatten(value, full_key, out)
        else:
            out[full_key] = value


def load_config(config_path: str) -> Configuration:
    """Load a configuration view from a YAML file.

    Nested mappings are flattened into dotted keys, so both spellings below
    produce the key ``iceberg.catalog.prod.type``.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Parsed configuration

    Example YAML format:
        catalog-name: prod
        iceberg:
          catalog:
            prod:
              type: hadoop
              warehouse: s3://bucket/warehouse
        iceberg.catalog.prod.type: hadoop
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        return Configuration()
    if not isinstance(data, Mapping):
        raise ValueError(f"Config file must contain a mapping: {config_path}")

    flat: Dict[str, Any] = {}
    _flatten(data, "", flat)
    return Configuration(flat)
