"""Configuration management."""

from .config import (
    Configuration,
    catalog_property_key,
    load_config,
    CATALOG_CONFIG_PREFIX,
    CATALOG_TYPE,
    CATALOG_IMPL,
    WAREHOUSE_LOCATION,
    URI,
    DEFAULT_TYPE,
    CATALOG_TYPE_HIVE,
    CATALOG_TYPE_HADOOP,
    CATALOG_NAME,
    TABLE_LOCATION,
    TABLE_IDENTIFIER,
    TABLE_SCHEMA,
    PARTITION_SPEC,
    LOCATION,
    NAME,
    LOCATION_SENTINEL,
    DEFAULT_CATALOG_NAME,
)

__all__ = [
    "Configuration",
    "catalog_property_key",
    "load_config",
    "CATALOG_CONFIG_PREFIX",
    "CATALOG_TYPE",
    "CATALOG_IMPL",
    "WAREHOUSE_LOCATION",
    "URI",
    "DEFAULT_TYPE",
    "CATALOG_TYPE_HIVE",
    "CATALOG_TYPE_HADOOP",
    "CATALOG_NAME",
    "TABLE_LOCATION",
    "TABLE_IDENTIFIER",
    "TABLE_SCHEMA",
    "PARTITION_SPEC",
    "LOCATION",
    "NAME",
    "LOCATION_SENTINEL",
    "DEFAULT_CATALOG_NAME",
]
