"""Schemas, specs and configuration builders shared by the tests."""

import json

from table_catalogs.config import (
    Configuration,
    CATALOG_IMPL,
    CATALOG_NAME,
    WAREHOUSE_LOCATION,
    catalog_property_key,
)

SCHEMA = json.dumps(
    {
        "type": "struct",
        "schema-id": 0,
        "fields": [{"id": 1, "name": "foo", "required": True, "type": "string"}],
    }
)
SPEC = json.dumps(
    {
        "spec-id": 0,
        "fields": [
            {"name": "foo", "transform": "identity", "source-id": 1, "field-id": 1000}
        ],
    }
)


def class_path(cls) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def custom_catalog_config(
    catalog_name: str, warehouse_location: str, impl: str
) -> Configuration:
    """Configuration selecting ``impl`` as the active catalog."""
    return Configuration(
        {
            catalog_property_key(catalog_name, WAREHOUSE_LOCATION): warehouse_location,
            catalog_property_key(catalog_name, CATALOG_IMPL): impl,
            CATALOG_NAME: catalog_name,
        }
    )
