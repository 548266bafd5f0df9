"""Catalog factory: turns a configuration view into a backing catalog.

Resolution for a catalog name ``N`` (properties under ``iceberg.catalog.N.``,
or under ``iceberg.catalog.`` for the default catalog), first match wins:

1. ``catalog-impl`` set: import and construct that class
2. ``type`` is ``hive`` or ``hadoop``: construct the built-in catalog
3. ``type`` set to anything else: fail
4. no type and location addressing selected: no catalog
5. no type: the default type (``iceberg.catalog.default-type``, else hive)

Every call builds a new catalog instance.
"""

import importlib
import inspect
import logging
from typing import Callable, Dict, Mapping, Optional

from ..config import (
    Configuration,
    CATALOG_CONFIG_PREFIX,
    CATALOG_IMPL,
    CATALOG_NAME,
    CATALOG_TYPE,
    CATALOG_TYPE_HADOOP,
    CATALOG_TYPE_HIVE,
    DEFAULT_CATALOG_NAME,
    DEFAULT_TYPE,
    LOCATION_SENTINEL,
    WAREHOUSE_LOCATION,
    catalog_property_key,
)
from ..exceptions import UnsupportedOperationError
from .base import Catalog

logger = logging.getLogger(__name__)

# Reported by catalog_type() when catalog-impl names the implementation
CUSTOM_CATALOG_TYPE = "custom"


def _build_hive(name: str, properties: Dict[str, str], conf: Configuration) -> Catalog:
    from ..backends.hive import HiveCatalog

    return HiveCatalog(name, properties)


def _build_hadoop(name: str, properties: Dict[str, str], conf: Configuration) -> Catalog:
    from ..backends.hadoop import HadoopCatalog

    warehouse = properties.get(WAREHOUSE_LOCATION)
    if not warehouse:
        raise ValueError(
            f"Cannot create hadoop catalog {name}: warehouse location is not set"
        )
    return HadoopCatalog(conf, warehouse, name=name, properties=properties)


CATALOG_BUILDERS: Dict[str, Callable[[str, Dict[str, str], Configuration], Catalog]] = {
    CATALOG_TYPE_HIVE: _build_hive,
    CATALOG_TYPE_HADOOP: _build_hadoop,
}


def catalog_properties(
    config: Configuration, catalog_name: Optional[str] = None
) -> Dict[str, str]:
    """Collect the properties of a catalog with the key prefix stripped.

    Args:
        config: Configuration view
        catalog_name: Catalog name, None/empty for the default catalog

    Returns:
        Property mapping such as ``{"type": "hadoop", "warehouse": "/wh"}``
    """
    if catalog_name:
        return config.with_prefix(f"{CATALOG_CONFIG_PREFIX}{catalog_name}.")

    properties = {}
    for key, value in config.with_prefix(CATALOG_CONFIG_PREFIX).items():
        # dotted remainders belong to named catalogs
        if "." in key or key == DEFAULT_TYPE:
            continue
        properties[key] = value
    return properties


def _default_type(config: Configuration) -> str:
    return config.get(catalog_property_key(None, DEFAULT_TYPE)) or CATALOG_TYPE_HIVE


def is_location_catalog(config: Configuration, catalog_name: Optional[str] = None) -> bool:
    """Whether the name (or un-named type) selects location-only addressing."""
    if catalog_name:
        if catalog_name != LOCATION_SENTINEL:
            return False
        properties = catalog_properties(config, catalog_name)
        return not properties.get(CATALOG_TYPE) and not properties.get(CATALOG_IMPL)
    default_type = config.get(catalog_property_key(None, CATALOG_TYPE))
    return default_type == LOCATION_SENTINEL


def catalog_type(config: Configuration, catalog_name: Optional[str] = None) -> Optional[str]:
    """Resolve the catalog type without constructing the catalog.

    Args:
        config: Configuration view
        catalog_name: Catalog name, None/empty for the default catalog

    Returns:
        None for location-only addressing, ``custom`` when an implementation
        class is configured, otherwise the lower-cased type keyword

    Raises:
        UnsupportedOperationError: If the type keyword is not recognized
    """
    if is_location_catalog(config, catalog_name):
        return None
    properties = catalog_properties(config, catalog_name)
    if properties.get(CATALOG_IMPL):
        return CUSTOM_CATALOG_TYPE
    provided_type = properties.get(CATALOG_TYPE)
    if provided_type:
        resolved = provided_type.lower()
    else:
        resolved = _default_type(config).lower()
    if resolved not in CATALOG_BUILDERS:
        raise UnsupportedOperationError(f"Unknown catalog type: {provided_type or resolved}")
    return resolved


def load_catalog(config: Configuration, catalog_name: Optional[str] = None) -> Optional[Catalog]:
    """Construct the catalog configured under ``catalog_name``.

    Args:
        config: Configuration view
        catalog_name: Catalog name, None/empty for the default catalog

    Returns:
        A new catalog instance, or None when location-only addressing is
        selected

    Raises:
        ValueError: If a required catalog property is missing
        UnsupportedOperationError: If the type is unknown or the
            implementation class cannot be constructed
    """
    if is_location_catalog(config, catalog_name):
        logger.debug("Location-only addressing selected, no catalog loaded")
        return None

    name = catalog_name or DEFAULT_CATALOG_NAME
    properties = catalog_properties(config, catalog_name)

    catalog_impl = properties.get(CATALOG_IMPL)
    if catalog_impl:
        provided_type = properties.get(CATALOG_TYPE)
        if provided_type:
            logger.warning(
                f"Catalog {name} sets both type={provided_type} and "
                f"catalog-impl={catalog_impl}; using catalog-impl"
            )
        return _load_custom_catalog(name, catalog_impl, properties, config)

    resolved = catalog_type(config, catalog_name)
    logger.info(f"Loading {resolved} catalog {name}")
    return CATALOG_BUILDERS[resolved](name, properties, config)


def require_catalog(config: Configuration, catalog_name: Optional[str] = None) -> Catalog:
    """Like load_catalog, but location-only addressing is an error."""
    catalog = load_catalog(config, catalog_name)
    if catalog is None:
        raise ValueError("Catalog not set")
    return catalog


def is_hive_catalog(config: Configuration, table_props: Optional[Mapping[str, str]]) -> bool:
    """Whether the catalog named in ``table_props`` resolves to the built-in Hive catalog.

    Args:
        config: Configuration view
        table_props: Table property set; its ``catalog-name`` selects the
            catalog, the default catalog is used when absent

    Returns:
        True if resolution yields the built-in Hive catalog
    """
    catalog_name = table_props.get(CATALOG_NAME) if table_props else None
    try:
        return catalog_type(config, catalog_name) == CATALOG_TYPE_HIVE
    except UnsupportedOperationError:
        # an unknown type is not the Hive catalog
        return False


def _import_class(catalog_impl: str) -> type:
    if ":" in catalog_impl:
        module_name, _, class_name = catalog_impl.partition(":")
    else:
        module_name, _, class_name = catalog_impl.rpartition(".")
    if not module_name or not class_name:
        raise UnsupportedOperationError(
            f"catalog-impl should be a full path (module.CustomCatalog), got: {catalog_impl}"
        )
    try:
        module = importlib.import_module(module_name)
        return getattr(module, class_name)
    except (ImportError, AttributeError) as exc:
        raise UnsupportedOperationError(
            f"Cannot find catalog implementation {catalog_impl}: {exc}"
        ) from exc


def _accepts(cls: type, *args) -> bool:
    try:
        inspect.signature(cls).bind(*args)
    except (TypeError, ValueError):
        return False
    return True


def _load_custom_catalog(
    name: str, catalog_impl: str, properties: Dict[str, str], conf: Configuration
) -> Catalog:
    cls = _import_class(catalog_impl)
    warehouse = properties.get(WAREHOUSE_LOCATION)

    if _accepts(cls, conf, warehouse):
        if not warehouse:
            raise ValueError(
                f"Cannot create catalog {name} with {catalog_impl}: warehouse location is not set"
            )
        logger.info(f"Loading catalog {name} from {catalog_impl}(conf, warehouse)")
        try:
            catalog = cls(conf, warehouse)
        except Exception as exc:
            raise UnsupportedOperationError(
                f"Cannot initialize catalog implementation {catalog_impl}: {exc}"
            ) from exc
    elif _accepts(cls):
        if not callable(getattr(cls, "initialize", None)):
            raise UnsupportedOperationError(
                f"Cannot initialize catalog implementation {catalog_impl}: "
                f"missing initialize(name, properties)"
            )
        logger.info(f"Loading catalog {name} from {catalog_impl}() + initialize")
        try:
            catalog = cls()
            catalog.initialize(name, properties)
        except Exception as exc:
            raise UnsupportedOperationError(
                f"Cannot initialize catalog implementation {catalog_impl}: {exc}"
            ) from exc
    else:
        raise UnsupportedOperationError(
            f"Cannot initialize catalog implementation {catalog_impl}: "
            f"no constructor accepting (conf, warehouse) or no arguments"
        )

    if not isinstance(catalog, Catalog):
        raise UnsupportedOperationError(
            f"Catalog implementation {catalog_impl} does not provide the catalog interface"
        )
    return catalog
