"""Tests for catalog type resolution and construction."""

import logging

import pytest

from table_catalogs.backends.hadoop import HadoopCatalog
from table_catalogs.backends.hive import HiveCatalog
from table_catalogs.catalog.factory import (
    catalog_properties,
    catalog_type,
    is_hive_catalog,
    is_location_catalog,
    load_catalog,
    require_catalog,
)
from table_catalogs.config import (
    CATALOG_IMPL,
    CATALOG_NAME,
    CATALOG_TYPE,
    DEFAULT_TYPE,
    LOCATION_SENTINEL,
    URI,
    WAREHOUSE_LOCATION,
    catalog_property_key,
)
from table_catalogs.exceptions import UnsupportedOperationError

from custom_catalogs import (
    CustomHadoopCatalog,
    FailingCatalog,
    InitializedHadoopCatalog,
    NotACatalog,
    ThreeArgumentCatalog,
)
from helpers import class_path

CATALOG = "barCatalog"


def _props():
    return {CATALOG_NAME: CATALOG}


def test_load_catalog_default(conf):
    """A name without any type falls back to the Hive catalog."""
    catalog = load_catalog(conf, CATALOG)

    assert isinstance(catalog, HiveCatalog)
    assert catalog.name == CATALOG
    assert is_hive_catalog(conf, _props()) is True


def test_load_catalog_hive(conf):
    conf = conf.with_overrides({catalog_property_key(CATALOG, CATALOG_TYPE): "hive"})

    catalog = load_catalog(conf, CATALOG)

    assert isinstance(catalog, HiveCatalog)
    assert is_hive_catalog(conf, _props()) is True


def test_load_catalog_hive_receives_namespaced_properties(conf, tmp_path):
    uri = str(tmp_path / "metastore.duckdb")
    conf = conf.with_overrides(
        {
            catalog_property_key(CATALOG, CATALOG_TYPE): "hive",
            catalog_property_key(CATALOG, URI): uri,
            catalog_property_key(CATALOG, WAREHOUSE_LOCATION): "/tmp/hive",
        }
    )

    catalog = load_catalog(conf, CATALOG)

    assert catalog.uri == uri
    assert catalog.warehouse_location == "/tmp/hive"


def test_load_catalog_type_is_case_insensitive(conf):
    conf = conf.with_overrides({catalog_property_key(CATALOG, CATALOG_TYPE): "HIVE"})

    assert isinstance(load_catalog(conf, CATALOG), HiveCatalog)
    assert catalog_type(conf, CATALOG) == "hive"


def test_load_catalog_hadoop(conf):
    conf = conf.with_overrides(
        {
            catalog_property_key(CATALOG, CATALOG_TYPE): "hadoop",
            catalog_property_key(CATALOG, WAREHOUSE_LOCATION): "/tmp/mylocation",
        }
    )

    catalog = load_catalog(conf, CATALOG)

    assert isinstance(catalog, HadoopCatalog)
    assert repr(catalog) == "HadoopCatalog(name=barCatalog, location=/tmp/mylocation)"
    assert is_hive_catalog(conf, _props()) is False


def test_load_catalog_hadoop_requires_warehouse(conf):
    conf = conf.with_overrides({catalog_property_key(CATALOG, CATALOG_TYPE): "hadoop"})

    with pytest.raises(ValueError, match="warehouse location is not set"):
        load_catalog(conf, CATALOG)


def test_load_catalog_custom(conf):
    conf = conf.with_overrides(
        {
            catalog_property_key(CATALOG, CATALOG_IMPL): class_path(CustomHadoopCatalog),
            catalog_property_key(CATALOG, WAREHOUSE_LOCATION): "/tmp/mylocation",
        }
    )

    catalog = load_catalog(conf, CATALOG)

    assert isinstance(catalog, CustomHadoopCatalog)
    assert catalog.warehouse_location == "/tmp/mylocation"
    assert catalog.conf is conf
    assert catalog_type(conf, CATALOG) == "custom"
    assert is_hive_catalog(conf, _props()) is False


def test_load_catalog_custom_colon_path(conf):
    module, _, name = class_path(CustomHadoopCatalog).rpartition(".")
    conf = conf.with_overrides(
        {
            catalog_property_key(CATALOG, CATALOG_IMPL): f"{module}:{name}",
            catalog_property_key(CATALOG, WAREHOUSE_LOCATION): "/tmp/mylocation",
        }
    )

    assert isinstance(load_catalog(conf, CATALOG), CustomHadoopCatalog)


def test_load_catalog_custom_no_argument_constructor(conf):
    conf = conf.with_overrides(
        {
            catalog_property_key(CATALOG, CATALOG_IMPL): class_path(InitializedHadoopCatalog),
            catalog_property_key(CATALOG, WAREHOUSE_LOCATION): "/tmp/mylocation",
        }
    )

    catalog = load_catalog(conf, CATALOG)

    assert isinstance(catalog, InitializedHadoopCatalog)
    assert catalog.name == CATALOG
    assert catalog.warehouse_location == "/tmp/mylocation"


def test_load_catalog_custom_requires_warehouse(conf):
    conf = conf.with_overrides(
        {catalog_property_key(CATALOG, CATALOG_IMPL): class_path(CustomHadoopCatalog)}
    )

    with pytest.raises(ValueError, match="warehouse location is not set"):
        load_catalog(conf, CATALOG)


@pytest.mark.parametrize(
    "impl",
    [
        class_path(FailingCatalog),
        class_path(ThreeArgumentCatalog),
        class_path(NotACatalog),
        "custom_catalogs.MissingCatalog",
        "no_such_module_for_catalogs.Catalog",
        "NoModule",
    ],
)
def test_load_catalog_custom_unusable(conf, impl):
    conf = conf.with_overrides(
        {
            catalog_property_key(CATALOG, CATALOG_IMPL): impl,
            catalog_property_key(CATALOG, WAREHOUSE_LOCATION): "/tmp/mylocation",
        }
    )

    with pytest.raises(UnsupportedOperationError):
        load_catalog(conf, CATALOG)


def test_catalog_impl_wins_over_type(conf, caplog):
    conf = conf.with_overrides(
        {
            catalog_property_key(CATALOG, CATALOG_TYPE): "hive",
            catalog_property_key(CATALOG, CATALOG_IMPL): class_path(CustomHadoopCatalog),
            catalog_property_key(CATALOG, WAREHOUSE_LOCATION): "/tmp/mylocation",
        }
    )

    with caplog.at_level(logging.WARNING):
        catalog = load_catalog(conf, CATALOG)

    assert isinstance(catalog, CustomHadoopCatalog)
    assert "using catalog-impl" in caplog.text
    assert is_hive_catalog(conf, _props()) is False


def test_load_catalog_location(conf):
    assert load_catalog(conf, LOCATION_SENTINEL) is None
    assert is_location_catalog(conf, LOCATION_SENTINEL) is True
    assert catalog_type(conf, LOCATION_SENTINEL) is None
    assert is_hive_catalog(conf, {CATALOG_NAME: LOCATION_SENTINEL}) is False


def test_load_catalog_location_from_default_type(conf):
    conf = conf.with_overrides({catalog_property_key(None, CATALOG_TYPE): LOCATION_SENTINEL})

    assert load_catalog(conf) is None
    assert is_location_catalog(conf) is True


def test_sentinel_name_with_type_resolves_normally(conf):
    conf = conf.with_overrides(
        {catalog_property_key(LOCATION_SENTINEL, CATALOG_TYPE): "hive"}
    )

    assert isinstance(load_catalog(conf, LOCATION_SENTINEL), HiveCatalog)


def test_load_catalog_unknown(conf):
    conf = conf.with_overrides({catalog_property_key(CATALOG, CATALOG_TYPE): "fooType"})

    with pytest.raises(UnsupportedOperationError) as exc_info:
        load_catalog(conf, CATALOG)

    assert str(exc_info.value) == "Unknown catalog type: fooType"


def test_default_catalog_uses_unnamespaced_properties(conf, warehouse):
    conf = conf.with_overrides(
        {
            catalog_property_key(None, CATALOG_TYPE): "hadoop",
            catalog_property_key(None, WAREHOUSE_LOCATION): warehouse,
            catalog_property_key(CATALOG, CATALOG_TYPE): "hive",
        }
    )

    catalog = load_catalog(conf)

    assert isinstance(catalog, HadoopCatalog)
    assert catalog.name == "default_iceberg"
    assert catalog_properties(conf) == {"type": "hadoop", "warehouse": warehouse}
    assert catalog_properties(conf, CATALOG) == {"type": "hive"}


def test_default_type_is_configurable(conf):
    conf = conf.with_overrides(
        {
            catalog_property_key(None, DEFAULT_TYPE): "hadoop",
            catalog_property_key(CATALOG, WAREHOUSE_LOCATION): "/tmp/mylocation",
        }
    )

    assert isinstance(load_catalog(conf, CATALOG), HadoopCatalog)
    assert is_hive_catalog(conf, _props()) is False
    assert DEFAULT_TYPE not in catalog_properties(conf)


def test_every_call_builds_a_new_catalog(conf):
    first = load_catalog(conf, CATALOG)
    second = load_catalog(conf, CATALOG)

    assert first is not second


def test_require_catalog(conf):
    assert isinstance(require_catalog(conf, CATALOG), HiveCatalog)

    with pytest.raises(ValueError, match="^Catalog not set$"):
        require_catalog(conf, LOCATION_SENTINEL)


def test_is_hive_catalog_without_properties(conf):
    assert is_hive_catalog(conf, None) is True
    assert is_hive_catalog(conf, {}) is True


def test_is_hive_catalog_unknown_type_is_false(conf):
    conf = conf.with_overrides({catalog_property_key(CATALOG, CATALOG_TYPE): "fooType"})

    assert is_hive_catalog(conf, _props()) is False
    with pytest.raises(UnsupportedOperationError):
        catalog_type(conf, CATALOG)
