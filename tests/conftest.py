"""Shared fixtures for catalog and dispatcher tests."""

import pytest

from table_catalogs.config import Configuration


@pytest.fixture
def conf():
    """Empty configuration."""
    return Configuration()


@pytest.fixture
def warehouse(tmp_path):
    """Warehouse root inside the test's temporary directory."""
    return str(tmp_path / "hadoop" / "warehouse")
