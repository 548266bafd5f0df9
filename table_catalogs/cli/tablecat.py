"""Command line front end for loading, creating and dropping tables."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import click

from ..catalog import (
    catalog_properties,
    catalog_type,
    create_table,
    drop_table,
    is_hive_catalog,
    list_tables,
    load_table,
)
from ..config import (
    Configuration,
    CATALOG_NAME,
    LOCATION,
    NAME,
    PARTITION_SPEC,
    TABLE_SCHEMA,
    load_config,
)
from ..exceptions import (
    AlreadyExistsError,
    NoSuchTableError,
    UnsupportedOperationError,
)
from ..utils.logging import setup_logging

# Library errors reported as a one-line CLI failure
USER_ERRORS = (
    ValueError,
    NoSuchTableError,
    AlreadyExistsError,
    UnsupportedOperationError,
)


def parse_assignments(assignments: Tuple[str, ...]) -> Dict[str, str]:
    """Parse ``key=value`` pairs given on the command line."""
    parsed: Dict[str, str] = {}
    for assignment in assignments:
        key, sep, value = assignment.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"Expected key=value, got: {assignment}")
        parsed[key.strip()] = value
    return parsed


def build_configuration(config_path: Optional[str], overrides: Tuple[str, ...]) -> Configuration:
    """Load the YAML configuration (if any) and apply ``-D`` overrides."""
    config = load_config(config_path) if config_path else Configuration()
    return config.with_overrides(parse_assignments(overrides))


def _read_text_option(value: Optional[str]) -> Optional[str]:
    # "@path" reads the value from a file
    if value is not None and value.startswith("@"):
        return Path(value[1:]).read_text()
    return value


def _table_props(
    location: Optional[str], identifier: Optional[str], catalog_name: Optional[str]
) -> Dict[str, str]:
    props: Dict[str, str] = {}
    if location is not None:
        props[LOCATION] = location
    if identifier is not None:
        props[NAME] = identifier
    if catalog_name is not None:
        props[CATALOG_NAME] = catalog_name
    return props


def _emit(document: Any) -> None:
    click.echo(json.dumps(document, indent=2))


@click.group()
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, readable=True),
    help="Path to YAML config file.",
)
@click.option(
    "-D",
    "--define",
    "overrides",
    multiple=True,
    help="Configuration override as key=value; may be repeated.",
)
@click.option("--log-level", default="WARNING", show_default=True, help="Logging level.")
@click.option("--structured-logs", is_flag=True, help="Emit JSON log records.")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, writable=True),
    help="Also write log records to this file.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Optional[str],
    overrides: Tuple[str, ...],
    log_level: str,
    structured_logs: bool,
    log_file: Optional[str],
) -> None:
    """Entry point for the tablecat CLI."""
    setup_logging(level=log_level, structured=structured_logs, log_file=log_file)
    ctx.obj = build_configuration(config_path, overrides)


def _address_options(func):
    func = click.option("--catalog", "catalog_name", help="Catalog name.")(func)
    func = click.option("--name", "identifier", help="Table identifier, e.g. ns.table.")(func)
    func = click.option("--location", help="Table location.")(func)
    return func


@cli.command("load")
@_address_options
@click.pass_obj
def load_command(
    config: Configuration,
    location: Optional[str],
    identifier: Optional[str],
    catalog_name: Optional[str],
) -> None:
    """Load a table and print its metadata."""
    try:
        table = load_table(config, _table_props(location, identifier, catalog_name))
    except USER_ERRORS as exc:
        raise click.ClickException(str(exc)) from exc
    _emit(table.describe())


@cli.command("create")
@_address_options
@click.option("--schema", required=True, help="Serialized schema, or @file.")
@click.option("--partition-spec", help="Serialized partition spec, or @file.")
@click.option("-p", "--property", "properties", multiple=True, help="Table property key=value.")
@click.pass_obj
def create_command(
    config: Configuration,
    location: Optional[str],
    identifier: Optional[str],
    catalog_name: Optional[str],
    schema: str,
    partition_spec: Optional[str],
    properties: Tuple[str, ...],
) -> None:
    """Create a table and print its metadata."""
    props = parse_assignments(properties)
    props.update(_table_props(location, identifier, catalog_name))
    props[TABLE_SCHEMA] = _read_text_option(schema)
    spec = _read_text_option(partition_spec)
    if spec is not None:
        props[PARTITION_SPEC] = spec
    try:
        table = create_table(config, props)
    except USER_ERRORS as exc:
        raise click.ClickException(str(exc)) from exc
    _emit(table.describe())


@cli.command("drop")
@_address_options
@click.pass_obj
def drop_command(
    config: Configuration,
    location: Optional[str],
    identifier: Optional[str],
    catalog_name: Optional[str],
) -> None:
    """Drop a table and its data."""
    props = _table_props(location, identifier, catalog_name)
    try:
        drop_table(config, props)
    except USER_ERRORS as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Dropped {location or identifier}")


@cli.command("catalog")
@click.argument("catalog_name", required=False)
@click.pass_obj
def catalog_command(config: Configuration, catalog_name: Optional[str]) -> None:
    """Show how a catalog name resolves."""
    props = _table_props(None, None, catalog_name)
    try:
        resolved = catalog_type(config, catalog_name)
        hive = is_hive_catalog(config, props)
    except USER_ERRORS as exc:
        raise click.ClickException(str(exc)) from exc
    _emit(
        {
            "name": catalog_name,
            "type": resolved,
            "hive": hive,
            "properties": catalog_properties(config, catalog_name),
        }
    )


@cli.command("tables")
@click.argument("namespace")
@click.option("--catalog", "catalog_name", help="Catalog name.")
@click.pass_obj
def tables_command(config: Configuration, namespace: str, catalog_name: Optional[str]) -> None:
    """List the tables of a namespace."""
    try:
        identifiers = list_tables(config, namespace, catalog_name)
    except USER_ERRORS as exc:
        raise click.ClickException(str(exc)) from exc
    names: List[str] = [str(identifier) for identifier in identifiers]
    _emit(names)


if __name__ == "__main__":
    cli()
