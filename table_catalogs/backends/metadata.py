"""Versioned table metadata files stored through pyarrow filesystems.

Layout below a table location::

    <location>/metadata/v<N>.metadata.json
    <location>/metadata/version-hint.text      (holds N)
"""

import json
import os
import time
import uuid
import logging
from typing import Any, Dict, Optional, Tuple

import pyarrow.fs as pafs

from ..catalog.table import Table, TableIdentifier, UNPARTITIONED_SPEC

logger = logging.getLogger(__name__)

METADATA_DIR = "metadata"
VERSION_HINT = "version-hint.text"
FORMAT_VERSION = 1


def resolve_filesystem(location: str) -> Tuple[pafs.FileSystem, str]:
    """Resolve a location to a filesystem and a path within it.

    Args:
        location: Local path or URI such as ``s3://bucket/path``

    Returns:
        Tuple of (filesystem, path)
    """
    if "://" not in location:
        return pafs.LocalFileSystem(), os.path.abspath(location)
    return pafs.FileSystem.from_uri(location)


def join_location(base: str, *parts: str) -> str:
    """Join location segments with ``/`` regardless of platform."""
    location = base.rstrip("/")
    for part in parts:
        location = f"{location}/{part.strip('/')}"
    return location


class TableMetadataFiles:
    """Metadata files of the table stored at one location."""

    def __init__(self, location: str):
        self.location = location.rstrip("/")
        self.fs, self.path = resolve_filesystem(self.location)
        self._metadata_path = join_location(self.path, METADATA_DIR)

    def _file_exists(self, path: str) -> bool:
        info = self.fs.get_file_info(path)
        return info.type == pafs.FileType.File

    def _read_text(self, path: str) -> str:
        with self.fs.open_input_stream(path) as stream:
            return stream.read().decode("utf-8")

    def _write_text(self, path: str, text: str) -> None:
        with self.fs.open_output_stream(path) as stream:
            stream.write(text.encode("utf-8"))

    def metadata_file(self, version: int) -> str:
        return join_location(self.location, METADATA_DIR, f"v{version}.metadata.json")

    def current_version(self) -> Optional[int]:
        """Version named by the hint file, None if no table exists here."""
        hint_path = join_location(self._metadata_path, VERSION_HINT)
        if not self._file_exists(hint_path):
            return None
        return int(self._read_text(hint_path).strip())

    def exists(self) -> bool:
        return self.current_version() is not None

    def read(self, identifier: Optional[TableIdentifier] = None) -> Optional[Table]:
        """Read the current metadata.

        Args:
            identifier: Identifier to attach to the handle, for catalog tables

        Returns:
            Table handle, or None if no table exists at this location
        """
        version = self.current_version()
        if version is None:
            return None
        return read_metadata_file(self.metadata_file(version), identifier)

    def write_new(
        self,
        schema: str,
        spec: Optional[str],
        properties: Optional[Dict[str, str]],
        identifier: Optional[TableIdentifier] = None,
    ) -> Table:
        """Write version 1 metadata for a new table.

        Args:
            schema: Serialized schema, stored verbatim
            spec: Serialized partition spec, unpartitioned when None
            properties: Table properties
            identifier: Identifier to attach to the handle

        Returns:
            Handle of the created table
        """
        document: Dict[str, Any] = {
            "format-version": FORMAT_VERSION,
            "table-uuid": str(uuid.uuid4()),
            "location": self.location,
            "last-updated-ms": int(time.time() * 1000),
            "schema": schema,
            "partition-spec": spec if spec is not None else UNPARTITIONED_SPEC,
            "properties": dict(properties or {}),
        }
        version = 1
        self.fs.create_dir(self._metadata_path, recursive=True)
        self._write_text(
            join_location(self._metadata_path, f"v{version}.metadata.json"),
            json.dumps(document, indent=2),
        )
        self._write_text(join_location(self._metadata_path, VERSION_HINT), str(version))
        metadata_location = self.metadata_file(version)
        logger.debug(f"Wrote table metadata {metadata_location}")
        return table_from_metadata(document, metadata_location, identifier)

    def delete(self, purge: bool = True) -> None:
        """Delete the metadata directory, or the whole location when purging."""
        target = self.path if purge else self._metadata_path
        if self.fs.get_file_info(target).type == pafs.FileType.Directory:
            self.fs.delete_dir(target)
            logger.debug(f"Deleted {target}")


def read_metadata_file(
    metadata_location: str, identifier: Optional[TableIdentifier] = None
) -> Optional[Table]:
    """Read a specific metadata file, None if it is gone."""
    fs, path = resolve_filesystem(metadata_location)
    if fs.get_file_info(path).type != pafs.FileType.File:
        return None
    with fs.open_input_stream(path) as stream:
        document = json.loads(stream.read().decode("utf-8"))
    return table_from_metadata(document, metadata_location, identifier)


def table_from_metadata(
    document: Dict[str, Any],
    metadata_location: str,
    identifier: Optional[TableIdentifier] = None,
) -> Table:
    """Build a table handle from a metadata document."""
    return Table(
        location=document["location"],
        schema=document["schema"],
        spec=document.get("partition-spec", UNPARTITIONED_SPEC),
        properties=dict(document.get("properties", {})),
        identifier=identifier,
        metadata_location=metadata_location,
        table_uuid=document.get("table-uuid"),
        format_version=document.get("format-version", FORMAT_VERSION),
        last_updated_ms=document.get("last-updated-ms", 0),
    )
