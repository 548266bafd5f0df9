"""Errors raised while resolving catalogs and dispatching table operations."""


class MissingValueError(ValueError):
    """A required per-call table property was not supplied."""


class UnsupportedOperationError(Exception):
    """The configured catalog type or implementation cannot be used."""


class NoSuchTableError(Exception):
    """The addressed table does not exist."""


class AlreadyExistsError(Exception):
    """A table already exists at the addressed identifier or location."""
