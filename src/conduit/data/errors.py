"""Backing store error hierarchy.

The dispatcher propagates these unmodified: no retry, no translation.
"""

from conduit.errors import ConduitError


class BackingStoreError(ConduitError):
    """Base for all conduit.data errors."""


class DriverNotInstalledError(BackingStoreError):
    """Raised when the required database driver is not installed."""


class ConnectionError(BackingStoreError):  # noqa: A001 — intentional shadow of builtin
    """Raised when a database connection cannot be established."""


class QueryError(BackingStoreError):
    """Raised when a SQL statement fails."""
