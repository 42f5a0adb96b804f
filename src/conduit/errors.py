"""Conduit exception hierarchy.

Shared across Router, Dispatcher, and Provider so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class ConduitError(Exception):
    """Base for all conduit-specific errors."""


class ConfigurationError(ConduitError):
    """Raised when provider configuration or the table catalog is invalid.

    Typically caught during ``Provider.startup()``.
    """


@dataclass(slots=True, eq=False)
class RoutingError(ConduitError):
    """An identifier that does not address any registered route.

    Raised before the backing store is touched. Callers should treat it
    as invalid input; it is never retried.
    """

    identifier: str
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.identifier}: {self.detail}"
        return f"No route matches {self.identifier!r}"


class UnknownEntityError(ConduitError):
    """Raised when building an identifier for an entity type that was never registered."""
