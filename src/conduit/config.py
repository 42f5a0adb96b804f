"""Provider configuration.

ProviderConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ProviderConfig:
    """Provider configuration. Immutable after creation.

    Only ``authority`` has no usable default. Override what you need::

        config = ProviderConfig(authority="com.example.notes", database_url="sqlite:///notes.db")
    """

    # Namespace of every identifier this provider serves
    authority: str = ""
    scheme: str = "content"

    # Backing store
    database_url: str = "sqlite:///:memory:"
    pool_size: int = 5
    echo: bool = False  # Print every statement to stderr
    id_column: str = "id"  # Primary key column returned by INSERT
