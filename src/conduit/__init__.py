"""Conduit — identifier routing and CRUD dispatch for table-backed resources.

Maps ``content://<authority>/<table>[/<id>]`` identifiers onto registered
entity types, forwards create/read/update/delete calls to a backing store,
labels every resource class with a stable content type, and tells
observers when something changed.

Basic usage::

    from conduit import Provider, ProviderConfig

    provider = Provider(ProviderConfig(authority="com.example.notes", database_url="sqlite:///notes.db"))

    @provider.table("Note")
    @dataclass(frozen=True, slots=True)
    class Note:
        id: int
        title: str

    async with provider:
        created = await provider.insert(provider.create_identifier(Note), {"title": "hi"})
        provider.get_type(created)   # "vnd.com.example.notes.item/vnd.com.example.notes.Note"

PostgreSQL (``pip install conduit[pg]``)::

    ProviderConfig(authority="com.example.notes", database_url="postgresql://user@host/db")
"""

__version__ = "0.1.0"
__all__ = [
    "Cardinality",
    "Catalog",
    "ChangeNotifier",
    "ChangeObservers",
    "ConduitError",
    "ConfigurationError",
    "Dispatcher",
    "Identifier",
    "MimeTypeCache",
    "Provider",
    "ProviderConfig",
    "Router",
    "RoutingError",
    "TableInfo",
    "UnknownEntityError",
    "build_identifier",
    "parse_id",
    "table",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import conduit`` fast while providing a clean top-level API.
    """
    if name == "Provider":
        from conduit.provider import Provider

        return Provider

    if name == "ProviderConfig":
        from conduit.config import ProviderConfig

        return ProviderConfig

    if name == "Dispatcher":
        from conduit.dispatcher import Dispatcher

        return Dispatcher

    if name in ("Router", "Cardinality"):
        from conduit import routing as _routing

        return getattr(_routing, name)

    if name == "MimeTypeCache":
        from conduit.mime import MimeTypeCache

        return MimeTypeCache

    if name in ("ChangeNotifier", "ChangeObservers"):
        from conduit import notify as _notify

        return getattr(_notify, name)

    if name in ("Catalog", "TableInfo", "table"):
        from conduit import catalog as _catalog

        return getattr(_catalog, name)

    if name in ("Identifier", "build_identifier", "parse_id"):
        from conduit import identifiers as _identifiers

        return getattr(_identifiers, name)

    if name in ("ConduitError", "ConfigurationError", "RoutingError", "UnknownEntityError"):
        from conduit import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
