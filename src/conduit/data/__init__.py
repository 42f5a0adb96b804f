"""Backing store for conduit — async table-level CRUD.

SQL in, rows out. Not an ORM.

Basic usage::

    from conduit.data import Database, TableStore

    db = Database("sqlite:///notes.db")
    store = TableStore(db)

    note_id = await store.insert("Note", {"title": "hello"})
    rows = await store.query("Note", None, "id = ?", [note_id], None, None, None)

SQLite works out of the box. PostgreSQL needs ``asyncpg``::

    pip install conduit[pg]
"""

from conduit.data.database import Database
from conduit.data.errors import (
    BackingStoreError,
    ConnectionError,
    DriverNotInstalledError,
    QueryError,
)
from conduit.data.query import Query
from conduit.data.results import ResultSet
from conduit.data.store import BackingStore, TableStore

__all__ = [
    "BackingStore",
    "BackingStoreError",
    "ConnectionError",
    "Database",
    "DriverNotInstalledError",
    "Query",
    "QueryError",
    "ResultSet",
    "TableStore",
]
