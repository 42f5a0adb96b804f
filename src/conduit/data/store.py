"""Table-level CRUD over a ``Database``.

``TableStore`` is the backing store the dispatcher talks to. It only
knows tables, value dicts and selection strings; routing and
notification happen a layer above.

Selections use ``?`` placeholders on every driver. For PostgreSQL they
are renumbered to ``$1, $2, ...`` after the generated placeholders, so
callers never count parameters themselves. Table and column names are
double-quoted; projections and selections are passed through verbatim.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from conduit.data.database import Database
from conduit.data.query import Query
from conduit.data.results import ResultSet

type Values = Mapping[str, Any]
type SelectionArgs = Sequence[Any]


class BackingStore(Protocol):
    """What the dispatcher needs from storage."""

    async def insert(self, table: str, values: Values) -> int | None: ...

    async def update(
        self,
        table: str,
        values: Values,
        selection: str | None,
        selection_args: SelectionArgs,
    ) -> int: ...

    async def delete(
        self,
        table: str,
        selection: str | None,
        selection_args: SelectionArgs,
    ) -> int: ...

    async def query(
        self,
        table: str,
        projection: Sequence[str] | None,
        selection: str | None,
        selection_args: SelectionArgs,
        group_by: str | None,
        having: str | None,
        sort_order: str | None,
    ) -> ResultSet: ...


def quote_identifier(name: str) -> str:
    """Double-quote a table or column name, escaping embedded quotes."""
    return '"' + name.replace('"', '""') + '"'


def number_placeholders(sql: str) -> str:
    """Rewrite ``?`` placeholders as ``$1, $2, ...`` (PostgreSQL style).

    Question marks inside single-quoted literals are left alone.
    """
    out: list[str] = []
    index = 0
    in_literal = False
    for char in sql:
        if char == "'":
            in_literal = not in_literal
        elif char == "?" and not in_literal:
            index += 1
            out.append(f"${index}")
            continue
        out.append(char)
    return "".join(out)


class TableStore:
    """``BackingStore`` implementation on top of ``Database``.

    Usage::

        store = TableStore(Database("sqlite:///notes.db"))
        note_id = await store.insert("Note", {"title": "hello"})
        rows = await store.query("Note", None, "id = ?", [note_id], None, None, None)
    """

    __slots__ = ("_db", "_id_column")

    def __init__(self, db: Database, *, id_column: str = "id") -> None:
        self._db = db
        self._id_column = id_column

    @property
    def db(self) -> Database:
        return self._db

    def _sql(self, sql: str) -> str:
        if self._db.driver == "postgresql":
            return number_placeholders(sql)
        return sql

    @staticmethod
    def _where(selection: str | None) -> str:
        return f" WHERE {selection}" if selection else ""

    @staticmethod
    def _args(selection: str | None, selection_args: SelectionArgs) -> SelectionArgs:
        # Args only bind to placeholders inside the selection
        return selection_args if selection else ()

    async def insert(self, table: str, values: Values) -> int | None:
        """Insert one row and return its generated id, or ``None``."""
        if values:
            columns = ", ".join(quote_identifier(c) for c in values)
            placeholders = ", ".join("?" for _ in values)
            sql = f"INSERT INTO {quote_identifier(table)} ({columns}) VALUES ({placeholders})"
        else:
            sql = f"INSERT INTO {quote_identifier(table)} DEFAULT VALUES"
        if self._db.driver == "postgresql":
            sql += f" RETURNING {quote_identifier(self._id_column)}"
        return await self._db.execute_insert(self._sql(sql), *values.values())

    async def update(
        self,
        table: str,
        values: Values,
        selection: str | None,
        selection_args: SelectionArgs,
    ) -> int:
        if not values:
            msg = f"UPDATE on {table!r} needs at least one column value"
            raise ValueError(msg)
        assignments = ", ".join(f"{quote_identifier(c)} = ?" for c in values)
        sql = f"UPDATE {quote_identifier(table)} SET {assignments}{self._where(selection)}"
        params = (*values.values(), *self._args(selection, selection_args))
        return await self._db.execute(self._sql(sql), *params)

    async def delete(
        self,
        table: str,
        selection: str | None,
        selection_args: SelectionArgs,
    ) -> int:
        sql = f"DELETE FROM {quote_identifier(table)}{self._where(selection)}"
        return await self._db.execute(self._sql(sql), *self._args(selection, selection_args))

    async def query(
        self,
        table: str,
        projection: Sequence[str] | None,
        selection: str | None,
        selection_args: SelectionArgs,
        group_by: str | None,
        having: str | None,
        sort_order: str | None,
    ) -> ResultSet:
        query = Query(quote_identifier(table))
        if projection:
            query = query.select(", ".join(projection))
        if selection:
            query = query.where(selection, *selection_args)
        if group_by:
            query = query.group_by(group_by)
            if having:
                query = query.having(having)
        if sort_order:
            query = query.order_by(sort_order)
        return await self._db.fetch_rows(self._sql(query.sql), *query.params)
