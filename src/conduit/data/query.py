"""Immutable SELECT builder.

Accumulates SQL clauses through chaining methods, compiles to a SQL string
plus a parameters tuple, and executes via ``Database.fetch_rows``.

Each method returns a new frozen ``Query``; the original is never mutated.

Usage::

    result = await (
        Query("note")
        .select("id, title")
        .where("archived = ?", False)
        .where_if(search, "title LIKE ?", f"%{search}%")
        .order_by("id DESC")
        .take(20)
        .fetch(db)
    )

Transparency: ``.sql`` and ``.params`` show exactly what will run.

Free-threading safety:
    - Frozen dataclass, immutable after creation
    - Tuple accumulators, no shared mutable state
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from conduit.data.database import Database
    from conduit.data.results import ResultSet

type Clause = tuple[str, tuple[object, ...]]


@dataclass(frozen=True, slots=True)
class Query:
    """Immutable SELECT query builder over one table."""

    _table: str
    _columns: str = "*"
    _wheres: tuple[Clause, ...] = ()
    _group_by: str | None = None
    _having: Clause | None = None
    _order: str | None = None
    _limit: int | None = None
    _offset: int | None = None

    # ── Building ─────────────────────────────────────────────────────────

    def select(self, columns: str) -> Query:
        """Set which columns to SELECT. Default is ``*``."""
        return replace(self, _columns=columns)

    def where(self, clause: str, /, *params: object) -> Query:
        """Add a WHERE clause. Multiple calls are ANDed, each parenthesized.

        ::

            Query("note").where("archived = ?", False).where("id > ?", 10)
            # WHERE (archived = ?) AND (id > ?)
        """
        return replace(self, _wheres=(*self._wheres, (clause, params)))

    def where_if(self, condition: object, clause: str, /, *params: object) -> Query:
        """Add a WHERE clause only if ``condition`` is truthy."""
        if not condition:
            return self
        return self.where(clause, *params)

    def group_by(self, clause: str) -> Query:
        return replace(self, _group_by=clause)

    def having(self, clause: str, /, *params: object) -> Query:
        """Set HAVING. Replaces any previous HAVING.

        Only takes effect together with ``group_by``: without a GROUP BY
        the clause and its params are left out of both ``.sql`` and
        ``.params``.

        ::

            Query("tag").having("COUNT(*) > ?", 1).sql
            # SELECT * FROM tag
        """
        return replace(self, _having=(clause, params))

    def order_by(self, clause: str) -> Query:
        """Set ORDER BY. Replaces any previous ordering."""
        return replace(self, _order=clause)

    def take(self, n: int) -> Query:
        """Set LIMIT (max rows to return)."""
        return replace(self, _limit=n)

    def skip(self, n: int) -> Query:
        """Set OFFSET (rows to skip)."""
        return replace(self, _offset=n)

    # ── Compilation ──────────────────────────────────────────────────────

    def _where_sql(self) -> str:
        if len(self._wheres) == 1:
            return f" WHERE {self._wheres[0][0]}"
        if self._wheres:
            return " WHERE " + " AND ".join(f"({w[0]})" for w in self._wheres)
        return ""

    @property
    def sql(self) -> str:
        """The exact SQL that will run."""
        parts = [f"SELECT {self._columns} FROM {self._table}{self._where_sql()}"]
        if self._group_by:
            parts.append(f"GROUP BY {self._group_by}")
            if self._having is not None:
                parts.append(f"HAVING {self._having[0]}")
        if self._order:
            parts.append(f"ORDER BY {self._order}")
        if self._limit is not None:
            parts.append(f"LIMIT {self._limit}")
        if self._offset is not None:
            parts.append(f"OFFSET {self._offset}")
        return " ".join(parts)

    @property
    def params(self) -> tuple[object, ...]:
        """The bound parameters, in placeholder order."""
        result: list[object] = []
        for _, p in self._wheres:
            result.extend(p)
        if self._group_by and self._having is not None:
            result.extend(self._having[1])
        return tuple(result)

    # ── Execution ────────────────────────────────────────────────────────

    async def fetch(self, db: Database) -> ResultSet:
        return await db.fetch_rows(self.sql, *self.params)

    async def count(self, db: Database) -> int:
        """COUNT(*) with the same WHERE clauses; ignores everything else."""
        sql = f"SELECT COUNT(*) FROM {self._table}{self._where_sql()}"
        params = tuple(p for _, ps in self._wheres for p in ps)
        return int(await db.fetch_val(sql, *params) or 0)

    async def exists(self, db: Database) -> bool:
        """Check if at least one matching row exists (``SELECT 1 ... LIMIT 1``)."""
        sql = f"SELECT 1 FROM {self._table}{self._where_sql()} LIMIT 1"
        params = tuple(p for _, ps in self._wheres for p in ps)
        return await db.fetch_val(sql, *params) is not None
