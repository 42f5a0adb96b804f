"""Startup catalog of (table name, entity type) pairs.

Entity types are usually frozen dataclasses describing a row. The
declared table name comes from the ``@table`` decorator and falls back
to the class name::

    @table("Notes")
    @dataclass(frozen=True, slots=True)
    class Note:
        id: int
        title: str

    catalog = Catalog.of(Note, Tag)
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import overload

_TABLE_ATTR = "__conduit_table__"


@dataclass(frozen=True, slots=True)
class TableInfo:
    """A registered entity type and its declared table name (original casing)."""

    table_name: str
    entity_type: type


def table[T: type](name: str) -> Callable[[T], T]:
    """Class decorator declaring the table an entity type lives in."""
    if not name or "/" in name:
        msg = f"Invalid table name: {name!r}"
        raise ValueError(msg)

    def decorator(cls: T) -> T:
        setattr(cls, _TABLE_ATTR, name)
        return cls

    return decorator


def table_name_of(entity_type: type) -> str:
    """Declared table name of ``entity_type``, defaulting to its class name."""
    # Read from the class dict so subclasses don't inherit a parent's table
    return entity_type.__dict__.get(_TABLE_ATTR, entity_type.__name__)


class Catalog(Sequence[TableInfo]):
    """Ordered, immutable collection of ``TableInfo``.

    Order matters: the i-th entry receives route codes ``2i + 1`` and ``2i + 2``.
    """

    __slots__ = ("_tables",)

    def __init__(self, tables: Sequence[TableInfo] = ()) -> None:
        self._tables: tuple[TableInfo, ...] = tuple(tables)

    @classmethod
    def of(cls, *entity_types: type) -> Catalog:
        return cls([TableInfo(table_name_of(t), t) for t in entity_types])

    @overload
    def __getitem__(self, index: int) -> TableInfo: ...
    @overload
    def __getitem__(self, index: slice) -> Catalog: ...

    def __getitem__(self, index: int | slice) -> TableInfo | Catalog:
        if isinstance(index, slice):
            return Catalog(self._tables[index])
        return self._tables[index]

    def __len__(self) -> int:
        return len(self._tables)

    def __iter__(self) -> Iterator[TableInfo]:
        return iter(self._tables)

    def __repr__(self) -> str:
        names = ", ".join(t.table_name for t in self._tables)
        return f"Catalog({names})"
